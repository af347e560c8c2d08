# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolution of constraint descriptors along the inheritance chain."""

from __future__ import annotations

from classvalid.metadata import DescriptorStore
from classvalid.model import FieldDescriptor, TypeDescriptor

# ###############
# Public Interface
# ###############


def resolve_descriptor(store: DescriptorStore, cls: type) -> TypeDescriptor | None:
    """Merge the descriptors of *cls* and its ancestors.

    The ancestor is the first base class other than ``object``. Fields are
    merged by name and, for names present on both sides, property by property;
    the nearest explicitly set value wins. Validation options and the global
    constraint are taken from *cls* if set there, otherwise inherited.

    Args:
        store: The store holding own descriptors.
        cls: The type to resolve.

    Returns:
        The resolved descriptor, or None if nothing in the chain is annotated.
    """
    own = store.get_own(cls)
    parent = parent_of(cls)
    if parent is None:
        return own
    inherited = resolve_descriptor(store, parent)
    if own is None:
        return inherited
    if inherited is None:
        return own
    return _merge(inherited, own)


def parent_of(cls: type) -> type | None:
    """Return the nearest ancestor that may carry descriptors."""
    for base in cls.__bases__:
        if base is not object:
            return base
    return None


# ################
# Implementation
# ################


def _merge(inherited: TypeDescriptor, own: TypeDescriptor) -> TypeDescriptor:
    fields = dict(inherited.fields)
    for name, field in own.fields.items():
        fields[name] = _merge_field(fields[name], field) if name in fields else field
    update: dict[str, object] = {"fields": fields}
    if own.validation_options is not None:
        update["validation_options"] = own.validation_options
    if own.global_constraint is not None:
        update["global_constraint"] = own.global_constraint
    return inherited.model_copy(update=update)


def _merge_field(inherited: FieldDescriptor, own: FieldDescriptor) -> FieldDescriptor:
    """Overlay the explicitly set properties of *own* onto *inherited*."""
    return inherited.model_copy(update=own.explicit())
