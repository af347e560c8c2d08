# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Per-type storage of own (non-inherited) constraint descriptors."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from classvalid.model import FieldDescriptor, TypeDescriptor

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class DescriptorStore:
    """Maps each annotated type to the descriptor recorded directly on it.

    Entries are keyed by class identity and are never evicted. Descriptors are
    immutable; every merge replaces the stored descriptor with an updated copy.
    """

    def __init__(self) -> None:
        self._own: dict[type, TypeDescriptor] = {}

    def get_own(self, cls: type) -> TypeDescriptor | None:
        """Return the descriptor recorded on *cls* itself, ignoring its ancestors."""
        return self._own.get(cls)

    def merge_own(self, cls: type, patch: Mapping[str, Any]) -> TypeDescriptor:
        """Shallow-merge *patch* into the own descriptor of *cls*, creating it if absent.

        The ``fields`` entry of the patch maps field names to property patches;
        each is merged into the existing field descriptor property by property.
        The other entries replace the descriptor's value.

        Args:
            cls: The annotated type.
            patch: Keys of TypeDescriptor with their new values.

        Returns:
            The updated descriptor.

        Raises:
            ValueError: If the patch names an unknown descriptor property.
        """
        current = self._own.get(cls) or TypeDescriptor()
        update: dict[str, Any] = {}
        for key, value in patch.items():
            if key == "fields":
                fields = dict(current.fields)
                for name, field_patch in value.items():
                    fields[name] = _merge_field(fields.get(name), field_patch, cls, name)
                update["fields"] = fields
            elif key in TypeDescriptor.model_fields:
                update[key] = value
            else:
                raise ValueError(f"Unknown type descriptor property '{key}' for {cls.__qualname__}")
        merged = current.model_copy(update=update)
        self._own[cls] = merged
        logger.debug("Merged %s into descriptor of %s", sorted(patch), cls.__qualname__)
        return merged

    def types(self) -> Iterator[type]:
        """Iterate over every type with an own descriptor."""
        return iter(list(self._own))

    def __contains__(self, cls: object) -> bool:
        return cls in self._own

    def __len__(self) -> int:
        return len(self._own)


# ################
# Implementation
# ################


def _merge_field(
    existing: FieldDescriptor | None, patch: Mapping[str, Any], cls: type, name: str
) -> FieldDescriptor:
    """Overlay a property patch onto a field descriptor without validating the values."""
    unknown = set(patch) - set(FieldDescriptor.model_fields)
    if unknown:
        raise ValueError(f"Unknown field properties {sorted(unknown)} for {cls.__qualname__}.{name}")
    return (existing or FieldDescriptor()).model_copy(update=dict(patch))
