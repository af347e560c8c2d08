# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Annotators that record field-level and type-level constraints in a store."""

from __future__ import annotations

import builtins
import inspect
import logging
import sys
from typing import Any

from classvalid.metadata.store import DescriptorStore
from classvalid.model import design_of, schema_args
from classvalid.schema import ValidationOptions

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def annotate_field(store: DescriptorStore, cls: type, name: str, **patch: Any) -> None:
    """Record constraints for one field of a type.

    On the first annotation of a field the design type and item type are
    resolved from the class annotations; values given in *patch* win. An
    annotation naming a type that is not defined yet leaves the design type
    unset, and the compiler resolves it later.
    Constraint consistency is not checked here, conflicts surface when the
    type is compiled.

    Args:
        store: The store holding the type's own descriptor.
        cls: The type that declares the field.
        name: The field name.
        **patch: FieldDescriptor properties to set.
    """
    own = store.get_own(cls)
    existing = own.fields.get(name) if own is not None else None
    if existing is None or "design_type" not in existing.model_fields_set:
        try:
            design_type, item_type = field_design(cls, name)
        except NameError as e:
            logger.debug("Deferring design type of %s.%s to compile time: %s", cls.__qualname__, name, e)
            design_type, item_type = None, None
        resolved: dict[str, Any] = {}
        if design_type is not None:
            resolved["design_type"] = design_type
        if item_type is not None:
            resolved["item_type"] = item_type
        patch = {**resolved, **patch}
    if "custom_schema" in patch and patch["custom_schema"] is not None:
        patch["custom_schema"] = schema_args(patch["custom_schema"])
    store.merge_own(cls, {"fields": {name: patch}})


def annotate_type(store: DescriptorStore, cls: type, **patch: Any) -> None:
    """Record type-level constraints.

    Args:
        store: The store holding the type's own descriptor.
        cls: The annotated type.
        **patch: ``validation_options`` (options or a mapping) and/or ``global_constraint``
            (a schema or a schema-transforming callable).
    """
    if patch.get("validation_options") is not None:
        patch["validation_options"] = ValidationOptions.coerce(patch["validation_options"])
    if patch.get("global_constraint") is not None:
        patch["global_constraint"] = schema_args(patch["global_constraint"])
    store.merge_own(cls, patch)


def own_annotations(cls: type, lenient: bool = False) -> dict[str, Any]:
    """Return the attribute annotations declared directly on *cls*.

    String annotations are evaluated one by one in the namespace of the
    class's module. An annotation naming something that is not defined yet
    stays a string, unless *lenient* is set: then the missing names evaluate
    to placeholders so that the ``Annotated`` metadata of the annotation is
    still recovered.

    Raises:
        NameError: In lenient mode, if an undefined name is called, since a
            constraint marker cannot be built from it.
    """
    module = sys.modules.get(cls.__module__)
    module_globals = dict(vars(module)) if module is not None else {}
    class_locals = dict(vars(cls))
    evaluated: dict[str, Any] = {}
    for name, annotation in inspect.get_annotations(cls).items():
        if isinstance(annotation, str):
            annotation = _evaluate(annotation, module_globals, class_locals, lenient)
        evaluated[name] = annotation
    return evaluated


def field_design(cls: type, name: str) -> tuple[Any, Any]:
    """Find the annotation of *name* along the MRO of *cls* and derive its design types.

    Returns:
        ``(design_type, item_type)``, or ``(None, None)`` if no class in the MRO annotates *name*.

    Raises:
        NameError: If the annotation refers to a name that is not defined.
    """
    for klass in cls.__mro__:
        annotations = own_annotations(klass)
        if name in annotations:
            annotation = annotations[name]
            if isinstance(annotation, str):
                raise NameError(f"Cannot resolve annotation {annotation!r} of {klass.__qualname__}.{name}")
            return design_of(annotation)
    return None, None


# ################
# Implementation
# ################


def _evaluate(expression: str, module_globals: dict[str, Any], class_locals: dict[str, Any], lenient: bool) -> Any:
    try:
        return eval(expression, module_globals, class_locals)
    except NameError:
        if not lenient:
            return expression
    return eval(expression, module_globals, _LenientNamespace(class_locals, module_globals))


class _UnresolvedMeta(type):
    """Metaclass of the placeholders standing in for undefined names."""

    def __getattr__(cls, attribute: str) -> Any:
        if attribute.startswith("_"):
            raise AttributeError(attribute)
        return _placeholder(f"{cls.__name__}.{attribute}")

    def __getitem__(cls, item: Any) -> Any:
        return cls

    def __call__(cls, *args: Any, **kwargs: Any) -> Any:
        raise NameError(f"name {cls.__name__!r} is not defined")


def _placeholder(name: str) -> type:
    return _UnresolvedMeta(name, (), {})


class _LenientNamespace(dict):
    """Class namespace that resolves undefined names to placeholders."""

    def __init__(self, class_locals: dict[str, Any], module_globals: dict[str, Any]) -> None:
        super().__init__(class_locals)
        self._module_globals = module_globals

    def __missing__(self, name: str) -> Any:
        if name in self._module_globals:
            return self._module_globals[name]
        if hasattr(builtins, name):
            return getattr(builtins, name)
        return _placeholder(name)
