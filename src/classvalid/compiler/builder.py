# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compilation of resolved descriptors into cached validation schemas."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from classvalid import schema as s
from classvalid.compiler.resolver import resolve_descriptor
from classvalid.metadata import DescriptorStore, field_design
from classvalid.model import Bound, FieldDescriptor, Kind, Replacement, Transform, TypeDescriptor, as_bound, kind_of
from classvalid.schema import Schema

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class CompilerError(Exception):
    """Raised when descriptors cannot be compiled into a schema.

    Covers conflicting kind assumptions, circular type references and schema
    arguments that do not produce a schema.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


class SchemaCompiler:
    """Builds object schemas from resolved descriptors and caches them per type.

    The cache is never invalidated. After changing a type's descriptors,
    compile it with ``use_cache=False`` to see the change.
    """

    def __init__(self, store: DescriptorStore) -> None:
        self._store = store
        self._cache: dict[type, Schema] = {}

    def compile(self, cls: type, use_cache: bool = True) -> Schema:
        """Return the validation schema for *cls*.

        Args:
            cls: The type to compile.
            use_cache: Return a cached schema if one exists and cache the result.
                When False the schema is rebuilt and not stored.

        Returns:
            The compiled schema. An unannotated type compiles to an object schema without key rules.

        Raises:
            CompilerError: If the descriptors of *cls* or of a referenced type are inconsistent.
        """
        if use_cache:
            cached = self._cache.get(cls)
            if cached is not None:
                logger.debug("Schema cache hit for %s", cls.__qualname__)
                return cached
        compiled = self._build_root(cls)
        if use_cache:
            self._cache[cls] = compiled
        return compiled

    def describe(self, cls: type, use_cache: bool = True) -> dict[str, Any]:
        """Return the description of the compiled schema for *cls*."""
        return self.compile(cls, use_cache).describe()

    def is_cached(self, cls: type) -> bool:
        return cls in self._cache

    def _build_root(self, cls: type) -> Schema:
        descriptor = resolve_descriptor(self._store, cls)
        if descriptor is None:
            logger.debug("No descriptors for %s, compiling an unconstrained object", cls.__qualname__)
            return s.object_(name=cls.__name__)
        root: Schema = self._build_object(cls, descriptor, {cls})
        if descriptor.global_constraint is not None:
            root = _apply(descriptor.global_constraint, root, cls.__qualname__)
        logger.debug("Compiled schema for %s with %d field(s)", cls.__qualname__, len(descriptor.fields))
        return root

    def _build_object(self, cls: type, descriptor: TypeDescriptor, in_progress: set[type]) -> Schema:
        keys = {
            name: self._build_field(f"{cls.__qualname__}.{name}", _with_design(cls, name, field), in_progress)
            for name, field in descriptor.fields.items()
        }
        built = s.object_(keys, name=cls.__name__)
        if descriptor.validation_options is not None:
            built = built.options(descriptor.validation_options)
        return built

    def _build_field(self, where: str, field: FieldDescriptor, in_progress: set[type]) -> Schema:
        kind = Kind.DATE if field.date_string else kind_of(field.design_type)
        _check_kind_conflicts(where, field, kind)

        nested_global = None
        if kind is Kind.OBJECT and not _is_mapping_type(field.design_type):
            nested_type = field.design_type
            if nested_type in in_progress:
                raise CompilerError(f"Circular type reference detected at '{where}' ({nested_type.__qualname__})")
            nested = resolve_descriptor(self._store, nested_type)
            if nested is None:
                built: Schema = s.object_(name=nested_type.__name__)
            else:
                in_progress.add(nested_type)
                try:
                    built = self._build_object(nested_type, nested, in_progress)
                finally:
                    in_progress.discard(nested_type)
                nested_global = nested.global_constraint
        elif kind is Kind.ARRAY:
            built = _build_array(field)
            if field.item_type is not None:
                item = self._build_field(f"{where}[]", FieldDescriptor(design_type=field.item_type), in_progress)
                built = built.items(item)
        else:
            built = _SCALAR_BUILDERS[kind](field)

        if field.nullable:
            built = built.allow(None)
        if field.allowed_values is not None:
            built = built.valid(*field.allowed_values)
        built = built.required() if field.required else built.optional()
        if field.custom_schema is not None:
            built = _apply(field.custom_schema, built, where)
        if nested_global is not None:
            built = _apply(nested_global, built, where)
        if field.conditional is not None:
            conditional = field.conditional
            built = built.when(
                conditional.predicate,
                then=_apply(conditional.on_true, built, where) if conditional.on_true is not None else None,
                otherwise=_apply(conditional.on_false, built, where) if conditional.on_false is not None else None,
            )
        return built


# ################
# Implementation
# ################

_KIND_PROPERTIES: dict[Kind, frozenset[str]] = {
    Kind.STRING: frozenset(
        {
            "min_length",
            "max_length",
            "nonempty",
            "alphanum",
            "token",
            "email",
            "hostname",
            "iso_date",
            "iso_duration",
            "credit_card",
            "pattern",
        }
    ),
    Kind.NUMBER: frozenset(
        {"min_value", "max_value", "integer", "precision", "multiple_of", "positive", "negative", "port", "unsafe"}
    ),
    Kind.DATE: frozenset({"date_string", "iso", "date_format", "min_date", "max_date"}),
    Kind.ARRAY: frozenset({"item_type", "min_length", "max_length", "nonempty"}),
}
_KIND_SPECIFIC = frozenset().union(*_KIND_PROPERTIES.values())


def _check_kind_conflicts(where: str, field: FieldDescriptor, kind: Kind) -> None:
    """Reject truthy properties that only make sense for another kind."""
    if kind is Kind.ANY:
        return
    allowed = _KIND_PROPERTIES.get(kind, frozenset())
    conflicting = sorted(
        name
        for name in field.model_fields_set & _KIND_SPECIFIC
        if name not in allowed and getattr(field, name) not in (None, False)
    )
    if conflicting:
        raise CompilerError(
            f"Field '{where}' of kind {kind.value} has constraints for another kind: {', '.join(conflicting)}"
        )


def _with_design(cls: type, name: str, field: FieldDescriptor) -> FieldDescriptor:
    """Fill in a design type that could not be resolved when the field was annotated."""
    if "design_type" in field.model_fields_set:
        return field
    try:
        design_type, item_type = field_design(cls, name)
    except NameError as e:
        raise CompilerError(f"Cannot resolve the type of '{cls.__qualname__}.{name}': {e}") from e
    update: dict[str, Any] = {}
    if design_type is not None:
        update["design_type"] = design_type
    if item_type is not None and "item_type" not in field.model_fields_set:
        update["item_type"] = item_type
    return field.model_copy(update=update) if update else field


def _is_mapping_type(design_type: Any) -> bool:
    return isinstance(design_type, type) and issubclass(design_type, (dict, Mapping))


def _apply(args: Replacement | Transform, built: Schema, where: str) -> Schema:
    result = args.apply(built)
    if not isinstance(result, Schema):
        raise CompilerError(f"Schema arguments for '{where}' produced {type(result).__name__}, expected a Schema")
    return result


def _length_bounds(field: FieldDescriptor) -> tuple[int | None, int | None]:
    """Inclusive length limits, with exclusive bounds shifted by one and nonempty raising the minimum."""
    low = _inclusive_length(field.min_length, lower=True)
    high = _inclusive_length(field.max_length, lower=False)
    if field.nonempty:
        low = max(low or 0, 1)
    return low, high


def _inclusive_length(bound: int | Bound | None, lower: bool) -> int | None:
    if bound is None:
        return None
    bound = as_bound(bound)
    value = int(bound.value)
    if bound.exclusive:
        value = value + 1 if lower else value - 1
    return max(value, 0)


def _build_string(field: FieldDescriptor) -> Schema:
    built = s.string()
    for flag in ("alphanum", "token", "email", "hostname", "iso_date", "iso_duration", "credit_card"):
        if getattr(field, flag):
            built = getattr(built, flag)()
    if field.pattern is not None:
        built = built.pattern(field.pattern)
    low, high = _length_bounds(field)
    if low is not None:
        built = built.min(low)
    if high is not None:
        built = built.max(high)
    return built


def _build_number(field: FieldDescriptor) -> Schema:
    built = s.number()
    if field.unsafe:
        built = built.unsafe()
    if field.integer:
        built = built.integer()
    if field.precision is not None:
        built = built.precision(field.precision)
    if field.port:
        built = built.port()
    if field.min_value is not None:
        low = as_bound(field.min_value)
        built = built.min(low.value, exclusive=low.exclusive)
    if field.max_value is not None:
        high = as_bound(field.max_value)
        built = built.max(high.value, exclusive=high.exclusive)
    if field.positive:
        built = built.positive()
    if field.negative:
        built = built.negative()
    if field.multiple_of is not None:
        built = built.multiple(field.multiple_of)
    return built


def _build_boolean(field: FieldDescriptor) -> Schema:
    return s.boolean()


def _build_date(field: FieldDescriptor) -> Schema:
    built = s.date()
    if field.iso:
        built = built.iso()
    if field.date_format is not None:
        built = built.format(field.date_format)
    if field.max_date is not None:
        built = built.max(field.max_date)
    if field.min_date is not None:
        built = built.min(field.min_date)
    return built


def _build_any(field: FieldDescriptor) -> Schema:
    return s.any_()


def _build_array(field: FieldDescriptor) -> s.ArraySchema:
    built = s.array()
    low, high = _length_bounds(field)
    if low is not None:
        built = built.min(low)
    if high is not None:
        built = built.max(high)
    return built


_SCALAR_BUILDERS = {
    Kind.STRING: _build_string,
    Kind.NUMBER: _build_number,
    Kind.BOOLEAN: _build_boolean,
    Kind.DATE: _build_date,
    Kind.ANY: _build_any,
    Kind.OBJECT: lambda field: s.object_(),
}
