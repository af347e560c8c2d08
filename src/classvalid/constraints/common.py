# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Constraints that apply to fields of every kind."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from classvalid.constraints.base import FieldConstraint, field_constraint
from classvalid.model import Conditional, schema_args
from classvalid.schema import Schema

SchemaLike = Schema | Callable[[Schema], Schema]


def required() -> FieldConstraint:
    """The field must be present."""
    return field_constraint(required=True)


def optional() -> FieldConstraint:
    """The field may be absent (the default)."""
    return field_constraint(required=False)


def nullable(enabled: bool = True) -> FieldConstraint:
    """Accept ``None`` in addition to the field's other values."""
    return field_constraint(nullable=enabled)


def allow(*values: Any) -> FieldConstraint:
    """Restrict the field to exactly the listed values."""
    return field_constraint(allowed_values=values)


def custom_schema(schema: SchemaLike) -> FieldConstraint:
    """Replace the field's schema, or transform it when given a callable."""
    return field_constraint(custom_schema=schema_args(schema))


def when(
    predicate: Callable[[Mapping[str, Any]], bool],
    on_true: SchemaLike | None = None,
    on_false: SchemaLike | None = None,
) -> FieldConstraint:
    """Pick the field's schema from the validated sibling values.

    Each branch replaces (schema) or transforms (callable) the field's schema
    as built from its other constraints; an omitted branch keeps it unchanged.
    """
    return field_constraint(conditional=Conditional(predicate=predicate, on_true=on_true, on_false=on_false))


def design_type(value: type, item_type: type | None = None) -> FieldConstraint:
    """Override the design type inferred from the field's annotation."""
    if item_type is None:
        return field_constraint(design_type=value)
    return field_constraint(design_type=value, item_type=item_type)
