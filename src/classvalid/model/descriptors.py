# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Constraint descriptors recorded per field and per type.

Descriptors are frozen pydantic models. Every field property defaults to
``None`` and only the properties in ``model_fields_set`` count as explicitly
set; the inheritance resolver overlays exactly those.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import Field as _Field

from classvalid.schema import Schema, ValidationOptions

# ###############
# Public Interface
# ###############


class Bound(BaseModel):
    """A numeric or length limit; inclusive unless ``exclusive`` is set."""

    model_config = ConfigDict(frozen=True)

    value: float
    exclusive: bool = False


class Replacement(BaseModel):
    """Schema arguments that replace the built schema."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["replacement"] = "replacement"
    value: Schema

    def apply(self, schema: Schema) -> Any:
        return self.value


class Transform(BaseModel):
    """Schema arguments that transform the built schema."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["transform"] = "transform"
    function: Callable[[Schema], Schema]

    def apply(self, schema: Schema) -> Any:
        return self.function(schema)


SchemaArgs = Annotated[Replacement | Transform, _Field(discriminator="kind")]


class Conditional(BaseModel):
    """Branching constraint evaluated against the validated sibling values.

    Attributes:
        predicate: Receives a mapping of sibling keys to values and selects the branch.
        on_true: Applied to the field schema when the predicate holds.
        on_false: Applied when it does not. An unset branch keeps the field schema as built.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    predicate: Callable[[Mapping[str, Any]], bool]
    on_true: SchemaArgs | None = None
    on_false: SchemaArgs | None = None

    @field_validator("on_true", "on_false", mode="before")
    @classmethod
    def _coerce_branch(cls, value: Any) -> Any:
        return None if value is None else schema_args(value)


class FieldDescriptor(BaseModel):
    """The constraints recorded for one field of one type."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    design_type: Any = None
    item_type: Any = None

    required: bool | None = None
    nullable: bool | None = None
    allowed_values: tuple[Any, ...] | None = None
    custom_schema: SchemaArgs | None = None
    conditional: Conditional | None = None

    # strings (min_length, max_length and nonempty also apply to arrays)
    min_length: int | Bound | None = None
    max_length: int | Bound | None = None
    nonempty: bool | None = None
    alphanum: bool | None = None
    token: bool | None = None
    email: bool | None = None
    hostname: bool | None = None
    iso_date: bool | None = None
    iso_duration: bool | None = None
    credit_card: bool | None = None
    pattern: str | None = None

    # numbers
    min_value: float | Bound | None = None
    max_value: float | Bound | None = None
    integer: bool | None = None
    precision: int | None = None
    multiple_of: float | None = None
    positive: bool | None = None
    negative: bool | None = None
    port: bool | None = None
    unsafe: bool | None = None

    # dates
    date_string: bool | None = None
    iso: bool | None = None
    date_format: str | None = None
    min_date: Any = None
    max_date: Any = None

    def explicit(self) -> dict[str, Any]:
        """Return the explicitly set properties and their values."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class TypeDescriptor(BaseModel):
    """The constraints recorded for one type.

    Attributes:
        fields: Field descriptors keyed by field name.
        validation_options: Options applied to the type's object schema.
        global_constraint: Applied to the type's schema wherever it is compiled.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    fields: dict[str, FieldDescriptor] = _Field(default_factory=dict)
    validation_options: ValidationOptions | None = None
    global_constraint: SchemaArgs | None = None


def schema_args(value: Any) -> Replacement | Transform:
    """Coerce a schema or a schema-transforming callable into schema arguments.

    Raises:
        TypeError: If *value* is neither.
    """
    if isinstance(value, (Replacement, Transform)):
        return value
    if isinstance(value, Schema):
        return Replacement(value=value)
    if callable(value):
        return Transform(function=value)
    raise TypeError(f"Expected a Schema or a callable taking a Schema, got {type(value).__name__}")


def as_bound(value: float | Bound) -> Bound:
    """Normalise a bare limit into an inclusive Bound."""
    return value if isinstance(value, Bound) else Bound(value=value)
