# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Chainable validation schemas evaluated by pydantic.

Builders mirror the familiar ``string().min(3).required()`` style::

    from classvalid import schema

    user = schema.object_({"name": schema.string().min(3).required()})
    result = user.validate({"name": "Jane"})
"""

from collections.abc import Mapping

from classvalid.schema.base import ABSENT, AnySchema, ConditionalSchema, Schema
from classvalid.schema.composite import ArraySchema, ObjectSchema
from classvalid.schema.errors import ErrorDetail, SchemaError, ValidationError, ValidationResult
from classvalid.schema.options import ValidationOptions
from classvalid.schema.scalars import BooleanSchema, DateSchema, NumberSchema, StringSchema


def any_() -> AnySchema:
    return AnySchema()


def string() -> StringSchema:
    return StringSchema()


def number() -> NumberSchema:
    return NumberSchema()


def boolean() -> BooleanSchema:
    return BooleanSchema()


def date() -> DateSchema:
    return DateSchema()


def array(items: Schema | None = None) -> ArraySchema:
    schema = ArraySchema()
    return schema if items is None else schema.items(items)


def object_(keys: Mapping[str, Schema] | None = None, *, name: str = "Object") -> ObjectSchema:
    """Build an object schema; without *keys* it accepts any mapping shape."""
    return ObjectSchema(keys, name=name)


__all__ = [
    "ABSENT",
    "AnySchema",
    "ArraySchema",
    "BooleanSchema",
    "ConditionalSchema",
    "DateSchema",
    "ErrorDetail",
    "NumberSchema",
    "ObjectSchema",
    "Schema",
    "SchemaError",
    "StringSchema",
    "ValidationError",
    "ValidationOptions",
    "ValidationResult",
    "any_",
    "array",
    "boolean",
    "date",
    "number",
    "object_",
    "string",
]
