# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declarative, class-based validation compiled into cached schemas.

Constraints are attached to class attributes with ``Annotated`` markers,
resolved along the inheritance chain and compiled on demand into schemas that
pydantic evaluates::

    from typing import Annotated

    import classvalid
    from classvalid.constraints import common, string

    @classvalid.register
    class User:
        name: Annotated[str, string.alphanum(), common.required()]

    result = classvalid.validate(User, {"name": "jane"})
"""

from classvalid.compiler import CompilerError
from classvalid.config import ConfigError, load_validation_options, parse_validation_options
from classvalid.model import Bound, FieldDescriptor, TypeDescriptor
from classvalid.registry import DEFAULT_REGISTRY, Registry, register
from classvalid.schema import ErrorDetail, SchemaError, ValidationError, ValidationOptions, ValidationResult
from classvalid.validation import (
    describe,
    get_field_metadata,
    get_metadata,
    get_own_metadata,
    get_schema,
    validate,
    validate_async,
)

__all__ = [
    "Bound",
    "CompilerError",
    "ConfigError",
    "DEFAULT_REGISTRY",
    "ErrorDetail",
    "FieldDescriptor",
    "Registry",
    "SchemaError",
    "TypeDescriptor",
    "ValidationError",
    "ValidationOptions",
    "ValidationResult",
    "describe",
    "get_field_metadata",
    "get_metadata",
    "get_own_metadata",
    "get_schema",
    "load_validation_options",
    "parse_validation_options",
    "register",
    "validate",
    "validate_async",
]
