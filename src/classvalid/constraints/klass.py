# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type-level constraints, passed to ``Registry.register``."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from classvalid.constraints.base import TypeConstraint, type_constraint
from classvalid.model import schema_args
from classvalid.schema import Schema, ValidationOptions


def schema_options(options: ValidationOptions | None = None, **kwargs: Any) -> TypeConstraint:
    """Validation options for the type's object schema, e.g. ``schema_options(allow_unknown=True)``."""
    resolved = options if options is not None else ValidationOptions(**kwargs)
    return type_constraint(validation_options=resolved)


def custom_schema(schema: Schema | Callable[[Schema], Schema]) -> TypeConstraint:
    """Replace or transform the type's schema wherever it is compiled."""
    return type_constraint(global_constraint=schema_args(schema))
