# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Validation of instances against the compiled schemas of their types."""

from classvalid.validation.facade import (
    describe,
    get_field_metadata,
    get_metadata,
    get_own_metadata,
    get_schema,
    validate,
    validate_async,
)

__all__ = [
    "describe",
    "get_field_metadata",
    "get_metadata",
    "get_own_metadata",
    "get_schema",
    "validate",
    "validate_async",
]
