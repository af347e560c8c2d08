# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error and result types reported by schema validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pydantic

# ###############
# Public Interface
# ###############


class SchemaError(Exception):
    """Raised when a schema is built with invalid arguments or used incorrectly."""


@dataclass(frozen=True)
class ErrorDetail:
    """A single constraint violation.

    Attributes:
        message: Human-readable description prefixed with the field label.
        path: Keys and list indices leading from the validated root to the offending value.
        type: Machine-readable error tag (a pydantic error type or one of the schema rule tags).
        context: Extra information; always holds ``key``, ``label`` and ``value``.
    """

    message: str
    path: list[str | int]
    type: str
    context: dict[str, Any] = field(default_factory=dict)


class ValidationError(Exception):
    """Raised by asynchronous validation when the input violates the schema.

    Attributes:
        details: Every violation found, in the order pydantic reported them.
        original: The input value that failed validation.
    """

    def __init__(self, details: list[ErrorDetail], original: Any) -> None:
        self.details = list(details)
        self.original = original
        super().__init__("; ".join(detail.message for detail in self.details) or "validation failed")


@dataclass
class ValidationResult:
    """Outcome of a synchronous validation.

    Attributes:
        value: The validated (and possibly converted) value, or the original input when validation failed.
        error: The validation error, or None if the input is valid.
    """

    value: Any
    error: ValidationError | None = None

    @property
    def has_errors(self) -> bool:
        """Return True if validation reported at least one violation."""
        return self.error is not None


def details_from_pydantic(exc: pydantic.ValidationError) -> list[ErrorDetail]:
    """Translate a pydantic validation error into error details."""
    details: list[ErrorDetail] = []
    for error in exc.errors(include_url=False):
        path = list(error["loc"])
        value = None if error["type"] == "missing" else error.get("input")
        details.append(make_detail(path, error["type"], error["msg"], value, error.get("ctx")))
    return details


def make_detail(
    path: list[str | int],
    error_type: str,
    message: str,
    value: Any,
    extra: dict[str, Any] | None = None,
) -> ErrorDetail:
    """Build an error detail with the standard context entries."""
    label = _label(path)
    context: dict[str, Any] = {"key": path[-1] if path else None, "label": label, "value": value}
    if extra:
        context.update(extra)
    return ErrorDetail(message=f"{label}: {message}", path=path, type=error_type, context=context)


# ################
# Implementation
# ################


def _label(path: list[str | int]) -> str:
    """Render a path as a dotted label, falling back to 'value' for the root."""
    if not path:
        return "value"
    return ".".join(str(part) for part in path)
