# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Validation entry points operating on registered types."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from classvalid.model import FieldDescriptor, TypeDescriptor
from classvalid.registry import DEFAULT_REGISTRY, Registry
from classvalid.schema import Schema, ValidationOptions, ValidationResult

OptionsLike = ValidationOptions | Mapping[str, Any] | None

# ###############
# Public Interface
# ###############


def validate(
    cls: type,
    instance: Any,
    use_cache: bool = True,
    options: OptionsLike = None,
    *,
    registry: Registry | None = None,
) -> ValidationResult:
    """Validate *instance* against the compiled schema of *cls*.

    Args:
        cls: The registered type.
        instance: An instance of *cls*, a dataclass or a mapping of field values.
        use_cache: Reuse (and populate) the compiled schema cache.
        options: Per-call options layered over the registry defaults. The type's own
            validation options still take precedence for its subtree.
        registry: The registry holding the descriptors; defaults to the module-level registry.

    Returns:
        The validated value, a dict of the present fields, or the collected errors.

    Raises:
        CompilerError: If the descriptors of *cls* cannot be compiled.
    """
    registry = _registry(registry)
    compiled = registry.compiler.compile(cls, use_cache)
    return compiled.validate(instance, _effective(registry, options))


async def validate_async(
    cls: type,
    instance: Any,
    use_cache: bool = True,
    options: OptionsLike = None,
    *,
    registry: Registry | None = None,
) -> Any:
    """Validate *instance* like :func:`validate`, also awaiting external checks.

    Returns:
        The validated value.

    Raises:
        ValidationError: If the instance violates the schema.
        CompilerError: If the descriptors of *cls* cannot be compiled.
    """
    registry = _registry(registry)
    compiled = registry.compiler.compile(cls, use_cache)
    return await compiled.validate_async(instance, _effective(registry, options))


def get_schema(cls: type, use_cache: bool = True, *, registry: Registry | None = None) -> Schema:
    """Return the compiled schema of *cls*."""
    return _registry(registry).compiler.compile(cls, use_cache)


def describe(cls: type, use_cache: bool = True, *, registry: Registry | None = None) -> dict[str, Any]:
    """Return a plain-data description of the compiled schema of *cls*."""
    return _registry(registry).compiler.describe(cls, use_cache)


def get_metadata(cls: type, *, registry: Registry | None = None) -> TypeDescriptor | None:
    """Return the fully resolved descriptor of *cls*, or None if nothing in its chain is annotated."""
    return _registry(registry).get_metadata(cls)


def get_own_metadata(cls: type, *, registry: Registry | None = None) -> TypeDescriptor | None:
    return _registry(registry).get_own_metadata(cls)


def get_field_metadata(cls: type, name: str, *, registry: Registry | None = None) -> FieldDescriptor | None:
    return _registry(registry).get_field_metadata(cls, name)


# ################
# Implementation
# ################


def _registry(registry: Registry | None) -> Registry:
    return DEFAULT_REGISTRY if registry is None else registry


def _effective(registry: Registry, options: OptionsLike) -> ValidationOptions:
    return registry.default_options.merge(ValidationOptions.coerce(options))
