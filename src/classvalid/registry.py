# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Registry tying together the descriptor store, the annotators and the schema compiler."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Annotated, Any, TypeVar, get_args, get_origin, overload

from classvalid.compiler import SchemaCompiler, resolve_descriptor
from classvalid.constraints import FieldConstraint, TypeConstraint
from classvalid.metadata import DescriptorStore, annotate_field, annotate_type, own_annotations
from classvalid.model import FieldDescriptor, TypeDescriptor
from classvalid.schema import ValidationOptions

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)

# ###############
# Public Interface
# ###############


class Registry:
    """Owns the constraint descriptors of a set of types and their compiled schemas.

    Attributes:
        store: Own descriptors per type.
        compiler: Builds and caches schemas from the resolved descriptors.
        default_options: Validation options applied beneath per-call options.
    """

    def __init__(self, default_options: ValidationOptions | Mapping[str, Any] | None = None) -> None:
        self.store = DescriptorStore()
        self.compiler = SchemaCompiler(self.store)
        self.default_options = ValidationOptions.coerce(default_options) or ValidationOptions()

    @overload
    def register(self, cls: T, /) -> T: ...

    @overload
    def register(self, *constraints: TypeConstraint) -> Callable[[T], T]: ...

    def register(self, *args: Any) -> Any:
        """Register a class, reading constraint markers from its ``Annotated`` attribute annotations.

        Usable bare (``@registry.register``) or with type constraints
        (``@registry.register(klass.schema_options(allow_unknown=True))``).
        Only annotations declared on the class itself are scanned; inherited
        fields are picked up through the inheritance resolver.
        """
        if len(args) == 1 and isinstance(args[0], type):
            return self._register(args[0], ())
        for constraint in args:
            if not isinstance(constraint, TypeConstraint):
                raise TypeError(f"Expected type constraints, got {type(constraint).__name__}")

        def decorator(cls: T) -> T:
            return self._register(cls, args)

        return decorator

    def annotate_field(self, cls: type, name: str, **patch: Any) -> None:
        """Record field constraints explicitly; see :func:`classvalid.metadata.annotate_field`."""
        annotate_field(self.store, cls, name, **patch)

    def annotate_type(self, cls: type, **patch: Any) -> None:
        """Record type constraints explicitly; see :func:`classvalid.metadata.annotate_type`."""
        annotate_type(self.store, cls, **patch)

    def get_own_metadata(self, cls: type) -> TypeDescriptor | None:
        return self.store.get_own(cls)

    def get_metadata(self, cls: type) -> TypeDescriptor | None:
        """Return the descriptor of *cls* merged with those of its ancestors."""
        return resolve_descriptor(self.store, cls)

    def get_field_metadata(self, cls: type, name: str) -> FieldDescriptor | None:
        resolved = self.get_metadata(cls)
        return resolved.fields.get(name) if resolved is not None else None

    # ################
    # Implementation
    # ################

    def _register(self, cls: T, constraints: tuple[TypeConstraint, ...]) -> T:
        annotated = 0
        for name, annotation in own_annotations(cls, lenient=True).items():
            if get_origin(annotation) is not Annotated:
                continue
            for marker in get_args(annotation)[1:]:
                if isinstance(marker, FieldConstraint):
                    annotate_field(self.store, cls, name, **marker.as_patch())
                    annotated += 1
        for constraint in constraints:
            annotate_type(self.store, cls, **constraint.as_patch())
        logger.debug(
            "Registered %s with %d field constraint(s) and %d type constraint(s)",
            cls.__qualname__,
            annotated,
            len(constraints),
        )
        return cls


DEFAULT_REGISTRY = Registry()
register = DEFAULT_REGISTRY.register
