# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Immutable schema base class and its rendering onto pydantic types.

A schema is a tree of rules built through chained calls. Every call returns a
modified copy, so compiled schemas can be cached and shared. At validation
time the tree is rendered into a pydantic ``Annotated`` type for the effective
``ValidationOptions`` and run through a ``TypeAdapter``; adapters are cached
per options on each schema instance.
"""

from __future__ import annotations

import copy
import inspect
from collections.abc import Awaitable, Callable, Mapping
from typing import Annotated, Any, ClassVar, Literal, Self

import pydantic
from pydantic import AfterValidator, PlainValidator, TypeAdapter, WrapValidator
from pydantic_core import PydanticCustomError

from classvalid.schema import checks
from classvalid.schema.errors import (
    ErrorDetail,
    SchemaError,
    ValidationError,
    ValidationResult,
    details_from_pydantic,
    make_detail,
)
from classvalid.schema.options import ValidationOptions

Presence = Literal["optional", "required"]
ExternalCheck = Callable[[Any], Awaitable[Any] | Any]
Predicate = Callable[[Mapping[str, Any]], bool]
ExternalCall = tuple[list[str | int], ExternalCheck, Any]

# ###############
# Public Interface
# ###############


class _Absent:
    """Marker for a key that is missing from the validated object."""

    def __repr__(self) -> str:
        return "ABSENT"

    def __copy__(self) -> _Absent:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Absent:
        return self


ABSENT = _Absent()


class Schema:
    """Base class of all schema rules.

    Subclasses provide :meth:`_base`, the pydantic annotation for their value
    type; the base class layers allowed, valid and invalid values, presence,
    preferences and external checks on top.
    """

    type_name: ClassVar[str] = "any"

    def __init__(self) -> None:
        self._presence: Presence = "optional"
        self._allowed: tuple[Any, ...] = ()
        self._only = False
        self._denied: tuple[Any, ...] = ()
        self._preferences: ValidationOptions | None = None
        self._rules: dict[str, dict[str, Any]] = {}
        self._externals: tuple[ExternalCheck, ...] = ()
        self._adapters: dict[ValidationOptions, TypeAdapter[Any]] = {}

    # -------- modifiers --------

    @property
    def presence(self) -> Presence:
        return self._presence

    def allow(self, *values: Any) -> Self:
        """Accept *values* unconditionally, in addition to what the other rules accept."""
        clone = self._clone()
        clone._allowed = self._allowed + values
        return clone

    def valid(self, *values: Any) -> Self:
        """Accept *values* and nothing else."""
        clone = self.allow(*values)
        clone._only = True
        return clone

    def invalid(self, *values: Any) -> Self:
        """Reject *values* even if the other rules would accept them."""
        clone = self._clone()
        clone._denied = self._denied + values
        return clone

    def nullable(self) -> Self:
        return self.allow(None)

    def required(self) -> Self:
        clone = self._clone()
        clone._presence = "required"
        return clone

    def optional(self) -> Self:
        clone = self._clone()
        clone._presence = "optional"
        return clone

    def options(self, options: ValidationOptions | Mapping[str, Any] | None = None, **kwargs: Any) -> Self:
        """Attach preferences that apply to this schema and everything below it.

        Args:
            options: Preferences as a ValidationOptions instance or a mapping of option names.
            **kwargs: Individual option overrides, merged on top of *options*.

        Returns:
            A copy of the schema carrying the merged preferences.
        """
        preferences = ValidationOptions.coerce(options)
        if kwargs:
            preferences = (preferences or ValidationOptions()).merge(ValidationOptions(**kwargs))
        clone = self._clone()
        clone._preferences = preferences if self._preferences is None else self._preferences.merge(preferences)
        return clone

    def external(self, check: ExternalCheck) -> Self:
        """Add a check that runs after all other rules, only during asynchronous validation.

        The check receives the validated value and signals a violation by raising ValueError.
        It may be a coroutine function.
        """
        clone = self._clone()
        clone._externals = self._externals + (check,)
        return clone

    def when(
        self, predicate: Predicate, then: Schema | None = None, otherwise: Schema | None = None
    ) -> ConditionalSchema:
        """Choose between two schemas based on the validated sibling values of the enclosing object.

        Args:
            predicate: Called with a mapping of sibling keys to their validated values.
            then: Schema used when the predicate holds; defaults to this schema.
            otherwise: Schema used when it does not; defaults to this schema.

        Returns:
            A conditional schema that keeps this schema's presence.
        """
        return ConditionalSchema(self, predicate, then, otherwise)

    # -------- execution --------

    def validate(self, value: Any, options: ValidationOptions | Mapping[str, Any] | None = None) -> ValidationResult:
        """Validate *value* and return the converted value or the collected errors.

        Raises:
            SchemaError: If the schema carries external checks, which need validate_async.
        """
        if self._has_externals():
            raise SchemaError("Schema with external checks must be validated with validate_async")
        return self._run(value, ValidationOptions.coerce(options) or ValidationOptions())

    async def validate_async(
        self, value: Any, options: ValidationOptions | Mapping[str, Any] | None = None
    ) -> Any:
        """Validate *value*, then await the external checks.

        Returns:
            The validated value.

        Raises:
            ValidationError: If any rule or external check fails.
        """
        effective = ValidationOptions.coerce(options) or ValidationOptions()
        result = self._run(value, effective)
        if result.error is not None:
            raise result.error
        abort_early = effective.merge(self._preferences).abort_early
        details: list[ErrorDetail] = []
        for path, check, item in self._collect_externals(result.value, []):
            try:
                outcome = check(item)
                if inspect.isawaitable(outcome):
                    await outcome
            except ValueError as exc:
                details.append(make_detail(path, "external", str(exc), item, {"error": str(exc)}))
                if abort_early:
                    break
        if details:
            raise ValidationError(details, value)
        return result.value

    def describe(self) -> dict[str, Any]:
        """Return a plain-data description of the rules, suitable for comparison and display."""
        description: dict[str, Any] = {"type": self.type_name}
        flags: dict[str, Any] = {}
        if self._presence != "optional":
            flags["presence"] = self._presence
        if self._only:
            flags["only"] = True
        if flags:
            description["flags"] = flags
        if self._allowed:
            description["allow"] = list(self._allowed)
        if self._denied:
            description["invalid"] = list(self._denied)
        if self._preferences is not None:
            description["preferences"] = self._preferences.model_dump(exclude_unset=True)
        if self._rules:
            description["rules"] = [{"name": name, "args": dict(args)} for name, args in self._rules.items()]
        if self._externals:
            description["externals"] = len(self._externals)
        description.update(self._describe_children())
        return description

    # -------- rendering --------

    def annotation(self, options: ValidationOptions) -> Any:
        """Render the schema into a pydantic-compatible annotation for *options*."""
        effective = self.effective_options(options)
        return self.wrap(self._base(effective))

    def effective_options(self, options: ValidationOptions) -> ValidationOptions:
        return options.merge(self._preferences)

    def wrap(self, annotation: Any) -> Any:
        """Layer the allowed, valid and invalid value sets around a base annotation."""
        if self._only:
            annotation = Annotated[Any, PlainValidator(checks.only_values(self._allowed))]
        elif self._allowed:
            annotation = Annotated[annotation, WrapValidator(checks.allow_values(self._allowed))]
        if self._denied:
            annotation = Annotated[annotation, WrapValidator(checks.deny_values(self._denied))]
        return annotation

    def adapter(self, options: ValidationOptions) -> TypeAdapter[Any]:
        """Return the cached TypeAdapter for *options*, building it on first use."""
        adapter = self._adapters.get(options)
        if adapter is None:
            adapter = TypeAdapter(self.annotation(options))
            self._adapters[options] = adapter
        return adapter

    # ################
    # Implementation
    # ################

    def _base(self, options: ValidationOptions) -> Any:
        return Any

    def _describe_children(self) -> dict[str, Any]:
        return {}

    def _has_externals(self) -> bool:
        return bool(self._externals)

    def _collect_externals(self, value: Any, path: list[str | int]) -> list[ExternalCall]:
        return [(path, check, value) for check in self._externals]

    def _run(self, value: Any, options: ValidationOptions) -> ValidationResult:
        try:
            validated = self.adapter(options).validate_python(value)
        except pydantic.ValidationError as exc:
            details = details_from_pydantic(exc)
            if self.effective_options(options).abort_early:
                details = details[:1]
            return ValidationResult(value=value, error=ValidationError(details, value))
        return ValidationResult(value=validated)

    def _clone(self) -> Self:
        clone = copy.copy(self)
        clone._rules = dict(self._rules)
        clone._adapters = {}
        return clone

    def _with_rule(self, rule: str, /, **args: Any) -> Self:
        clone = self._clone()
        clone._rules[rule] = args
        return clone

    def _without_rule(self, rule: str) -> Self:
        clone = self._clone()
        clone._rules.pop(rule, None)
        return clone


class AnySchema(Schema):
    """Accepts any value; useful as a base for allow/valid/invalid rules."""

    type_name: ClassVar[str] = "any"


class ConditionalSchema(Schema):
    """Defers to one of two schemas depending on a predicate over sibling values."""

    def __init__(self, base: Schema, predicate: Predicate, then: Schema | None, otherwise: Schema | None) -> None:
        if any(branch is not None and branch._has_externals() for branch in (then, otherwise)):
            raise SchemaError("External checks are not supported inside conditional branches")
        super().__init__()
        self._base_schema = base
        self._predicate = predicate
        self._then = then
        self._otherwise = otherwise
        self._presence = base.presence

    @property
    def type_name(self) -> str:  # type: ignore[override]
        return self._base_schema.type_name

    def select(self, siblings: Mapping[str, Any]) -> Schema:
        """Return the branch that applies for the given sibling values."""
        branch = self._then if self._predicate(siblings) else self._otherwise
        return branch if branch is not None else self._base_schema

    def check(self, value: Any, options: ValidationOptions, siblings: Mapping[str, Any]) -> Any:
        """Validate *value* against the selected branch, reporting its first error."""
        branch = self.select(siblings)
        if isinstance(value, _Absent):
            if branch.presence == "required":
                raise PydanticCustomError("missing", "Field required")
            return value
        try:
            return branch.adapter(options).validate_python(value)
        except pydantic.ValidationError as exc:
            first = exc.errors(include_url=False)[0]
            raise PydanticCustomError(first["type"], "{reason}", {"reason": first["msg"]}) from None

    def _base(self, options: ValidationOptions) -> Any:
        def check_without_siblings(value: Any) -> Any:
            return self.check(value, options, {})

        return Annotated[Any, AfterValidator(check_without_siblings)]

    def _describe_children(self) -> dict[str, Any]:
        description = {key: value for key, value in self._base_schema.describe().items() if key != "type"}
        description["whens"] = [
            {
                "then": self._then.describe() if self._then is not None else None,
                "otherwise": self._otherwise.describe() if self._otherwise is not None else None,
            }
        ]
        return description

    def _has_externals(self) -> bool:
        return bool(self._externals) or self._base_schema._has_externals()

    def _collect_externals(self, value: Any, path: list[str | int]) -> list[ExternalCall]:
        return super()._collect_externals(value, path) + self._base_schema._collect_externals(value, path)


def length_limit(limit: int, rule: str) -> int:
    """Check a length rule argument."""
    if not isinstance(limit, int) or isinstance(limit, bool) or limit < 0:
        raise SchemaError(f"{rule} length must be a non-negative integer, got {limit!r}")
    return limit
