# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""String, number, boolean and date schemas."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Annotated, Any, ClassVar, Self

from pydantic import AfterValidator, BeforeValidator, Field, Strict, WrapValidator

from classvalid.schema import checks
from classvalid.schema.base import Schema, length_limit
from classvalid.schema.errors import SchemaError
from classvalid.schema.options import ValidationOptions

# ###############
# Public Interface
# ###############


class StringSchema(Schema):
    """Text values. The empty string is rejected unless explicitly allowed."""

    type_name: ClassVar[str] = "string"

    def min(self, limit: int) -> Self:
        return self._with_rule("min", limit=length_limit(limit, "min"))

    def max(self, limit: int) -> Self:
        return self._with_rule("max", limit=length_limit(limit, "max"))

    def alphanum(self) -> Self:
        return self._with_rule("alphanum")

    def token(self) -> Self:
        return self._with_rule("token")

    def email(self) -> Self:
        return self._with_rule("email")

    def hostname(self) -> Self:
        return self._with_rule("hostname")

    def iso_date(self) -> Self:
        return self._with_rule("iso_date")

    def iso_duration(self) -> Self:
        return self._with_rule("iso_duration")

    def credit_card(self) -> Self:
        return self._with_rule("credit_card")

    def pattern(self, regex: str | re.Pattern[str], name: str | None = None) -> Self:
        """Require the value to contain a match for *regex*."""
        compiled = re.compile(regex) if isinstance(regex, str) else regex
        return self._with_rule("pattern", regex=compiled.pattern, name=name)

    def _base(self, options: ValidationOptions) -> Any:
        metadata: list[Any] = [Strict(not options.convert)]
        lengths = {}
        if "min" in self._rules:
            lengths["min_length"] = self._rules["min"]["limit"]
        if "max" in self._rules:
            lengths["max_length"] = self._rules["max"]["limit"]
        if lengths:
            metadata.append(Field(**lengths))
        metadata.append(BeforeValidator(checks.reject_empty))
        for name, args in self._rules.items():
            if name == "pattern":
                metadata.append(AfterValidator(checks.pattern_check(re.compile(args["regex"]), args["name"])))
            elif name in _STRING_FORMATS:
                metadata.append(AfterValidator(_STRING_FORMATS[name]))
        return Annotated[(str, *metadata)]


class NumberSchema(Schema):
    """Numeric values. Integer input stays ``int``; everything else validates as ``float``."""

    type_name: ClassVar[str] = "number"

    def min(self, limit: float, exclusive: bool = False) -> Self:
        return self._with_rule("min", limit=limit, exclusive=exclusive)

    def max(self, limit: float, exclusive: bool = False) -> Self:
        return self._with_rule("max", limit=limit, exclusive=exclusive)

    def greater(self, limit: float) -> Self:
        return self.min(limit, exclusive=True)

    def less(self, limit: float) -> Self:
        return self.max(limit, exclusive=True)

    def integer(self) -> Self:
        return self._with_rule("integer")

    def precision(self, limit: int) -> Self:
        """Limit the number of decimal places; rounds when converting, rejects otherwise."""
        if limit < 0:
            raise SchemaError(f"precision limit must be a non-negative integer, got {limit!r}")
        return self._with_rule("precision", limit=limit)

    def multiple(self, base: float) -> Self:
        if base <= 0:
            raise SchemaError(f"multiple base must be a positive number, got {base!r}")
        return self._with_rule("multiple", base=base)

    def positive(self) -> Self:
        return self._with_rule("positive")

    def negative(self) -> Self:
        return self._with_rule("negative")

    def port(self) -> Self:
        return self._with_rule("port")

    def unsafe(self, enabled: bool = True) -> Self:
        """Allow magnitudes beyond the safe integer range (2**53 - 1)."""
        return self._with_rule("unsafe") if enabled else self._without_rule("unsafe")

    def _base(self, options: ValidationOptions) -> Any:
        bounds: dict[str, Any] = {"allow_inf_nan": False}
        if "min" in self._rules:
            rule = self._rules["min"]
            bounds["gt" if rule["exclusive"] else "ge"] = rule["limit"]
        if "max" in self._rules:
            rule = self._rules["max"]
            bounds["lt" if rule["exclusive"] else "le"] = rule["limit"]
        metadata: list[Any] = [Strict(not options.convert), Field(**bounds)]
        if "precision" in self._rules and options.convert:
            metadata.append(BeforeValidator(checks.precision_round(self._rules["precision"]["limit"])))
        if "integer" in self._rules:
            metadata.append(AfterValidator(checks.check_integer))
        if "precision" in self._rules:
            metadata.append(AfterValidator(checks.precision_check(self._rules["precision"]["limit"], options.convert)))
        if "multiple" in self._rules:
            metadata.append(AfterValidator(checks.multiple_check(self._rules["multiple"]["base"])))
        for name in ("port", "positive", "negative"):
            if name in self._rules:
                metadata.append(AfterValidator(_NUMBER_SIGNS[name]))
        metadata.append(
            WrapValidator(checks.number_guard(allow_unsafe="unsafe" in self._rules, integer="integer" in self._rules))
        )
        return Annotated[(float, *metadata)]


class BooleanSchema(Schema):
    type_name: ClassVar[str] = "boolean"

    def _base(self, options: ValidationOptions) -> Any:
        return Annotated[bool, Strict(not options.convert), BeforeValidator(checks.boolean_input(options.convert))]


class DateSchema(Schema):
    """Date values, validated as ``datetime``. Plain ``date`` input is taken at midnight."""

    type_name: ClassVar[str] = "date"

    def iso(self) -> Self:
        """Require string input in ISO 8601 format."""
        return self._with_rule("iso")

    def format(self, fmt: str = "YYYY-MM-DD") -> Self:
        """Parse string input with a moment-style format such as ``YYYY-MM-DD HH:mm``."""
        return self._with_rule("format", format=fmt)

    def min(self, limit: Any) -> Self:
        """Reject dates before *limit*; ``"now"`` compares against the time of validation."""
        _check_date_limit(limit)
        return self._with_rule("min", limit=limit)

    def max(self, limit: Any) -> Self:
        """Reject dates after *limit*; ``"now"`` compares against the time of validation."""
        _check_date_limit(limit)
        return self._with_rule("max", limit=limit)

    def _base(self, options: ValidationOptions) -> Any:
        fmt = self._rules["format"]["format"] if "format" in self._rules else None
        metadata: list[Any] = [
            Strict(not options.convert),
            BeforeValidator(checks.date_input("iso" in self._rules, fmt, options.convert)),
        ]
        if "min" in self._rules:
            metadata.append(AfterValidator(checks.date_bound_check(self._rules["min"]["limit"], upper=False)))
        if "max" in self._rules:
            metadata.append(AfterValidator(checks.date_bound_check(self._rules["max"]["limit"], upper=True)))
        return Annotated[(datetime, *metadata)]


# ################
# Implementation
# ################

_STRING_FORMATS = {
    "alphanum": checks.check_alphanum,
    "token": checks.check_token,
    "email": checks.check_email,
    "hostname": checks.check_hostname,
    "iso_date": checks.check_iso_date,
    "iso_duration": checks.check_iso_duration,
    "credit_card": checks.check_credit_card,
}

_NUMBER_SIGNS = {
    "port": checks.check_port,
    "positive": checks.check_positive,
    "negative": checks.check_negative,
}


def _check_date_limit(limit: Any) -> None:
    try:
        checks.date_limit(limit)
    except ValueError as exc:
        raise SchemaError(f"Invalid date limit {limit!r}") from exc
