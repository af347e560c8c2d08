# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Validator callables plugged into pydantic's functional validators.

Every check raises ``PydanticCustomError`` with a snake_case error type so that
failures surface through the same error translation as pydantic's built-in
constraints.
"""

from __future__ import annotations

import dataclasses
import ipaddress
import re
from collections.abc import Callable, Mapping
from datetime import UTC, date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidatorFunctionWrapHandler
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

MAX_SAFE_INTEGER = 2**53 - 1

_ALPHANUM = re.compile(r"^[a-zA-Z0-9]+$")
_TOKEN = re.compile(r"^\w+$", re.ASCII)
_HOSTNAME_LABEL = re.compile(r"^[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?$")
_NUMBER = r"\d+(?:[.,]\d+)?"
_ISO_DURATION = re.compile(
    rf"^[-+]?P(?!$)(?:{_NUMBER}Y)?(?:{_NUMBER}M)?(?:{_NUMBER}W)?(?:{_NUMBER}D)?"
    rf"(?:T(?=\d)(?:{_NUMBER}H)?(?:{_NUMBER}M)?(?:{_NUMBER}S)?)?$"
)
_MOMENT_TOKENS = re.compile(r"YYYY|YY|MMMM|MMM|MM|DD|HH|hh|mm|ss|SSS|ZZ|Z|A")
_MOMENT_TO_STRPTIME = {
    "YYYY": "%Y",
    "YY": "%y",
    "MMMM": "%B",
    "MMM": "%b",
    "MM": "%m",
    "DD": "%d",
    "HH": "%H",
    "hh": "%I",
    "mm": "%M",
    "ss": "%S",
    "SSS": "%f",
    "ZZ": "%z",
    "Z": "%z",
    "A": "%p",
}
_DATETIME_ADAPTER: TypeAdapter[datetime] = TypeAdapter(datetime)

# ###############
# Public Interface
# ###############

# -------- shared --------


def contains(values: tuple[Any, ...], value: Any) -> bool:
    """Membership test that does not confuse booleans with the integers 0 and 1."""
    for candidate in values:
        if candidate is value:
            return True
        if isinstance(candidate, bool) != isinstance(value, bool):
            continue
        if candidate == value:
            return True
    return False


def allow_values(values: tuple[Any, ...]) -> Callable[[Any, ValidatorFunctionWrapHandler], Any]:
    """Wrap validator that lets the listed values bypass every other rule."""

    def accept(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        if contains(values, value):
            return value
        return handler(value)

    return accept


def only_values(values: tuple[Any, ...]) -> Callable[[Any], Any]:
    """Plain validator that accepts nothing but the listed values."""

    def check(value: Any) -> Any:
        if contains(values, value):
            return value
        raise PydanticCustomError(
            "any_only", "Input must be one of {valids}", {"valids": ", ".join(repr(v) for v in values)}
        )

    return check


def deny_values(values: tuple[Any, ...]) -> Callable[[Any, ValidatorFunctionWrapHandler], Any]:
    """Wrap validator that rejects the listed values before any other rule runs."""

    def reject(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        if contains(values, value):
            raise PydanticCustomError("any_invalid", "Input contains an invalid value {invalid}", {"invalid": value})
        return handler(value)

    return reject


def as_mapping(value: Any) -> Any:
    """Expose a mapping, dataclass or plain object as a dict of its attributes."""
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, type):
        return value
    if isinstance(value, BaseModel):
        return {name: getattr(value, name) for name in value.model_fields_set}
    if hasattr(value, "__dict__"):
        return dict(vars(value))
    if dataclasses.is_dataclass(value):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    return value


# -------- strings --------


def reject_empty(value: Any) -> Any:
    if value == "":
        raise PydanticCustomError("string_empty", "Input must not be an empty string")
    return value


def check_alphanum(value: str) -> str:
    if not _ALPHANUM.match(value):
        raise PydanticCustomError("string_alphanum", "Input must only contain alpha-numeric characters")
    return value


def check_token(value: str) -> str:
    if not _TOKEN.match(value):
        raise PydanticCustomError(
            "string_token", "Input must only contain alpha-numeric and underscore characters"
        )
    return value


def check_email(value: str) -> str:
    try:
        validate_email(value)
    except PydanticCustomError:
        raise PydanticCustomError("string_email", "Input must be a valid email") from None
    return value


def check_hostname(value: str) -> str:
    """Accept RFC 1123 host names and literal IP addresses."""
    try:
        ipaddress.ip_address(value)
    except ValueError:
        pass
    else:
        return value
    host = value[:-1] if value.endswith(".") else value
    if not host or len(host) > 253 or not all(_HOSTNAME_LABEL.match(label) for label in host.split(".")):
        raise PydanticCustomError("string_hostname", "Input must be a valid hostname")
    return value


def check_iso_date(value: str) -> str:
    try:
        datetime.fromisoformat(value)
    except ValueError:
        raise PydanticCustomError("string_iso_date", "Input must be in ISO 8601 date format") from None
    return value


def check_iso_duration(value: str) -> str:
    if not _ISO_DURATION.match(value):
        raise PydanticCustomError("string_iso_duration", "Input must be a valid ISO 8601 duration")
    return value


def check_credit_card(value: str) -> str:
    """Validate a card number with the Luhn checksum."""
    digits = value.replace(" ", "")
    if not digits.isdigit() or not _luhn_valid(digits):
        raise PydanticCustomError("string_credit_card", "Input must be a credit card number")
    return value


def pattern_check(regex: re.Pattern[str], name: str | None) -> Callable[[str], str]:
    def check(value: str) -> str:
        if regex.search(value) is None:
            raise PydanticCustomError(
                "string_pattern_mismatch",
                "Input does not match the {name} pattern",
                {"name": name or regex.pattern},
            )
        return value

    return check


# -------- numbers --------


def number_guard(allow_unsafe: bool, integer: bool) -> Callable[[Any, ValidatorFunctionWrapHandler], Any]:
    """Outermost number validator.

    Rejects booleans, keeps integer input as ``int`` after float validation and
    enforces the safe-integer range unless *allow_unsafe* is set.
    """

    def guard(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        if isinstance(value, bool):
            raise PydanticCustomError("number_base", "Input must be a number")
        result = handler(value)
        if isinstance(value, int) and isinstance(result, float):
            result = value
        elif integer and isinstance(result, float) and result.is_integer():
            result = int(result)
        if not allow_unsafe and abs(result) > MAX_SAFE_INTEGER:
            raise PydanticCustomError("number_unsafe", "Input must be a safe number")
        return result

    return guard


def precision_round(limit: int) -> Callable[[Any], Any]:
    """Before validator that rounds numeric input to *limit* places ahead of the bound checks."""

    def round_input(value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            return value
        if isinstance(value, str):
            try:
                number = float(value)
            except ValueError:
                return value
        else:
            number = value
        if decimal_places(number) <= limit:
            return value
        return round(number, limit)

    return round_input


def check_integer(value: float) -> float:
    if not float(value).is_integer():
        raise PydanticCustomError("number_integer", "Input must be an integer")
    return value


def precision_check(limit: int, convert: bool) -> Callable[[float], float]:
    """Limit decimal places: round when converting, reject otherwise."""

    def check(value: float) -> float:
        if decimal_places(value) <= limit:
            return value
        if convert:
            return round(value, limit)
        raise PydanticCustomError(
            "number_precision", "Input must have no more than {limit} decimal places", {"limit": limit}
        )

    return check


def multiple_check(base: float) -> Callable[[float], float]:
    def check(value: float) -> float:
        quotient = Decimal(repr(value)) / Decimal(repr(base))
        if quotient != quotient.to_integral_value():
            raise PydanticCustomError(
                "multiple_of", "Input should be a multiple of {multiple_of}", {"multiple_of": base}
            )
        return value

    return check


def check_port(value: float) -> float:
    if not float(value).is_integer() or not 0 <= value <= 65535:
        raise PydanticCustomError("number_port", "Input must be a valid port")
    return value


def check_positive(value: float) -> float:
    if value <= 0:
        raise PydanticCustomError("number_positive", "Input must be a positive number")
    return value


def check_negative(value: float) -> float:
    if value >= 0:
        raise PydanticCustomError("number_negative", "Input must be a negative number")
    return value


def decimal_places(value: float) -> int:
    """Count the decimal places of a number as written in its shortest repr."""
    try:
        exponent = Decimal(repr(value)).as_tuple().exponent
    except InvalidOperation:
        return 0
    if not isinstance(exponent, int):
        return 0
    return max(0, -exponent)


# -------- booleans --------


def boolean_input(convert: bool) -> Callable[[Any], Any]:
    """Before validator accepting booleans, and the strings "true" and "false" when converting."""

    def normalise(value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if convert and isinstance(value, str) and value.lower() in ("true", "false"):
            return value.lower() == "true"
        raise PydanticCustomError("boolean_base", "Input must be a boolean")

    return normalise


# -------- dates --------


def moment_to_strptime(fmt: str) -> str:
    """Translate a moment-style date format (``YYYY-MM-DD``) into a strptime format."""
    pieces: list[str] = []
    position = 0
    for match in _MOMENT_TOKENS.finditer(fmt):
        pieces.append(fmt[position : match.start()].replace("%", "%%"))
        pieces.append(_MOMENT_TO_STRPTIME[match.group()])
        position = match.end()
    pieces.append(fmt[position:].replace("%", "%%"))
    return "".join(pieces)


def date_input(iso: bool, fmt: str | None, convert: bool) -> Callable[[Any], Any]:
    """Before validator that normalises date input for the core datetime validator."""
    strptime_format = moment_to_strptime(fmt) if fmt is not None else None

    def normalise(value: Any) -> Any:
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime(value.year, value.month, value.day)
        if strptime_format is not None and convert and isinstance(value, str):
            try:
                return datetime.strptime(value, strptime_format)
            except ValueError:
                raise PydanticCustomError(
                    "date_format", "Input must be in {format} format", {"format": fmt}
                ) from None
        if iso and convert and not isinstance(value, datetime):
            if not isinstance(value, str):
                raise PydanticCustomError("date_format_iso", "Input must be in ISO 8601 date format")
            try:
                return datetime.fromisoformat(value)
            except ValueError:
                raise PydanticCustomError("date_format_iso", "Input must be in ISO 8601 date format") from None
        return value

    return normalise


def date_limit(limit: Any) -> datetime | None:
    """Parse a date bound; ``"now"`` is kept symbolic and resolved at validation time."""
    if limit == "now":
        return None
    if isinstance(limit, date) and not isinstance(limit, datetime):
        return datetime(limit.year, limit.month, limit.day)
    return _DATETIME_ADAPTER.validate_python(limit)


def date_bound_check(limit: Any, upper: bool) -> Callable[[datetime], datetime]:
    parsed = date_limit(limit)
    error_type = "date_max" if upper else "date_min"
    template = "Input must be {relation} {limit}"
    relation = "less than or equal to" if upper else "greater than or equal to"

    def check(value: datetime) -> datetime:
        bound = parsed if parsed is not None else _now_like(value)
        left, right = _comparable(value, bound)
        if (upper and left > right) or (not upper and left < right):
            raise PydanticCustomError(error_type, template, {"relation": relation, "limit": str(limit)})
        return value

    return check


# ################
# Implementation
# ################


def _luhn_valid(digits: str) -> bool:
    total = 0
    for index, char in enumerate(reversed(digits)):
        digit = int(char)
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total > 0 and total % 10 == 0


def _now_like(value: datetime) -> datetime:
    """The current time, naive local for naive values and aware for aware ones."""
    return datetime.now() if value.tzinfo is None else datetime.now(UTC)


def _comparable(left: datetime, right: datetime) -> tuple[datetime, datetime]:
    """Treat naive datetimes as local time when compared against aware ones."""
    if left.tzinfo is None and right.tzinfo is not None:
        left = left.astimezone()
    elif right.tzinfo is None and left.tzinfo is not None:
        right = right.astimezone()
    return left, right
