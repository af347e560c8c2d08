# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Constraints for string fields."""

from __future__ import annotations

from classvalid.constraints.base import FieldConstraint, field_constraint
from classvalid.model import Bound


def alphanum(enabled: bool = True) -> FieldConstraint:
    """Only a-z, A-Z and 0-9."""
    return field_constraint(alphanum=enabled)


def token(enabled: bool = True) -> FieldConstraint:
    """Only a-z, A-Z, 0-9 and underscore."""
    return field_constraint(token=enabled)


def min(length: int, exclusive: bool = False) -> FieldConstraint:  # noqa: A001
    return field_constraint(min_length=Bound(value=length, exclusive=exclusive) if exclusive else length)


def max(length: int, exclusive: bool = False) -> FieldConstraint:  # noqa: A001
    return field_constraint(max_length=Bound(value=length, exclusive=exclusive) if exclusive else length)


def nonempty(enabled: bool = True) -> FieldConstraint:
    return field_constraint(nonempty=enabled)


def email(enabled: bool = True) -> FieldConstraint:
    return field_constraint(email=enabled)


def hostname(enabled: bool = True) -> FieldConstraint:
    return field_constraint(hostname=enabled)


def iso_date(enabled: bool = True) -> FieldConstraint:
    """An ISO 8601 date or date-time string; the value stays a string."""
    return field_constraint(iso_date=enabled)


def iso_duration(enabled: bool = True) -> FieldConstraint:
    return field_constraint(iso_duration=enabled)


def credit_card(enabled: bool = True) -> FieldConstraint:
    """A card number passing the Luhn checksum."""
    return field_constraint(credit_card=enabled)


def pattern(regex: str) -> FieldConstraint:
    return field_constraint(pattern=regex)
