# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Constraints for number fields."""

from __future__ import annotations

from classvalid.constraints.base import FieldConstraint, field_constraint
from classvalid.model import Bound


def unsafe(enabled: bool = True) -> FieldConstraint:
    """Allow magnitudes beyond 2**53 - 1."""
    return field_constraint(unsafe=enabled)


def integer(enabled: bool = True) -> FieldConstraint:
    return field_constraint(integer=enabled)


def precision(places: int) -> FieldConstraint:
    """At most *places* decimal places; rounded when converting, rejected otherwise."""
    return field_constraint(precision=places)


def port(enabled: bool = True) -> FieldConstraint:
    """An integer between 0 and 65535."""
    return field_constraint(port=enabled)


def min(value: float, exclusive: bool = False) -> FieldConstraint:  # noqa: A001
    return field_constraint(min_value=Bound(value=value, exclusive=exclusive))


def max(value: float, exclusive: bool = False) -> FieldConstraint:  # noqa: A001
    return field_constraint(max_value=Bound(value=value, exclusive=exclusive))


def positive(enabled: bool = True) -> FieldConstraint:
    return field_constraint(positive=enabled)


def negative(enabled: bool = True) -> FieldConstraint:
    return field_constraint(negative=enabled)


def multiple_of(base: float) -> FieldConstraint:
    return field_constraint(multiple_of=base)
