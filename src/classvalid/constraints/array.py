# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Constraints for array fields."""

from __future__ import annotations

from classvalid.constraints.base import FieldConstraint, field_constraint
from classvalid.model import Bound


def item_type(value: type) -> FieldConstraint:
    """Validate every item as *value*; overrides the element type of a ``list[...]`` annotation."""
    return field_constraint(item_type=value)


def min(length: int, exclusive: bool = False) -> FieldConstraint:  # noqa: A001
    return field_constraint(min_length=Bound(value=length, exclusive=exclusive) if exclusive else length)


def max(length: int, exclusive: bool = False) -> FieldConstraint:  # noqa: A001
    return field_constraint(max_length=Bound(value=length, exclusive=exclusive) if exclusive else length)


def nonempty(enabled: bool = True) -> FieldConstraint:
    return field_constraint(nonempty=enabled)
