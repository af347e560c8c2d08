# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Constraints for date fields.

Every marker here also marks the field as a date, so string-typed fields
holding dates are validated (and converted) as dates.
"""

from __future__ import annotations

from typing import Any

from classvalid.constraints.base import FieldConstraint, field_constraint


def iso() -> FieldConstraint:
    """Require an ISO 8601 string."""
    return field_constraint(date_string=True, iso=True)


def format(fmt: str = "YYYY-MM-DD") -> FieldConstraint:  # noqa: A001
    """Parse strings with a moment-style format such as ``DD.MM.YYYY``."""
    return field_constraint(date_string=True, date_format=fmt)


def min(limit: Any) -> FieldConstraint:  # noqa: A001
    """Earliest accepted date; a datetime, an ISO string, a timestamp or ``"now"``."""
    return field_constraint(date_string=True, min_date=limit)


def max(limit: Any) -> FieldConstraint:  # noqa: A001
    """Latest accepted date; a datetime, an ISO string, a timestamp or ``"now"``."""
    return field_constraint(date_string=True, max_date=limit)
