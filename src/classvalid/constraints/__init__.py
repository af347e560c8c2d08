# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Constraint markers for use in ``Annotated`` field annotations.

Example::

    from typing import Annotated

    from classvalid import register
    from classvalid.constraints import common, number, string

    @register
    class User:
        name: Annotated[str, string.min(3), common.required()]
        age: Annotated[int, number.integer(), number.min(0)]
"""

from classvalid.constraints import array, common, date, klass, number, string
from classvalid.constraints.base import FieldConstraint, TypeConstraint, field_constraint, type_constraint

__all__ = [
    "FieldConstraint",
    "TypeConstraint",
    "array",
    "common",
    "date",
    "field_constraint",
    "klass",
    "number",
    "string",
    "type_constraint",
]
