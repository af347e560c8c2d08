# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Kind tags and their derivation from Python type annotations."""

from __future__ import annotations

import collections.abc
import types
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Literal, Union, get_args, get_origin

# ###############
# Public Interface
# ###############


class Kind(Enum):
    """The value kinds a field schema can be built for."""

    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    DATE = "Date"
    ARRAY = "Array"
    OBJECT = "Object"
    ANY = "Any"


def kind_of(design_type: Any) -> Kind:
    """Map a field's design type to its kind.

    Args:
        design_type: A Python type such as ``str``, ``list`` or a model class.

    Returns:
        The kind; anything that is not a recognised scalar or sequence type is an object.
    """
    if design_type is None or design_type is Any or not isinstance(design_type, type):
        return Kind.ANY
    if issubclass(design_type, Enum):
        return Kind.ANY
    if issubclass(design_type, bool):
        return Kind.BOOLEAN
    if issubclass(design_type, str):
        return Kind.STRING
    if issubclass(design_type, (int, float, Decimal)):
        return Kind.NUMBER
    if issubclass(design_type, (datetime, date)):
        return Kind.DATE
    if issubclass(design_type, (list, tuple, set, frozenset)):
        return Kind.ARRAY
    return Kind.OBJECT


def design_of(annotation: Any) -> tuple[Any, Any]:
    """Extract ``(design_type, item_type)`` from a type annotation.

    ``Annotated`` wrappers and ``X | None`` are unwrapped; sequences yield
    ``list`` with the element type as item type.
    """
    origin = get_origin(annotation)
    if origin is Annotated:
        return design_of(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        return design_of(members[0]) if len(members) == 1 else (Any, None)
    if origin is Literal:
        return Any, None
    if origin in _SEQUENCE_ORIGINS:
        args = [arg for arg in get_args(annotation) if arg is not Ellipsis]
        return list, design_of(args[0])[0] if args else None
    if origin is not None:
        return origin, None
    if annotation in _SEQUENCE_ORIGINS:
        return list, None
    return annotation, None


# ################
# Implementation
# ################

_SEQUENCE_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.Iterable,
)
