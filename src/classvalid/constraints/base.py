# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Marker objects carrying descriptor patches inside ``Annotated`` metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class FieldConstraint:
    """A patch of FieldDescriptor properties, applied when the owning class is registered."""

    items: tuple[tuple[str, Any], ...]

    def as_patch(self) -> dict[str, Any]:
        return dict(self.items)


@dataclass(frozen=True)
class TypeConstraint:
    """A patch of TypeDescriptor properties, applied when the class is registered."""

    items: tuple[tuple[str, Any], ...]

    def as_patch(self) -> dict[str, Any]:
        return dict(self.items)


def field_constraint(**patch: Any) -> FieldConstraint:
    return FieldConstraint(tuple(patch.items()))


def type_constraint(**patch: Any) -> TypeConstraint:
    return TypeConstraint(tuple(patch.items()))
