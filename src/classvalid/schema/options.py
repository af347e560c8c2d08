# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Validation options shared by the schema engine and the validation facade."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

# ###############
# Public Interface
# ###############


class ValidationOptions(BaseModel):
    """Preferences that control how a schema treats its input.

    Attributes:
        allow_unknown: Keep object keys that have no rule instead of rejecting them.
        strip_unknown: Drop object keys that have no rule. Takes precedence over allow_unknown.
        convert: Coerce input to the rule's type (e.g. "13" to 13). When disabled, types must match exactly.
        abort_early: Report only the first violation instead of all of them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    allow_unknown: bool = False
    strip_unknown: bool = False
    convert: bool = True
    abort_early: bool = False

    @classmethod
    def coerce(cls, value: ValidationOptions | Mapping[str, Any] | None) -> ValidationOptions | None:
        """Accept an options instance, a mapping of option names, or None."""
        if value is None or isinstance(value, cls):
            return value
        return cls.model_validate(dict(value))

    def merge(self, other: ValidationOptions | None) -> ValidationOptions:
        """Return a copy overlaid with the options that *other* sets explicitly."""
        if other is None:
            return self
        overrides = other.model_dump(exclude_unset=True)
        if not overrides:
            return self
        return self.model_copy(update=overrides)

    @property
    def extra(self) -> Literal["forbid", "allow", "ignore"]:
        """The pydantic unknown-key policy these options translate to."""
        if self.strip_unknown:
            return "ignore"
        if self.allow_unknown:
            return "allow"
        return "forbid"
