# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for validation options and their layering."""

import pydantic
import pytest

from classvalid.schema import ValidationOptions


class TestValidationOptions:
    def test_defaults(self) -> None:
        options = ValidationOptions()
        assert (options.allow_unknown, options.strip_unknown, options.convert, options.abort_early) == (
            False,
            False,
            True,
            False,
        )

    def test_coerce(self) -> None:
        options = ValidationOptions(convert=False)
        assert ValidationOptions.coerce(None) is None
        assert ValidationOptions.coerce(options) is options
        assert ValidationOptions.coerce({"convert": False}) == options

    def test_unknown_option_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ValidationOptions.coerce({"colour": "red"})

    def test_merge_overlays_explicit_options_only(self) -> None:
        base = ValidationOptions(allow_unknown=True, convert=False)
        merged = base.merge(ValidationOptions(convert=True))
        assert merged == ValidationOptions(allow_unknown=True, convert=True)

    def test_merge_keeps_explicit_defaults(self) -> None:
        merged = ValidationOptions(allow_unknown=True).merge(ValidationOptions(allow_unknown=False))
        assert merged.allow_unknown is False

    def test_merge_with_nothing(self) -> None:
        base = ValidationOptions(abort_early=True)
        assert base.merge(None) is base
        assert base.merge(ValidationOptions()) is base

    def test_merged_options_remember_what_was_set(self) -> None:
        merged = ValidationOptions().merge(ValidationOptions(strip_unknown=True))
        assert merged.model_dump(exclude_unset=True) == {"strip_unknown": True}

    @pytest.mark.parametrize(
        "options, extra",
        [
            (ValidationOptions(), "forbid"),
            (ValidationOptions(allow_unknown=True), "allow"),
            (ValidationOptions(strip_unknown=True), "ignore"),
            (ValidationOptions(allow_unknown=True, strip_unknown=True), "ignore"),
        ],
    )
    def test_extra_policy(self, options: ValidationOptions, extra: str) -> None:
        assert options.extra == extra

    def test_options_are_hashable(self) -> None:
        assert hash(ValidationOptions(convert=False)) == hash(ValidationOptions(convert=False))
