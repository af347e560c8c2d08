# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for classes whose string annotations name types defined later in the module."""

from __future__ import annotations

from typing import Annotated, Optional

import pytest

from classvalid import CompilerError, Registry, validate
from classvalid.constraints import common, number, string

# ###############
# Test Helpers
# ###############

registry = Registry()


@registry.register
class Order:
    customer: Annotated[Optional[Customer], common.required()]
    quantity: Annotated[int, number.integer(), number.min(1)]


@registry.register
class Customer:
    name: Annotated[str, common.required(), string.min(2)]


def _error_types(value: object, against: type, in_registry: Registry) -> list[tuple[list[str | int], str]]:
    result = validate(against, value, registry=in_registry)
    assert result.error is not None, f"expected errors, got value {result.value!r}"
    return [(detail.path, detail.type) for detail in result.error.details]


# ###############
# Forward References
# ###############


class TestForwardReferences:
    def test_markers_are_recorded_before_the_type_exists(self) -> None:
        """Constraints on a field referencing a later class are kept at registration."""
        field = registry.get_field_metadata(Order, "customer")
        assert field is not None
        assert field.required is True
        assert field.design_type is None

    def test_resolvable_fields_keep_their_design_type(self) -> None:
        field = registry.get_field_metadata(Order, "quantity")
        assert field is not None
        assert field.design_type is int
        assert field.integer is True

    def test_missing_forward_referenced_field(self) -> None:
        """A required field typed with a later class is reported missing."""
        assert _error_types({"quantity": 1}, Order, registry) == [(["customer"], "missing")]

    def test_forward_referenced_type_is_validated_as_nested_object(self) -> None:
        errors = _error_types({"customer": {"name": "J"}, "quantity": 0}, Order, registry)
        assert errors == [(["customer", "name"], "string_too_short"), (["quantity"], "greater_than_equal")]

    def test_valid_value(self) -> None:
        value = {"customer": {"name": "Jane"}, "quantity": 2}
        assert validate(Order, value, registry=registry).value == value

    def test_undefined_type_fails_at_compile_time(self) -> None:
        """A name that never gets defined is reported when the schema is built."""
        local = Registry()

        @local.register
        class Invoice:
            payer: Annotated[Payer, common.required()]  # noqa: F821

        assert local.get_field_metadata(Invoice, "payer") is not None
        with pytest.raises(CompilerError, match="Invoice.payer"):
            validate(Invoice, {}, registry=local)

    def test_marker_from_undefined_name_is_an_error(self) -> None:
        local = Registry()

        with pytest.raises(NameError, match="unknown"):

            @local.register
            class Broken:
                value: Annotated[str, unknown.required()]  # noqa: F821
