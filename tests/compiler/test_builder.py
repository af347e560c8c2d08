# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for compiling descriptors into schemas."""

from typing import Any, Optional

import pytest

from classvalid import schema
from classvalid.compiler import CompilerError, SchemaCompiler
from classvalid.metadata import DescriptorStore, annotate_field, annotate_type
from classvalid.model import Bound, Conditional
from classvalid.schema import ObjectSchema, ValidationOptions

# ###############
# Test Helpers
# ###############


class _Address:
    city: str


class _Person:
    name: str
    age: int
    address: Optional[_Address]
    tags: list[str]
    born: str


class _Node:
    value: int
    next: "Optional[_Node]"


class _Plain:
    anything: Any


def _error_types(result: Any) -> list[tuple[list[str | int], str]]:
    assert result.error is not None, f"expected errors, got value {result.value!r}"
    return [(detail.path, detail.type) for detail in result.error.details]


# ###############
# Compilation
# ###############


class TestSchemaCompiler:
    def test_unannotated_type_accepts_any_shape(self) -> None:
        compiled = SchemaCompiler(DescriptorStore()).compile(_Plain)
        assert isinstance(compiled, ObjectSchema)
        assert compiled.key_schemas is None
        assert compiled.validate({"x": 1, "y": [2]}).value == {"x": 1, "y": [2]}

    def test_field_kinds_follow_design_types(self) -> None:
        """The design type decides which schema a field gets."""
        store = DescriptorStore()
        annotate_field(store, _Person, "name", required=True)
        annotate_field(store, _Person, "age", integer=True)
        annotate_field(store, _Person, "tags", nonempty=True)
        description = SchemaCompiler(store).describe(_Person)
        assert description["type"] == "object"
        keys = description["keys"]
        assert keys["name"] == {"type": "string", "flags": {"presence": "required"}}
        assert keys["age"] == {"type": "number", "rules": [{"name": "integer", "args": {}}]}
        assert keys["tags"] == {
            "type": "array",
            "rules": [{"name": "min", "args": {"limit": 1}}],
            "items": [{"type": "string"}],
        }

    def test_compiled_schema_validates(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Person, "name", required=True, alphanum=True)
        annotate_field(store, _Person, "age", integer=True, min_value=0)
        compiled = SchemaCompiler(store).compile(_Person)
        assert compiled.validate({"name": "jane", "age": "13"}).value == {"name": "jane", "age": 13}
        assert _error_types(compiled.validate({"name": "ja ne", "age": -1})) == [
            (["name"], "string_alphanum"),
            (["age"], "greater_than_equal"),
        ]

    def test_exclusive_length_bounds(self) -> None:
        """Exclusive length bounds are shifted to inclusive ones."""
        store = DescriptorStore()
        annotate_field(store, _Person, "name", min_length=Bound(value=2, exclusive=True), max_length=5)
        compiled = SchemaCompiler(store).compile(_Person)
        assert compiled.validate({"name": "ab"}).error is not None
        assert compiled.validate({"name": "abc"}).error is None
        assert compiled.validate({"name": "abcdef"}).error is not None

    def test_date_constraints_on_string_field(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Person, "born", date_string=True, date_format="DD.MM.YYYY")
        description = SchemaCompiler(store).describe(_Person)
        assert description["keys"]["born"]["type"] == "date"

    def test_nullable_and_allowed_values(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Person, "name", nullable=True, allowed_values=("jane", "john"))
        compiled = SchemaCompiler(store).compile(_Person)
        assert compiled.validate({"name": None}).error is None
        assert compiled.validate({"name": "john"}).error is None
        assert _error_types(compiled.validate({"name": "jack"})) == [(["name"], "any_only")]

    def test_custom_schema_replaces_and_transforms(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Person, "name", required=True, custom_schema=schema.string().email())
        annotate_field(store, _Person, "age", custom_schema=lambda built: built.max(120))
        compiled = SchemaCompiler(store).compile(_Person)
        keys = compiled.describe()["keys"]
        assert keys["name"] == {"type": "string", "rules": [{"name": "email", "args": {}}]}
        assert keys["age"]["rules"] == [{"name": "max", "args": {"limit": 120, "exclusive": False}}]

    def test_conditional_field(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Person, "name")
        annotate_field(
            store,
            _Person,
            "age",
            conditional=Conditional(
                predicate=lambda siblings: siblings.get("name") == "minor",
                on_true=lambda built: built.max(17),
            ),
        )
        compiled = SchemaCompiler(store).compile(_Person)
        assert _error_types(compiled.validate({"name": "minor", "age": 30})) == [(["age"], "less_than_equal")]
        assert compiled.validate({"name": "adult", "age": 30}).error is None

    def test_type_options_apply_to_object(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Person, "name")
        annotate_type(store, _Person, validation_options={"allow_unknown": True})
        compiled = SchemaCompiler(store).compile(_Person)
        assert compiled.validate({"name": "jane", "extra": 1}).value == {"name": "jane", "extra": 1}

    def test_global_constraint_applies_to_root(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Person, "name")
        annotate_type(store, _Person, global_constraint=lambda built: built.options(strip_unknown=True))
        compiled = SchemaCompiler(store).compile(_Person)
        assert compiled.validate({"name": "jane", "extra": 1}).value == {"name": "jane"}

    def test_nested_type_and_its_global_constraint(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Address, "city", required=True)
        annotate_type(store, _Address, global_constraint=lambda built: built.required())
        annotate_field(store, _Person, "address")
        compiled = SchemaCompiler(store).compile(_Person)
        assert _error_types(compiled.validate({})) == [(["address"], "missing")]
        assert _error_types(compiled.validate({"address": {}})) == [(["address", "city"], "missing")]

    def test_unannotated_nested_type_accepts_any_shape(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Person, "address")
        compiled = SchemaCompiler(store).compile(_Person)
        assert compiled.validate({"address": {"street": "Main"}}).error is None

    def test_array_of_nested_types(self) -> None:
        class Team:
            members: list[_Address]

        store = DescriptorStore()
        annotate_field(store, _Address, "city", required=True)
        annotate_field(store, Team, "members")
        compiled = SchemaCompiler(store).compile(Team)
        assert _error_types(compiled.validate({"members": [{"city": "Rome"}, {}]})) == [
            (["members", 1, "city"], "missing")
        ]


# ###############
# Errors
# ###############


class TestCompilerErrors:
    def test_kind_conflict(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Person, "age", email=True)
        with pytest.raises(CompilerError, match="email"):
            SchemaCompiler(store).compile(_Person)

    def test_false_flags_do_not_conflict(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Person, "age", email=False)
        SchemaCompiler(store).compile(_Person)

    def test_circular_reference(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Node, "value")
        annotate_field(store, _Node, "next")
        with pytest.raises(CompilerError, match="Circular"):
            SchemaCompiler(store).compile(_Node)

    def test_schema_args_must_return_a_schema(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Person, "name", custom_schema=lambda built: "string")
        with pytest.raises(CompilerError):
            SchemaCompiler(store).compile(_Person)


# ###############
# Caching
# ###############


class TestSchemaCache:
    def test_compiled_schema_is_cached(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Person, "name")
        compiler = SchemaCompiler(store)
        first = compiler.compile(_Person)
        assert compiler.is_cached(_Person)
        assert compiler.compile(_Person) is first

    def test_cache_is_not_invalidated(self) -> None:
        """Changing descriptors does not touch an already compiled schema."""
        store = DescriptorStore()
        annotate_field(store, _Person, "name")
        compiler = SchemaCompiler(store)
        first = compiler.compile(_Person)
        annotate_field(store, _Person, "name", required=True)
        assert compiler.compile(_Person) is first

    def test_use_cache_false_rebuilds_without_storing(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Person, "name")
        compiler = SchemaCompiler(store)
        first = compiler.compile(_Person)
        annotate_field(store, _Person, "name", required=True)
        rebuilt = compiler.compile(_Person, use_cache=False)
        assert rebuilt is not first
        assert rebuilt.validate({}).error is not None
        assert compiler.compile(_Person) is first

    def test_use_cache_false_does_not_populate(self) -> None:
        store = DescriptorStore()
        compiler = SchemaCompiler(store)
        compiler.compile(_Person, use_cache=False)
        assert not compiler.is_cached(_Person)

    def test_call_options_do_not_change_cached_schema(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Person, "name")
        compiled = SchemaCompiler(store).compile(_Person)
        assert compiled.validate({"name": "a", "x": 1}, ValidationOptions(allow_unknown=True)).error is None
        assert compiled.validate({"name": "a", "x": 1}).error is not None
