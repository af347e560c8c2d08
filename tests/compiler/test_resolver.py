# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for descriptor resolution along the inheritance chain."""

from classvalid.compiler import parent_of, resolve_descriptor
from classvalid.metadata import DescriptorStore, annotate_field, annotate_type
from classvalid.model import Transform
from classvalid.schema import ValidationOptions


class _Base:
    name: str
    age: int


class _Middle(_Base):
    pass


class _Child(_Middle):
    email: str


class _Mixin:
    tag: str


class _Mixed(_Base, _Mixin):
    pass


class _MixinFirst(_Mixin, _Base):
    pass


class TestParentOf:
    def test_direct_base(self) -> None:
        assert parent_of(_Child) is _Middle

    def test_root_class_has_no_parent(self) -> None:
        assert parent_of(_Base) is None

    def test_first_base_wins(self) -> None:
        """With several bases the first one is the parent."""
        assert parent_of(_Mixed) is _Base
        assert parent_of(_MixinFirst) is _Mixin


class TestResolveDescriptor:
    def test_unannotated_chain(self) -> None:
        assert resolve_descriptor(DescriptorStore(), _Child) is None

    def test_own_descriptor_only(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Base, "name", required=True)
        assert resolve_descriptor(store, _Base) is store.get_own(_Base)

    def test_inherits_through_unannotated_class(self) -> None:
        """Classes without descriptors are skipped when looking for the parent."""
        store = DescriptorStore()
        annotate_field(store, _Base, "name", required=True)
        resolved = resolve_descriptor(store, _Child)
        assert resolved is not None
        assert resolved.fields["name"].required is True

    def test_fields_are_merged_by_name(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Base, "name", required=True)
        annotate_field(store, _Child, "email", email=True)
        resolved = resolve_descriptor(store, _Child)
        assert resolved is not None
        assert sorted(resolved.fields) == ["email", "name"]

    def test_field_properties_are_merged(self) -> None:
        """Properties not set on the derived field come from the base field."""
        store = DescriptorStore()
        annotate_field(store, _Base, "age", integer=True, min_value=0)
        annotate_field(store, _Child, "age", unsafe=True)
        resolved = resolve_descriptor(store, _Child)
        assert resolved is not None
        age = resolved.fields["age"]
        assert (age.integer, age.min_value, age.unsafe) == (True, 0, True)

    def test_nearest_value_wins(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Base, "name", required=True, min_length=2)
        annotate_field(store, _Child, "name", required=False)
        resolved = resolve_descriptor(store, _Child)
        assert resolved is not None
        assert resolved.fields["name"].required is False
        assert resolved.fields["name"].min_length == 2

    def test_ancestors_are_not_modified(self) -> None:
        store = DescriptorStore()
        annotate_field(store, _Base, "age", integer=True)
        annotate_field(store, _Child, "age", unsafe=True)
        resolve_descriptor(store, _Child)
        assert store.get_own(_Base).fields["age"].unsafe is None  # type: ignore[union-attr]

    def test_type_properties_inherit_unless_set(self) -> None:
        store = DescriptorStore()
        annotate_type(store, _Base, validation_options={"allow_unknown": True}, global_constraint=lambda s: s)
        annotate_field(store, _Child, "email", email=True)
        resolved = resolve_descriptor(store, _Child)
        assert resolved is not None
        assert resolved.validation_options == ValidationOptions(allow_unknown=True)
        assert isinstance(resolved.global_constraint, Transform)

    def test_own_type_properties_replace_inherited(self) -> None:
        store = DescriptorStore()
        annotate_type(store, _Base, validation_options={"allow_unknown": True})
        annotate_type(store, _Child, validation_options={"convert": False})
        resolved = resolve_descriptor(store, _Child)
        assert resolved is not None
        assert resolved.validation_options == ValidationOptions(convert=False)

    def test_secondary_bases_are_ignored(self) -> None:
        """Only the parent chain contributes descriptors."""
        store = DescriptorStore()
        annotate_field(store, _Mixin, "tag", required=True)
        assert resolve_descriptor(store, _Mixed) is None
