# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the descriptor store."""

import pytest

from classvalid.metadata import DescriptorStore
from classvalid.schema import ValidationOptions


class _Animal:
    name: str


class _Dog(_Animal):
    breed: str


class TestDescriptorStore:
    def test_empty_store(self) -> None:
        store = DescriptorStore()
        assert store.get_own(_Animal) is None
        assert _Animal not in store
        assert len(store) == 0

    def test_merge_creates_descriptor(self) -> None:
        store = DescriptorStore()
        descriptor = store.merge_own(_Animal, {"fields": {"name": {"required": True}}})
        assert store.get_own(_Animal) is descriptor
        assert descriptor.fields["name"].explicit() == {"required": True}
        assert _Animal in store

    def test_field_patches_merge_property_by_property(self) -> None:
        """Patching a field keeps the properties set earlier."""
        store = DescriptorStore()
        store.merge_own(_Animal, {"fields": {"name": {"required": True}}})
        store.merge_own(_Animal, {"fields": {"name": {"alphanum": True}}})
        descriptor = store.get_own(_Animal)
        assert descriptor is not None
        assert descriptor.fields["name"].explicit() == {"required": True, "alphanum": True}

    def test_later_patch_overrides_property(self) -> None:
        store = DescriptorStore()
        store.merge_own(_Animal, {"fields": {"name": {"min_length": 2}}})
        store.merge_own(_Animal, {"fields": {"name": {"min_length": 5}}})
        descriptor = store.get_own(_Animal)
        assert descriptor is not None
        assert descriptor.fields["name"].min_length == 5

    def test_other_fields_are_kept(self) -> None:
        store = DescriptorStore()
        store.merge_own(_Animal, {"fields": {"name": {"required": True}}})
        store.merge_own(_Animal, {"fields": {"age": {"integer": True}}})
        descriptor = store.get_own(_Animal)
        assert descriptor is not None
        assert sorted(descriptor.fields) == ["age", "name"]

    def test_type_properties_replace(self) -> None:
        store = DescriptorStore()
        store.merge_own(_Animal, {"validation_options": ValidationOptions(convert=False)})
        store.merge_own(_Animal, {"validation_options": ValidationOptions(allow_unknown=True)})
        descriptor = store.get_own(_Animal)
        assert descriptor is not None
        assert descriptor.validation_options == ValidationOptions(allow_unknown=True)

    def test_descriptors_are_per_type(self) -> None:
        store = DescriptorStore()
        store.merge_own(_Dog, {"fields": {"breed": {"required": True}}})
        assert store.get_own(_Animal) is None
        assert list(store.types()) == [_Dog]

    def test_unknown_type_property(self) -> None:
        with pytest.raises(ValueError, match="Unknown type descriptor property"):
            DescriptorStore().merge_own(_Animal, {"colour": "red"})

    def test_unknown_field_property(self) -> None:
        """Misspelt property names are rejected."""
        with pytest.raises(ValueError, match="Unknown field properties"):
            DescriptorStore().merge_own(_Animal, {"fields": {"name": {"colour": "red"}}})
