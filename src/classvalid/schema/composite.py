# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""Array and object schemas.

An object schema with key rules renders to a model class created with
``pydantic.create_model``. Model fields use internal names and carry the
original keys as aliases, so any string is a valid key. Validated objects are
returned as plain dicts holding only the keys present in the input.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, ClassVar, Self

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, Strict, ValidationInfo, create_model

from classvalid.schema import checks
from classvalid.schema.base import ABSENT, ConditionalSchema, ExternalCall, Schema, length_limit
from classvalid.schema.errors import SchemaError
from classvalid.schema.options import ValidationOptions

# ###############
# Public Interface
# ###############


class ArraySchema(Schema):
    """Lists of values, optionally constrained by an item schema and length bounds."""

    type_name: ClassVar[str] = "array"

    def __init__(self) -> None:
        super().__init__()
        self._items: Schema | None = None

    def items(self, schema: Schema) -> Self:
        clone = self._clone()
        clone._items = schema
        return clone

    def min(self, limit: int) -> Self:
        return self._with_rule("min", limit=length_limit(limit, "min"))

    def max(self, limit: int) -> Self:
        return self._with_rule("max", limit=length_limit(limit, "max"))

    def _base(self, options: ValidationOptions) -> Any:
        item = Any if self._items is None else self._items.annotation(options)
        metadata: list[Any] = [Strict(not options.convert)]
        lengths = {}
        if "min" in self._rules:
            lengths["min_length"] = self._rules["min"]["limit"]
        if "max" in self._rules:
            lengths["max_length"] = self._rules["max"]["limit"]
        if lengths:
            metadata.append(Field(**lengths))
        return Annotated[(list[item], *metadata)]  # type: ignore[valid-type]

    def _describe_children(self) -> dict[str, Any]:
        if self._items is None:
            return {}
        return {"items": [self._items.describe()]}

    def _has_externals(self) -> bool:
        return super()._has_externals() or (self._items is not None and self._items._has_externals())

    def _collect_externals(self, value: Any, path: list[str | int]) -> list[ExternalCall]:
        calls = super()._collect_externals(value, path)
        if self._items is not None and isinstance(value, list):
            for index, item in enumerate(value):
                calls.extend(self._items._collect_externals(item, [*path, index]))
        return calls


class ObjectSchema(Schema):
    """Mappings and plain objects.

    Without key rules any mapping shape is accepted. With key rules, unknown
    keys follow the ``allow_unknown`` and ``strip_unknown`` options.
    """

    type_name: ClassVar[str] = "object"

    def __init__(self, keys: Mapping[str, Schema] | None = None, *, name: str = "Object") -> None:
        super().__init__()
        self._keys: dict[str, Schema] | None = None if keys is None else _check_keys(keys)
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def key_schemas(self) -> dict[str, Schema] | None:
        """The key rules, or None if the schema accepts any shape."""
        return None if self._keys is None else dict(self._keys)

    def keys(self, keys: Mapping[str, Schema] | None = None) -> Self:
        """Add key rules; calling without arguments switches from any shape to no allowed keys."""
        clone = self._clone()
        clone._keys = dict(self._keys or {})
        if keys is not None:
            clone._keys.update(_check_keys(keys))
        return clone

    def unknown(self, allow: bool = True) -> Self:
        return self.options(allow_unknown=allow)

    def _base(self, options: ValidationOptions) -> Any:
        if self._keys is None:
            return Annotated[dict[str, Any], BeforeValidator(checks.as_mapping)]
        model = self._model(options)
        return Annotated[model, BeforeValidator(checks.as_mapping), AfterValidator(_as_dict)]

    def _model(self, options: ValidationOptions) -> type[BaseModel]:
        assert self._keys is not None
        aliases: dict[str, str] = {}
        fields: dict[str, Any] = {}
        conditionals: list[tuple[str, str, ConditionalSchema]] = []
        for index, (key, child) in enumerate(self._keys.items()):
            internal = f"k{index}"
            aliases[internal] = key
            if isinstance(child, ConditionalSchema):
                conditionals.append((internal, key, child))
                continue
            default = ... if child.presence == "required" else None
            fields[internal] = (child.annotation(options), Field(default, alias=key))
        # Conditional keys come last so that every other sibling is validated before their predicate runs.
        for internal, key, child in conditionals:
            selector = child.wrap(_sibling_selector(child, child.effective_options(options), aliases))
            fields[internal] = (selector, Field(ABSENT, alias=key, validate_default=True))
        return create_model(self._name, __config__=ConfigDict(extra=options.extra), **fields)

    def _describe_children(self) -> dict[str, Any]:
        if self._keys is None:
            return {}
        return {"keys": {key: child.describe() for key, child in self._keys.items()}}

    def _has_externals(self) -> bool:
        return super()._has_externals() or any(child._has_externals() for child in (self._keys or {}).values())

    def _collect_externals(self, value: Any, path: list[str | int]) -> list[ExternalCall]:
        calls = super()._collect_externals(value, path)
        if self._keys is not None and isinstance(value, Mapping):
            for key, child in self._keys.items():
                if key in value:
                    calls.extend(child._collect_externals(value[key], [*path, key]))
        return calls


# ################
# Implementation
# ################


def _as_dict(instance: BaseModel) -> dict[str, Any]:
    """Turn a validated model into a dict keyed by the original keys."""
    result: dict[str, Any] = {}
    for name, info in type(instance).model_fields.items():
        if name in instance.model_fields_set:
            result[info.alias or name] = getattr(instance, name)
    if instance.model_extra:
        result.update(instance.model_extra)
    return result


def _sibling_selector(child: ConditionalSchema, options: ValidationOptions, aliases: dict[str, str]) -> Any:
    def select(value: Any, info: ValidationInfo) -> Any:
        siblings = {aliases.get(name, name): sibling for name, sibling in info.data.items()}
        return child.check(value, options, siblings)

    return Annotated[Any, AfterValidator(select)]


def _check_keys(keys: Mapping[str, Schema]) -> dict[str, Schema]:
    checked: dict[str, Schema] = {}
    for key, schema in keys.items():
        if not isinstance(key, str):
            raise SchemaError(f"Object keys must be strings, got {key!r}")
        if not isinstance(schema, Schema):
            raise SchemaError(f"Rule for key '{key}' must be a Schema, got {type(schema).__name__}")
        checked[key] = schema
    return checked
