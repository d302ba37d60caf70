# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the type registry and declaration resolution."""

import re
from datetime import date, datetime
from typing import Any

import pytest

from entitree import Collection, Model
from entitree.datatypes import (
    AnyType,
    ArrayType,
    BooleanType,
    CollectionType,
    CustomClassType,
    DataTypes,
    DateType,
    ModelType,
    NumberType,
    ObjectType,
    OrType,
    StringType,
    Type,
    create_type,
    get_type_class,
    register_type,
    registered_types,
)
from entitree.errors import (
    ConflictNullAndEmptyStringParameterError,
    InvalidTypeParamsError,
    InvalidValidatorError,
    ReservedPrimaryKeyError,
    UnknownTypeError,
)


# ###############
# Helpers
# ###############


class _Point:
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y


class _Child(Model):
    @classmethod
    def structure(cls) -> dict[str, Any]:
        return {"name": "string"}


class _Children(Collection[_Child]):
    @classmethod
    def model_class(cls) -> type[_Child]:
        return _Child


class _PercentType(Type):
    def prepare_value(self, value: Any, key: str, model: Any) -> Any:
        if value is None:
            return None
        return round(float(value) * 100)


# ###############
# Normal Cases
# ###############


def test_builtin_variants_registered() -> None:
    """Every built-in tag resolves to its variant class."""
    expected = {
        "*": AnyType,
        "any": AnyType,
        "array": ArrayType,
        "boolean": BooleanType,
        "date": DateType,
        "model": ModelType,
        "collection": CollectionType,
        "number": NumberType,
        "object": ObjectType,
        "string": StringType,
        "or": OrType,
        "custom_class": CustomClassType,
    }
    for tag, type_class in expected.items():
        assert get_type_class(tag) is type_class
    assert get_type_class("nope") is None


def test_custom_class_is_registered_last() -> None:
    """The catch-all class shorthand normalizes after every other variant."""
    assert list(registered_types())[-1] == "custom_class"


def test_registry_view_is_read_only() -> None:
    """registered_types() cannot be used to mutate the registry."""
    with pytest.raises(TypeError):
        registered_types()["string"] = AnyType  # type: ignore[index]


def test_bare_tag() -> None:
    """A bare tag resolves to a type with default parameters."""
    description = create_type("string", "name")

    assert isinstance(description, StringType)
    assert description.required is False
    assert description.type_as_string() == "string"


def test_parameter_mapping() -> None:
    """A mapping with a type entry carries its parameters."""
    description = create_type({"type": "string", "required": True, "trim": True}, "name")

    assert description.required is True
    assert description.prepare("  x ", "name") == "x"


def test_type_helpers() -> None:
    """DataTypes helpers work bare and called with parameters."""
    assert isinstance(create_type(DataTypes.Number, "age"), NumberType)
    assert create_type(DataTypes.Number(unsigned=True), "age").validate(-1, "age") is False
    assert DataTypes.Array("number", unique=True) == {"type": "array", "element": "number", "unique": True}
    assert DataTypes.Or("string", "number") == {"type": "or", "or": ["string", "number"]}


def test_list_shorthand_means_array() -> None:
    """[element] declares an array of that element type."""
    description = create_type(["number"], "scores")

    assert isinstance(description, ArrayType)
    assert isinstance(description.element, NumberType)
    assert description.type_as_string() == "array[number]"


def test_mapping_shorthand_means_object_structure() -> None:
    """A mapping without a type entry declares a nested structure."""
    description = create_type({"street": "string", "zip": "number"}, "address")

    assert isinstance(description, ObjectType)
    assert set(description.properties) == {"street", "zip"}


def test_empty_mapping_means_object_of_any() -> None:
    """{} declares an object accepting any keys and values."""
    description = create_type({}, "extra")

    assert isinstance(description, ObjectType)
    assert isinstance(description.element, AnyType)


def test_python_class_shorthands() -> None:
    """Builtin Python classes map to the matching variants."""
    assert isinstance(create_type(str, "a"), StringType)
    assert isinstance(create_type(int, "a"), NumberType)
    assert isinstance(create_type(float, "a"), NumberType)
    assert isinstance(create_type(bool, "a"), BooleanType)
    assert isinstance(create_type(datetime, "a"), DateType)
    assert isinstance(create_type(date, "a"), DateType)
    assert isinstance(create_type(list, "a"), ArrayType)
    assert isinstance(create_type(dict, "a"), ObjectType)


def test_entity_class_shorthands() -> None:
    """Model and Collection subclasses map to model and collection types."""
    model_type = create_type(_Child, "child")
    collection_type = create_type(_Children, "children")

    assert isinstance(model_type, ModelType)
    assert model_type.model is _Child
    assert isinstance(collection_type, CollectionType)
    assert collection_type.collection is _Children


def test_other_class_means_custom_class() -> None:
    """Any other class declares a custom-class field."""
    description = create_type(_Point, "point")

    assert isinstance(description, CustomClassType)
    assert description.constructor is _Point


def test_type_is_frozen() -> None:
    """Resolved types reject attribute assignment."""
    description = create_type("string", "name")

    with pytest.raises(AttributeError, match="frozen"):
        description.required = True


def test_primary_implies_required_and_const() -> None:
    """A primary field is both required and const."""
    description = create_type({"type": "number", "primary": True}, "id")

    assert description.primary is True
    assert description.required is True
    assert description.const is True


def test_register_custom_variant() -> None:
    """A registered variant is usable by tag."""
    register_type("percent", _PercentType)

    description = create_type({"type": "percent", "required": True}, "ratio")

    assert isinstance(description, _PercentType)
    assert description.prepare(0.25, "ratio") == 25


def test_custom_prepare_runs_after_builtin_coercion() -> None:
    """A declared prepare sees the coerced value, and never sees None."""
    seen: list[Any] = []

    def prepare(value: Any, key: str, model: Any) -> Any:
        seen.append(value)
        return value + "!"

    description = create_type({"type": "string", "trim": True, "prepare": prepare}, "name")

    assert description.prepare(" hi ", "name") == "hi!"
    assert description.prepare(None, "name") is None
    assert seen == ["hi"]


def test_custom_validate_pattern_and_callable() -> None:
    """Declared validators are combined with the built-in check."""
    by_pattern = create_type({"type": "string", "validate": re.compile(r"^\d+$")}, "code")
    by_callable = create_type({"type": "number", "validate": lambda value, key: value % 2 == 0}, "even")

    assert by_pattern.validate("123", "code") is True
    assert by_pattern.validate("12a", "code") is False
    assert by_pattern.validate(None, "code") is True
    assert by_callable.validate(4, "even") is True
    assert by_callable.validate(3, "even") is False


def test_enum_validation() -> None:
    """enum restricts non-null values."""
    description = create_type({"type": "string", "enum": ["red", "green"]}, "colour")

    assert description.validate("red", "colour") is True
    assert description.validate("blue", "colour") is False
    assert description.validate(None, "colour") is True


def test_default_value_and_factory() -> None:
    """default accepts a value or a zero-argument factory."""
    fixed = create_type({"type": "number", "default": 3}, "count")
    factory = create_type({"type": "array", "default": lambda: ["a"]}, "tags")

    assert fixed.default() == 3
    assert factory.default() == ["a"]
    assert create_type("number", "count").default() is None


# ###############
# Error Cases
# ###############


def test_unknown_tag() -> None:
    """An unregistered tag raises UnknownTypeError naming the field."""
    with pytest.raises(UnknownTypeError, match="name: unknown type: strnig"):
        create_type("strnig", "name")


def test_unknown_tag_in_nested_element() -> None:
    """Errors from nested declarations carry both keys."""
    with pytest.raises(UnknownTypeError, match="tags: element: unknown type: nope"):
        create_type(["nope"], "tags")


def test_reserved_primary_key() -> None:
    """Primary keys may not shadow entity attributes."""
    for key in ("row", "primary_key", "primary_value", "cid", "get", "parent"):
        with pytest.raises(ReservedPrimaryKeyError, match=f"reserved word as primary key: {key}"):
            create_type({"type": "number", "primary": True}, key)


def test_unknown_parameter() -> None:
    """Misspelled parameters are rejected at schema-compile time."""
    with pytest.raises(InvalidTypeParamsError, match="name: invalid type parameters: trimm"):
        create_type({"type": "string", "trimm": True}, "name")


def test_invalid_validator() -> None:
    """validate must be a callable or a compiled pattern."""
    with pytest.raises(InvalidValidatorError, match="invalid validation"):
        create_type({"type": "string", "validate": 5}, "name")


def test_conflicting_parameters_are_prefixed() -> None:
    """Variant construction errors are prefixed with the field key."""
    with pytest.raises(ConflictNullAndEmptyStringParameterError, match="^name: conflicting parameters"):
        create_type({"type": "string", "null_as_empty": True, "empty_as_null": True}, "name")
