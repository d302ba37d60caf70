# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the model, collection and custom_class types."""

from typing import Any

import pytest

from entitree import Collection, DataTypes, Model
from entitree.datatypes import create_type
from entitree.errors import (
    InvalidCollectionError,
    InvalidCustomClassError,
    InvalidModelError,
    InvalidTypeParamsError,
    WrongModelKindError,
)
from entitree.graph import EqualStack


# ###############
# Helpers
# ###############


class _Author(Model):
    @classmethod
    def structure(cls) -> dict[str, Any]:
        return {"name": "string"}


class _Editor(Model):
    @classmethod
    def structure(cls) -> dict[str, Any]:
        return {"name": "string"}


class _Authors(Collection[_Author]):
    @classmethod
    def model_class(cls) -> type[_Author]:
        return _Author


class _Editors(Collection[_Editor]):
    @classmethod
    def model_class(cls) -> type[_Editor]:
        return _Editor


class _Book(Model):
    @classmethod
    def structure(cls) -> dict[str, Any]:
        return {"title": "string"}


class _Money:
    def __init__(self, cents: int) -> None:
        self.cents = cents

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _Money) and other.cents == self.cents


class _Vector:
    def __init__(self, x: int) -> None:
        self.x = x

    def to_json(self) -> dict[str, int]:
        return {"x": self.x}

    def clone(self) -> "_Vector":
        return _Vector(self.x)

    def equal(self, other: object) -> bool:
        return isinstance(other, _Vector) and other.x == self.x


# ###############
# Normal Cases
# ###############


def test_model_from_mapping() -> None:
    """A mapping builds the declared model; preparing does not link it to the owner."""
    owner = _Book({"title": "T"})
    description = create_type(_Author, "author")

    author = description.prepare({"name": "Ann"}, "author", owner)

    assert isinstance(author, _Author)
    assert author.get("name") == "Ann"
    assert author.parent is None


def test_model_instance_is_adopted() -> None:
    """An instance of the declared class is used as is."""
    author = _Author({"name": "Ann"})

    assert create_type(DataTypes.Model(_Author), "author").prepare(author, "author") is author


def test_model_to_json_clone_equal() -> None:
    """Model fields delegate to the embedded model."""
    description = create_type(_Author, "author")
    author = _Author({"name": "Ann"})

    cloned = description.clone(author, EqualStack())

    assert description.to_json(author, []) == {"name": "Ann"}
    assert cloned is not author
    assert description.equal(author, cloned, EqualStack()) is True
    assert description.equal(author, {"name": "Ann"}, EqualStack()) is True
    assert description.equal(author, None, EqualStack()) is False


def test_collection_from_rows() -> None:
    """A list of rows builds the declared collection without linking it to the owner."""
    owner = _Book({"title": "T"})
    description = create_type(_Authors, "authors")

    authors = description.prepare([{"name": "Ann"}, {"name": "Bob"}], "authors", owner)

    assert isinstance(authors, _Authors)
    assert len(authors) == 2
    assert authors.parent is None
    assert all(author.parent is None for author in authors)
    assert description.to_json(authors, []) == [{"name": "Ann"}, {"name": "Bob"}]


def test_custom_class_defaults() -> None:
    """Without to_json/clone/equal methods, values pass through, are deep-copied and compared with ==."""
    description = create_type(_Money, "price")
    price = _Money(100)

    cloned = description.clone(price, EqualStack())

    assert description.prepare(price, "price") is price
    assert description.to_json(price, []) is price
    assert cloned is not price
    assert description.equal(price, cloned, EqualStack()) is True


def test_custom_class_delegation() -> None:
    """Instances with to_json/clone/equal methods are asked directly."""
    description = create_type(DataTypes.CustomClass(_Vector), "position")
    position = _Vector(3)

    assert description.to_json(position, []) == {"x": 3}
    assert description.clone(position, EqualStack()).x == 3
    assert description.equal(position, _Vector(3), EqualStack()) is True
    assert description.equal(position, _Vector(4), EqualStack()) is False


# ###############
# Error Cases
# ###############


def test_model_wrong_kind() -> None:
    """Another model class is rejected."""
    with pytest.raises(WrongModelKindError, match="author: expected _Author, got _Editor"):
        create_type(_Author, "author").prepare(_Editor({"name": "E"}), "author")


def test_model_invalid_value() -> None:
    """Scalars are not models."""
    with pytest.raises(InvalidModelError, match="invalid _Author for author"):
        create_type(_Author, "author").prepare("Ann", "author")


def test_collection_wrong_kind_and_invalid_value() -> None:
    """Another collection class or a scalar is rejected."""
    description = create_type(_Authors, "authors")

    with pytest.raises(WrongModelKindError, match="expected _Authors, got _Editors"):
        description.prepare(_Editors(), "authors")
    with pytest.raises(InvalidCollectionError, match="invalid _Authors for authors"):
        description.prepare({"name": "Ann"}, "authors")


def test_custom_class_rejects_other_values() -> None:
    """Only instances of the constructor are accepted."""
    with pytest.raises(InvalidCustomClassError, match="invalid _Money for price"):
        create_type(_Money, "price").prepare(100, "price")


def test_reference_params_must_be_classes() -> None:
    """model, collection and constructor must be classes of the right kind."""
    with pytest.raises(InvalidTypeParamsError, match="'model' must be a Model subclass"):
        create_type({"type": "model", "model": _Authors}, "author")
    with pytest.raises(InvalidTypeParamsError, match="'collection' must be a Collection subclass"):
        create_type({"type": "collection", "collection": _Author}, "authors")
    with pytest.raises(InvalidTypeParamsError, match="'constructor' must be a class"):
        create_type({"type": "custom_class", "constructor": "Money"}, "price")
