# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for structure compilation and caching."""

import re
from typing import Any

import pytest

from entitree import Model
from entitree.datatypes.number_type import NumberType
from entitree.datatypes.string_type import StringType
from entitree.entities import compile_structure
from entitree.errors import ModelWithoutStructureError, UnknownTypeError

# ###############
# Helpers
# ###############


class Account(Model):
    @classmethod
    def structure(cls) -> dict[str, Any]:
        return {
            "id": {"type": "number", "primary": True},
            "login": "string",
            "*": {"type": "string", "key": re.compile(r"^meta_")},
        }


class Plain(Model):
    @classmethod
    def structure(cls) -> dict[str, Any]:
        return {"title": "string"}


class Broken(Model):
    @classmethod
    def structure(cls) -> dict[str, Any]:
        return {"title": "strnig"}


class Undeclared(Model):
    pass


# ###############
# Normal Cases
# ###############


def test_compile_is_cached_per_class() -> None:
    """The same compiled structure is returned for repeated calls."""
    assert compile_structure(Account) is compile_structure(Account)
    assert compile_structure(Account) is not compile_structure(Plain)


def test_compiled_fields() -> None:
    """Declared fields keep their order; the catch-all is held apart."""
    compiled = compile_structure(Account)

    assert list(compiled.properties) == ["id", "login"]
    assert isinstance(compiled.properties["id"], NumberType)
    assert compiled.primary_key == "id"
    assert isinstance(compiled.any_key, StringType)


def test_description_falls_back_to_catch_all() -> None:
    """Unknown keys resolve to the catch-all type, when one is declared."""
    account = compile_structure(Account)
    plain = compile_structure(Plain)

    assert account.description("login") is account.properties["login"]
    assert account.description("meta_color") is account.any_key
    assert plain.description("meta_color") is None
    assert plain.primary_key is None
    assert plain.any_key is None


def test_properties_are_read_only() -> None:
    """The compiled field table cannot be modified."""
    compiled = compile_structure(Plain)

    with pytest.raises(TypeError):
        compiled.properties["extra"] = compiled.properties["title"]  # type: ignore[index]


# ###############
# Error Cases
# ###############


def test_unknown_type_in_structure() -> None:
    """An unknown type tag fails compilation with the field name prefixed."""
    with pytest.raises(UnknownTypeError, match="title: unknown type: strnig"):
        compile_structure(Broken)


def test_model_without_structure() -> None:
    """A model that does not override structure() cannot be compiled."""
    with pytest.raises(ModelWithoutStructureError, match="model Undeclared must declare structure"):
        Undeclared()
