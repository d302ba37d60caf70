# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""The ``array`` type: homogeneous sequences stored as tuples."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from entitree.datatypes.any_type import guard_circular
from entitree.datatypes.base import Type, TypeParams
from entitree.datatypes.registry import create_type
from entitree.errors import (
    ConflictNullAndEmptyArrayParameterError,
    DuplicateValueForUniqueArrayError,
    InvalidArrayError,
    InvalidValueError,
)
from entitree.graph import EqualStack
from entitree.utils import invalid_value_as_string, is_plain_array

# ###############
# Public Interface
# ###############


class ArrayParams(TypeParams):
    element: Any = "any"
    unique: bool = False
    sort: bool = False
    null_as_empty: bool = False
    empty_as_null: bool = False


class ArrayType(Type):
    """A list or tuple whose items all go through one element type.

    Items are prepared and validated one by one; a failure is reported
    under ``field[index]``. The prepared sequence is stored as a tuple.
    """

    params_model = ArrayParams

    def __init__(self, params: Mapping[str, Any]) -> None:
        super().__init__(params)
        self.element: Type = create_type(self.params.element, "element")
        self.unique: bool = self.params.unique
        self.sort: bool = self.params.sort
        self.null_as_empty: bool = self.params.null_as_empty
        self.empty_as_null: bool = self.params.empty_as_null

        if self.null_as_empty and self.empty_as_null:
            raise ConflictNullAndEmptyArrayParameterError()

    @classmethod
    def normalize_declaration(cls, declaration: dict[str, Any], key: str) -> dict[str, Any]:
        shorthand = declaration.get("type")
        if shorthand is list:
            return {**declaration, "type": "array"}
        if not isinstance(shorthand, list):
            return declaration

        if not shorthand:
            element: Any = "any"
        elif len(shorthand) == 1:
            element = shorthand[0]
        else:
            element = {"type": "or", "or": list(shorthand)}
        return {**declaration, "type": "array", "element": element}

    def type_as_string(self) -> str:
        return f"array[{self.element.type_as_string()}]"

    def prepare_value(self, value: Any, key: str, model: Any) -> Any:
        if value is None:
            return () if self.null_as_empty else None

        if not is_plain_array(value):
            raise InvalidArrayError(key=key, invalid_value=invalid_value_as_string(value))

        items = []
        for index, item in enumerate(value):
            item_key = f"{key}[{index}]"
            prepared = self.element.prepare(item, item_key, model)
            if not self.element.validate(prepared, item_key):
                raise InvalidValueError(key=item_key, value=invalid_value_as_string(item))
            items.append(prepared)

        if self.unique:
            self._check_unique(items, key)

        if self.sort:
            try:
                items.sort()
            except TypeError as exc:
                raise InvalidArrayError(key=key, invalid_value=invalid_value_as_string(value)) from exc

        if self.empty_as_null and not items:
            return None
        return tuple(items)

    def value_to_json(self, value: Any, stack: list[Any]) -> Any:
        if value is None:
            return None
        guard_circular(value, stack)
        return [self.element.to_json(item, [*stack]) for item in value]

    def clone_value(self, value: Any, stack: EqualStack, parent: Any) -> Any:
        if value is None:
            return None
        if value in stack:
            return stack.get(value)

        cloned = tuple(self.element.clone(item, stack, parent) for item in value)
        stack.add(value, cloned)
        return cloned

    def equal_value(self, self_value: Any, other_value: Any, stack: EqualStack) -> bool:
        if self_value is None or other_value is None:
            return self_value is None and other_value is None
        if not is_plain_array(other_value) or len(self_value) != len(other_value):
            return False
        if not self_value:
            return True

        if self_value in stack:
            return stack.get(self_value) is other_value
        stack.add(self_value, other_value)

        return all(
            self.element.equal(self_item, other_item, stack)
            for self_item, other_item in zip(self_value, other_value, strict=True)
        )

    # ################
    # Implementation
    # ################

    def _check_unique(self, items: list[Any], key: str) -> None:
        for index, item in enumerate(items):
            for previous in items[:index]:
                if self.element.equal(previous, item, EqualStack()):
                    raise DuplicateValueForUniqueArrayError(key=key, invalid_value=invalid_value_as_string(item))
