# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""The ``custom_class`` type: instances of an arbitrary user class."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from entitree.datatypes.base import Type, TypeParams
from entitree.errors import InvalidCustomClassError, InvalidTypeParamsError
from entitree.graph import EqualStack
from entitree.utils import invalid_value_as_string

# ###############
# Public Interface
# ###############


class CustomClassParams(TypeParams):
    constructor: Any


class CustomClassType(Type):
    """Holds instances of ``constructor`` without coercion.

    Export, copy and comparison use the instance's own ``to_json``,
    ``clone`` and ``equal`` methods when it has them.
    """

    params_model = CustomClassParams

    def __init__(self, params: Mapping[str, Any]) -> None:
        super().__init__(params)
        constructor = self.params.constructor
        if not isinstance(constructor, type):
            raise InvalidTypeParamsError(reason=f"'constructor' must be a class, got {constructor!r}")
        self.constructor: type = constructor

    @classmethod
    def normalize_declaration(cls, declaration: dict[str, Any], key: str) -> dict[str, Any]:
        shorthand = declaration.get("type")
        if isinstance(shorthand, type):
            return {**declaration, "type": "custom_class", "constructor": shorthand}
        return declaration

    def type_as_string(self) -> str:
        return self.constructor.__name__

    def prepare_value(self, value: Any, key: str, model: Any) -> Any:
        if value is None or isinstance(value, self.constructor):
            return value
        raise InvalidCustomClassError(
            key=key,
            class_name=self.constructor.__name__,
            invalid_value=invalid_value_as_string(value),
        )

    def value_to_json(self, value: Any, stack: list[Any]) -> Any:
        if value is not None and callable(getattr(value, "to_json", None)):
            return value.to_json()
        return value

    def clone_value(self, value: Any, stack: EqualStack, parent: Any) -> Any:
        if value is None:
            return None
        if callable(getattr(value, "clone", None)):
            return value.clone()
        return copy.deepcopy(value)

    def equal_value(self, self_value: Any, other_value: Any, stack: EqualStack) -> bool:
        if self_value is not None and callable(getattr(self_value, "equal", None)):
            return bool(self_value.equal(other_value))
        return self_value == other_value
