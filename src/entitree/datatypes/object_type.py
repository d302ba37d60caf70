# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""The ``object`` type: nested mappings stored as read-only proxies."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from entitree.datatypes.any_type import guard_circular
from entitree.datatypes.base import Type, TypeParams
from entitree.datatypes.registry import create_type
from entitree.errors import (
    InvalidKeyError,
    InvalidObjectError,
    InvalidTypeParamsError,
    InvalidValueError,
    RequiredFieldError,
    UnknownFieldError,
)
from entitree.graph import EqualStack
from entitree.utils import invalid_value_as_string, is_plain_object

# ###############
# Public Interface
# ###############


class ObjectParams(TypeParams):
    element: Any = None
    structure: dict[str, Any] | None = None


class ObjectType(Type):
    """A mapping described either by one value type or by a fixed structure.

    With ``element`` every key is accepted and every value goes through the
    element type. With ``structure`` only the declared keys (plus keys
    accepted by a ``"*"`` entry) are allowed; absent keys are defaulted and
    required keys are enforced. Nested failures are keyed ``field.sub``.
    """

    params_model = ObjectParams

    def __init__(self, params: Mapping[str, Any]) -> None:
        super().__init__(params)
        if self.params.element is not None and self.params.structure is not None:
            raise InvalidTypeParamsError(reason="'element' and 'structure' are mutually exclusive")

        self.element: Type | None = None
        self.properties: dict[str, Type] = {}
        self.any_key: Type | None = None

        if self.params.structure is None:
            self.element = create_type(self.params.element if self.params.element is not None else "any", "element")
        else:
            for name, declaration in self.params.structure.items():
                if name == "*":
                    self.any_key = create_type(declaration, name)
                else:
                    self.properties[name] = create_type(declaration, name)

    @classmethod
    def normalize_declaration(cls, declaration: dict[str, Any], key: str) -> dict[str, Any]:
        shorthand = declaration.get("type")
        if shorthand is dict:
            return {**declaration, "type": "object"}
        if isinstance(shorthand, Mapping):
            if not shorthand:
                return {**declaration, "type": "object"}
            return {**declaration, "type": "object", "structure": dict(shorthand)}
        return declaration

    def type_as_string(self) -> str:
        if self.element is not None:
            return f"object[{self.element.type_as_string()}]"
        fields = ", ".join(f"{name}: {prop.type_as_string()}" for name, prop in self.properties.items())
        return f"{{{fields}}}"

    def prepare_value(self, value: Any, key: str, model: Any) -> Any:
        if value is None:
            return None

        if not is_plain_object(value):
            raise InvalidObjectError(key=key, invalid_value=invalid_value_as_string(value))

        result: dict[str, Any] = {}
        for name, item in value.items():
            sub_key = f"{key}.{name}"
            item_type = self._resolve(name, sub_key)
            prepared = item_type.prepare(item, sub_key, model)
            if not item_type.validate(prepared, sub_key):
                raise InvalidValueError(key=sub_key, value=invalid_value_as_string(item))
            result[name] = prepared

        for name, prop in self.properties.items():
            if name not in result:
                result[name] = prop.prepare(prop.default(), f"{key}.{name}", model)
            if prop.required and result[name] is None:
                raise RequiredFieldError(key=f"{key}.{name}")

        return MappingProxyType(result)

    def value_to_json(self, value: Any, stack: list[Any]) -> Any:
        if value is None:
            return None
        guard_circular(value, stack)
        return {name: self._type_for(name).to_json(item, [*stack]) for name, item in value.items()}

    def clone_value(self, value: Any, stack: EqualStack, parent: Any) -> Any:
        if value is None:
            return None
        if value in stack:
            return stack.get(value)

        data: dict[str, Any] = {}
        cloned = MappingProxyType(data)
        stack.add(value, cloned)
        for name, item in value.items():
            data[name] = self._type_for(name).clone(item, stack, parent)
        return cloned

    def equal_value(self, self_value: Any, other_value: Any, stack: EqualStack) -> bool:
        if self_value is None or other_value is None:
            return self_value is None and other_value is None
        if not is_plain_object(other_value):
            return False

        if self_value in stack:
            return True
        stack.add(self_value, other_value)

        if self_value.keys() != other_value.keys():
            return False
        return all(self._type_for(name).equal(item, other_value[name], stack) for name, item in self_value.items())

    # ################
    # Implementation
    # ################

    def _type_for(self, name: str) -> Type:
        if self.element is not None:
            return self.element
        prop = self.properties.get(name)
        if prop is not None:
            return prop
        if self.any_key is not None:
            return self.any_key
        return create_type("any", name)

    def _resolve(self, name: str, sub_key: str) -> Type:
        if self.element is not None:
            return self.element
        prop = self.properties.get(name)
        if prop is not None:
            return prop
        if self.any_key is None:
            raise UnknownFieldError(property_name=sub_key)
        if not self.any_key.validate_key(name):
            raise InvalidKeyError(key=sub_key)
        return self.any_key
