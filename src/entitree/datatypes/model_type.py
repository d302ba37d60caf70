# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""The ``model`` type: a field holding one embedded Model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from entitree.datatypes.any_type import equal_values, value_to_json
from entitree.datatypes.base import Type, TypeParams
from entitree.errors import InvalidModelError, InvalidTypeParamsError, WrongModelKindError
from entitree.graph import EqualStack
from entitree.utils import invalid_value_as_string, is_plain_object

# ###############
# Public Interface
# ###############


class ModelParams(TypeParams):
    model: Any


class ModelType(Type):
    """Embeds a Model subclass.

    A mapping builds a new instance; an instance of the declared class is
    adopted as is. The owning model becomes the child's parent when
    it commits the row.
    """

    params_model = ModelParams

    def __init__(self, params: Mapping[str, Any]) -> None:
        from entitree.entities.model import Model

        super().__init__(params)
        model_class = self.params.model
        if not (isinstance(model_class, type) and issubclass(model_class, Model)):
            raise InvalidTypeParamsError(reason=f"'model' must be a Model subclass, got {model_class!r}")
        self.model: type[Model] = model_class

    @classmethod
    def normalize_declaration(cls, declaration: dict[str, Any], key: str) -> dict[str, Any]:
        from entitree.entities.model import Model

        shorthand = declaration.get("type")
        if isinstance(shorthand, type) and issubclass(shorthand, Model):
            return {**declaration, "type": "model", "model": shorthand}
        return declaration

    def type_as_string(self) -> str:
        return self.model.__name__

    def prepare_value(self, value: Any, key: str, model: Any) -> Any:
        from entitree.entities.model import Model

        if value is None:
            return None

        if isinstance(value, self.model):
            child = value
        elif isinstance(value, Model):
            raise WrongModelKindError(owner=key, expected=self.model.__name__, invalid=type(value).__name__)
        elif is_plain_object(value):
            child = self.model(value)
        else:
            raise InvalidModelError(key=key, model=self.model.__name__, invalid_value=invalid_value_as_string(value))

        return child

    def value_to_json(self, value: Any, stack: list[Any]) -> Any:
        if value is None:
            return None
        return value_to_json(value, stack)

    def clone_value(self, value: Any, stack: EqualStack, parent: Any) -> Any:
        if value is None:
            return None
        cloned = value.clone(stack)
        if parent is not None:
            cloned.parent = parent
        return cloned

    def equal_value(self, self_value: Any, other_value: Any, stack: EqualStack) -> bool:
        if self_value is None or other_value is None:
            return self_value is None and other_value is None
        if is_plain_object(other_value):
            return self_value.equal(other_value, stack)
        return equal_values(self_value, other_value, stack)
