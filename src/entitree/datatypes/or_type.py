# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""The ``or`` type: a value matching any one of several declarations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field as _Field

from entitree.datatypes.any_type import clone_value, equal_values, value_to_json
from entitree.datatypes.base import Type, TypeParams
from entitree.datatypes.registry import create_type
from entitree.errors import InputShapeError, InvalidOrValueError, ValueValidationError
from entitree.graph import EqualStack
from entitree.utils import invalid_value_as_string

# ###############
# Public Interface
# ###############


class OrParams(TypeParams):
    variants: list[Any] = _Field(alias="or", min_length=1)


class OrType(Type):
    """Tries each variant in declaration order; the first that accepts wins."""

    params_model = OrParams

    def __init__(self, params: Mapping[str, Any]) -> None:
        super().__init__(params)
        self.variants: tuple[Type, ...] = tuple(create_type(declaration, "or") for declaration in self.params.variants)

    def type_as_string(self) -> str:
        return " or ".join(variant.type_as_string() for variant in self.variants)

    def prepare_value(self, value: Any, key: str, model: Any) -> Any:
        if value is None:
            return None

        for variant in self.variants:
            try:
                prepared = variant.prepare(value, key, model)
            except (ValueValidationError, InputShapeError):
                continue
            if variant.validate(prepared, key):
                return prepared

        raise InvalidOrValueError(
            key=key,
            expected=self.type_as_string(),
            invalid_value=invalid_value_as_string(value),
        )

    def value_to_json(self, value: Any, stack: list[Any]) -> Any:
        return value_to_json(value, stack)

    def clone_value(self, value: Any, stack: EqualStack, parent: Any) -> Any:
        from entitree.entities.collection import Collection
        from entitree.entities.model import Model

        cloned = clone_value(value, stack)
        if parent is not None and isinstance(cloned, (Model, Collection)):
            cloned.parent = parent
        return cloned

    def equal_value(self, self_value: Any, other_value: Any, stack: EqualStack) -> bool:
        return equal_values(self_value, other_value, stack)
