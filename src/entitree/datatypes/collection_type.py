# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""The ``collection`` type: a field holding an embedded Collection."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from entitree.datatypes.any_type import value_to_json
from entitree.datatypes.base import Type, TypeParams
from entitree.errors import InvalidCollectionError, InvalidTypeParamsError, WrongModelKindError
from entitree.graph import EqualStack
from entitree.utils import invalid_value_as_string, is_plain_array

# ###############
# Public Interface
# ###############


class CollectionParams(TypeParams):
    collection: Any


class CollectionType(Type):
    """Embeds a Collection subclass, built from a list of rows or adopted."""

    params_model = CollectionParams

    def __init__(self, params: Mapping[str, Any]) -> None:
        from entitree.entities.collection import Collection

        super().__init__(params)
        collection_class = self.params.collection
        if not (isinstance(collection_class, type) and issubclass(collection_class, Collection)):
            raise InvalidTypeParamsError(reason=f"'collection' must be a Collection subclass, got {collection_class!r}")
        self.collection: type[Collection] = collection_class

    @classmethod
    def normalize_declaration(cls, declaration: dict[str, Any], key: str) -> dict[str, Any]:
        from entitree.entities.collection import Collection

        shorthand = declaration.get("type")
        if isinstance(shorthand, type) and issubclass(shorthand, Collection):
            return {**declaration, "type": "collection", "collection": shorthand}
        return declaration

    def type_as_string(self) -> str:
        return self.collection.__name__

    def prepare_value(self, value: Any, key: str, model: Any) -> Any:
        from entitree.entities.collection import Collection

        if value is None:
            return None

        if isinstance(value, self.collection):
            collection = value
        elif isinstance(value, Collection):
            raise WrongModelKindError(owner=key, expected=self.collection.__name__, invalid=type(value).__name__)
        elif is_plain_array(value):
            collection = self.collection(value)
        else:
            raise InvalidCollectionError(
                key=key,
                collection=self.collection.__name__,
                invalid_value=invalid_value_as_string(value),
            )

        return collection

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
        from entitree.entities.collection import Collection

        if self_value is None or other_value is None:
            return self_value is None and other_value is None
        if not isinstance(other_value, Collection) and not is_plain_array(other_value):
            return False
        return self_value.equal(other_value, stack)
