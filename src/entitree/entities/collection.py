# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Ordered, observable list of models of one declared kind.

Every mutator first turns its input rows into models, then updates
``models`` and only then emits one ``add`` or ``remove`` event per affected
model. Read-only projections never emit events.
"""

from __future__ import annotations

import functools
import weakref
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, Generic, TypeVar

from entitree.config import get_config
from entitree.datatypes.any_type import value_to_json
from entitree.entities.model import Model
from entitree.entities.structure import compile_structure
from entitree.errors import (
    CollectionWithoutModelError,
    InvalidRowError,
    InvalidSortParamsError,
    WrongModelKindError,
)
from entitree.events import CollectionEvent, EventTrigger
from entitree.graph import EqualStack
from entitree.utils import invalid_value_as_string, is_plain_array, unique_id

M = TypeVar("M", bound=Model)
C = TypeVar("C", bound="Collection[Any]")
T = TypeVar("T")

_NO_INITIAL = object()

# ###############
# Public Interface
# ###############


class Collection(EventTrigger, Generic[M]):
    """Base class of all collections.

    Example::

        class Users(Collection[User]):
            @classmethod
            def model_class(cls):
                return User

        users = Users([{"id": 1, "name": "Bob"}])
        users.create({"id": 2, "name": "Alice"})
        users.sort("name")
    """

    def __init__(self, rows: Iterable[Mapping[str, Any] | M] | Collection[M] | None = None) -> None:
        compile_structure(self.model_class())
        self._parent: weakref.ReferenceType[Model] | None = None

        if rows is None:
            rows = []
        elif isinstance(rows, Collection):
            rows = rows.models
        elif not is_plain_array(rows):
            raise InvalidRowError(model=self.model_class().__name__, invalid_value=invalid_value_as_string(rows))

        self.models: list[M] = [self.prepare_row(row) for row in rows]
        self.cid: str = unique_id(get_config().collection_id_prefix)
        self.initialize()

    @classmethod
    def model_class(cls) -> type[M]:
        """Return the Model subclass held by this collection; must be overridden."""
        raise CollectionWithoutModelError(class_name=cls.__name__)

    def initialize(self) -> None:
        """Called once at the end of construction."""

    @property
    def length(self) -> int:
        return len(self.models)

    @property
    def parent(self) -> Model | None:
        """The model that embeds this collection, if it is still alive."""
        if self._parent is None:
            return None
        return self._parent()

    @parent.setter
    def parent(self, value: Model | None) -> None:
        self._parent = weakref.ref(value) if value is not None else None
        for model in self.models:
            model.parent = value

    def prepare_row(self, row: Mapping[str, Any] | M) -> M:
        """Turn *row* into a model of the declared kind.

        An instance of the declared class is adopted without copying. Its
        parent link is only updated once the model is actually added.

        Raises:
            WrongModelKindError: If *row* is a model of another class.
            InvalidRowError: If *row* is neither a model nor a mapping.
        """
        model_class = self.model_class()

        if isinstance(row, model_class):
            model = row
        elif isinstance(row, Model):
            raise WrongModelKindError(
                owner=type(self).__name__,
                expected=model_class.__name__,
                invalid=type(row).__name__,
            )
        elif isinstance(row, Mapping):
            model = model_class(row)
        else:
            raise InvalidRowError(model=model_class.__name__, invalid_value=invalid_value_as_string(row))
        return model

    # Mutators

    def at(self, index: int, row: Mapping[str, Any] | M | None = None) -> M | None:
        """Read the model at *index*, or replace it with *row*.

        Writing at ``index == length`` appends.

        Raises:
            IndexError: When writing beyond the end.
        """
        if row is None:
            if 0 <= index < len(self.models):
                return self.models[index]
            return None

        if not 0 <= index <= len(self.models):
            raise IndexError(f"collection index out of range: {index}")

        model = self.prepare_row(row)
        removed = self.models[index] if index < len(self.models) else None
        if removed is None:
            self.models.append(model)
        else:
            self.models[index] = model

        if removed is not None:
            self._emit_removed([removed])
        self._emit_added([model])
        return model

    def push(self, *rows: Mapping[str, Any] | M) -> int:
        """Append *rows* and return the new length."""
        models = [self.prepare_row(row) for row in rows]
        self.models.extend(models)
        self._emit_added(models)
        return len(self.models)

    def add(self, *rows: Mapping[str, Any] | M | Iterable[Mapping[str, Any] | M]) -> None:
        """Append rows; lists, tuples and collections are flattened one level."""
        flattened: list[Any] = []
        for item in rows:
            if isinstance(item, Collection):
                flattened.extend(item.models)
            elif is_plain_array(item):
                flattened.extend(item)
            else:
                flattened.append(item)

        models = [self.prepare_row(row) for row in flattened]
        self.models.extend(models)
        self._emit_added(models)

    def unshift(self, *rows: Mapping[str, Any] | M) -> int:
        """Prepend *rows* (keeping their order) and return the new length."""
        models = [self.prepare_row(row) for row in rows]
        self.models[0:0] = models
        self._emit_added(models)
        return len(self.models)

    def pop(self) -> M | None:
        if not self.models:
            return None
        model = self.models.pop()
        self._emit_removed([model])
        return model

    def shift(self) -> M | None:
        if not self.models:
            return None
        model = self.models.pop(0)
        self._emit_removed([model])
        return model

    def fill(self, row: Mapping[str, Any] | M, start: int = 0, end: int | None = None) -> Collection[M]:
        """Overwrite the slots in ``[start, end)`` with models built from *row*.

        Negative bounds count from the end. Removes for the overwritten
        models are emitted before the adds.
        """
        length = len(self.models)
        first = _normalize_index(start, length)
        final = length if end is None else _normalize_index(end, length)

        added = [self.prepare_row(row) for _ in range(first, final)]
        removed = self.models[first:final]
        self.models[first:final] = added

        self._emit_removed(removed)
        self._emit_added(added)
        return self

    def splice(self, start: int, delete_count: int | None = None, *rows: Mapping[str, Any] | M) -> list[M]:
        """Remove ``delete_count`` models at *start*, insert *rows* there.

        Returns:
            The removed models, in order.
        """
        models = [self.prepare_row(row) for row in rows]

        length = len(self.models)
        first = _normalize_index(start, length)
        if delete_count is None:
            delete_count = length - first
        stop = first + max(0, min(delete_count, length - first))

        removed = self.models[first:stop]
        self.models[first:stop] = models

        self._emit_removed(removed)
        self._emit_added(models)
        return removed

    def reset(self) -> None:
        """Remove every model."""
        removed = self.models
        self.models = []
        self._emit_removed(removed)

    def create(self, row: Mapping[str, Any]) -> M:
        """Build a model from *row*, append it and return it."""
        model = self.prepare_row(row)
        self.models.append(model)
        self._emit_added([model])
        return model

    def remove(self, model_or_id: M | Any) -> M | None:
        """Remove one model, matched by identity or by primary value."""
        if isinstance(model_or_id, Model):
            index = self.index_of(model_or_id)
        else:
            index = self.find_index(lambda model: model.primary_value == model_or_id)

        if index == -1:
            return None

        model = self.models.pop(index)
        self._emit_removed([model])
        return model

    def sort(self, compare_or_key: str | Callable[[M, M], int] | None = None, *keys: str) -> None:
        """Sort in place by field names (ascending) or by a comparator.

        Field values are compared with ``<`` and ``>`` only; None sorts first.
        Sorting emits no events.

        Raises:
            InvalidSortParamsError: If neither a field name nor a comparator is
                given, or if values of a sort field cannot be compared.
        """
        if isinstance(compare_or_key, str):
            fields = (compare_or_key, *keys)
            compare = functools.cmp_to_key(lambda left, right: _compare_rows(left, right, fields))
            ordered = sorted(self.models, key=compare)
        elif callable(compare_or_key):
            ordered = sorted(self.models, key=functools.cmp_to_key(compare_or_key))
        else:
            raise InvalidSortParamsError(invalid_value=invalid_value_as_string(compare_or_key))
        # A failed comparison leaves the order untouched.
        self.models[:] = ordered

    def reverse(self: C) -> C:
        self.models.reverse()
        return self

    # Projections

    def for_each(self, iteration: Callable[[M], object]) -> None:
        for model in list(self.models):
            iteration(model)

    each = for_each

    def find(self, predicate: Callable[[M], bool]) -> M | None:
        return next((model for model in self.models if predicate(model)), None)

    def find_index(self, predicate: Callable[[M], bool]) -> int:
        return next((index for index, model in enumerate(self.models) if predicate(model)), -1)

    def filter(self, predicate: Callable[[M], bool]) -> list[M]:
        return [model for model in self.models if predicate(model)]

    def map(self, iteration: Callable[[M], T]) -> list[T]:
        return [iteration(model) for model in self.models]

    def flat_map(self, iteration: Callable[[M], Any]) -> list[Any]:
        """Map, then flatten list and tuple results one level."""
        output: list[Any] = []
        for model in self.models:
            result = iteration(model)
            if is_plain_array(result):
                output.extend(result)
            else:
                output.append(result)
        return output

    def reduce(self, iteration: Callable[[Any, M], Any], initial: Any = _NO_INITIAL) -> Any:
        if initial is _NO_INITIAL:
            return functools.reduce(iteration, self.models)
        return functools.reduce(iteration, self.models, initial)

    def reduce_right(self, iteration: Callable[[Any, M], Any], initial: Any = _NO_INITIAL) -> Any:
        if initial is _NO_INITIAL:
            return functools.reduce(iteration, reversed(self.models))
        return functools.reduce(iteration, reversed(self.models), initial)

    def every(self, predicate: Callable[[M], bool]) -> bool:
        return all(predicate(model) for model in self.models)

    def some(self, predicate: Callable[[M], bool]) -> bool:
        return any(predicate(model) for model in self.models)

    def slice(self, start: int | None = None, end: int | None = None) -> list[M]:
        return self.models[start:end]

    def flat(self) -> list[M]:
        return list(self.models)

    def index_of(self, model: M, from_index: int = 0) -> int:
        start = _normalize_index(from_index, len(self.models))
        for index in range(start, len(self.models)):
            if self.models[index] is model:
                return index
        return -1

    def last_index_of(self, model: M, from_index: int | None = None) -> int:
        length = len(self.models)
        if from_index is None:
            start = length - 1
        elif from_index < 0:
            start = length + from_index
        else:
            start = min(from_index, length - 1)
        for index in range(start, -1, -1):
            if self.models[index] is model:
                return index
        return -1

    def includes(self, model: M) -> bool:
        return self.index_of(model) != -1

    def first(self) -> M | None:
        return self.models[0] if self.models else None

    def last(self) -> M | None:
        return self.models[-1] if self.models else None

    def join(self, separator: str = ",") -> str:
        return separator.join(str(model) for model in self.models)

    def get(self, primary_value: Any) -> M | None:
        """Return the model whose primary value equals *primary_value*."""
        return self.find(lambda model: model.primary_value == primary_value)

    def concat(self: C, *values: Collection[Any] | Iterable[Mapping[str, Any] | Model]) -> C:
        """Return a new collection holding these models followed by *values*."""
        models: list[Any] = list(self.models)
        for value in values:
            if isinstance(value, Collection):
                models.extend(value.models)
            else:
                models.extend(self.prepare_row(row) for row in value)
        return type(self)(models)

    # Structural algorithms

    def to_json(self, stack: list[Any] | None = None) -> list[Any]:
        if stack is None:
            stack = [self]
        return [value_to_json(model, [*stack]) for model in self.models]

    def clone(self: C, stack: EqualStack | None = None) -> C:
        """Deep copy; models shared with the rest of the graph are copied once."""
        if stack is None:
            stack = EqualStack()

        existing = stack.get(self)
        if existing is not None:
            return existing

        cls = type(self)
        copy = cls.__new__(cls)
        stack.add(self, copy)

        copy._parent = None
        copy.cid = unique_id(get_config().collection_id_prefix)
        copy.models = [model.clone(stack) for model in self.models]
        return copy

    def equal(self, other: Collection[Any] | list[Any] | tuple[Any, ...], stack: EqualStack | None = None) -> bool:
        """Element-wise equality against a collection or a plain list of models or rows."""
        if isinstance(other, Collection):
            other_items: list[Any] = other.models
        elif is_plain_array(other):
            other_items = list(other)
        else:
            return False

        if len(self.models) != len(other_items):
            return False

        if stack is None:
            stack = EqualStack()
        if self in stack:
            return stack.get(self) is other
        stack.add(self, other)

        return all(model.equal(item, stack) for model, item in zip(self.models, other_items, strict=True))

    def __len__(self) -> int:
        return len(self.models)

    def __iter__(self) -> Iterator[M]:
        return iter(self.models)

    def __getitem__(self, index: int) -> M:
        return self.models[index]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.__dict__.get('cid', '?')} length={len(self.models)}>"

    # ################
    # Implementation
    # ################

    def _emit_added(self, models: list[M]) -> None:
        # Added models join the owner before any listener runs.
        parent = self.parent
        if parent is not None:
            for model in models:
                model.parent = parent
        for model in models:
            self.trigger("add", CollectionEvent(type="add", model=model, collection=self))

    def _emit_removed(self, models: list[M]) -> None:
        for model in models:
            self.trigger("remove", CollectionEvent(type="remove", model=model, collection=self))


def _normalize_index(index: int, length: int) -> int:
    if index < 0:
        return max(length + index, 0)
    return min(index, length)


def _compare_rows(left: Model, right: Model, fields: tuple[str, ...]) -> int:
    for field in fields:
        try:
            result = _compare_values(left.get(field), right.get(field))
        except TypeError as exc:
            raise InvalidSortParamsError(invalid_value=f"values of {field!r} are not comparable") from exc
        if result:
            return result
    return 0


def _compare_values(left: Any, right: Any) -> int:
    if left is None or right is None:
        return (left is not None) - (right is not None)
    if left > right:
        return 1
    if left < right:
        return -1
    return 0
