# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema-validated, observable entity holding a frozen row of field values.

A subclass declares its fields by overriding the ``structure`` classmethod.
Every successful :meth:`Model.set` replaces the row with a new read-only
mapping and emits ``change:<field>`` events followed by one ``change`` event.
"""

from __future__ import annotations

import weakref
from collections.abc import Callable, Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, TypeVar

from entitree.config import get_config
from entitree.datatypes import Type
from entitree.entities.structure import CompiledStructure, compile_structure
from entitree.errors import (
    ConstValueError,
    InvalidKeyError,
    InvalidValueError,
    ModelWithoutStructureError,
    NonObjectInputError,
    RequiredFieldError,
    UnknownFieldError,
)
from entitree.events import ChangeEvent, ChangeKeyEvent, EventTrigger
from entitree.graph import EqualStack, Walker
from entitree.utils import invalid_value_as_string, is_plain_array, is_plain_object, same_value, unique_id

M = TypeVar("M", bound="Model")

# ###############
# Public Interface
# ###############


class Model(EventTrigger):
    """Base class of all entities.

    Example::

        class User(Model):
            @classmethod
            def structure(cls):
                return {
                    "id": {"type": "number", "primary": True},
                    "name": {"type": "string", "required": True, "trim": True},
                }

        user = User({"id": 1, "name": "  Bob "})
        user.get("name")  # "Bob"
    """

    def __init__(self, row: Mapping[str, Any] | Model | None = None) -> None:
        compiled = compile_structure(type(self))
        self.primary_value: Any = None
        self._parent: weakref.ReferenceType[Model] | None = None

        default_row: dict[str, Any] = {}
        for key, description in compiled.properties.items():
            # A default may itself need coercion (or be invalid).
            default_row[key] = description.prepare(description.default(), key, self)
        self._row: Mapping[str, Any] = MappingProxyType(default_row)
        _adopt_children(default_row.values(), self)
        self._refresh_primary_value(compiled)

        # Const fields may only be seeded by the constructor's own set().
        self._initializing = True
        try:
            self.set(row if row is not None else {})
        finally:
            self._initializing = False

        self.cid: str = unique_id(get_config().model_id_prefix)
        self.initialize()

    @classmethod
    def structure(cls) -> Mapping[str, Any]:
        """Return the field declarations of this model; must be overridden."""
        raise ModelWithoutStructureError(class_name=cls.__name__)

    # Hooks

    def initialize(self) -> None:
        """Called once at the end of construction."""

    def prepare(self, row: dict[str, Any]) -> None:
        """Adjust the staged row in place before changes are computed."""

    def validate(self, row: Mapping[str, Any]) -> None:
        """Raise to reject the new row as a whole."""

    def prepare_json(self, json: dict[str, Any]) -> None:
        """Adjust the output of :meth:`to_json` in place."""

    # Row access

    @property
    def row(self) -> Mapping[str, Any]:
        return self._row

    @property
    def primary_key(self) -> str | None:
        return compile_structure(type(self)).primary_key

    @property
    def parent(self) -> Model | None:
        """The model that embeds this one, if it is still alive."""
        if self._parent is None:
            return None
        return self._parent()

    @parent.setter
    def parent(self, value: Model | None) -> None:
        self._parent = weakref.ref(value) if value is not None else None

    def get(self, key: str) -> Any:
        return self._row.get(key)

    def has_property(self, key: str) -> bool:
        """Return True if *key* is present in the row (declared or caught)."""
        return key in self._row

    def has_value(self, key: str) -> bool:
        """Return True if *key* holds a non-None value."""
        return self._row.get(key) is not None

    def get_description(self, key: str) -> Type | None:
        """Return the type governing *key*, falling back to the ``"*"`` entry."""
        return compile_structure(type(self)).description(key)

    # Mutation

    def set(self, row: Mapping[str, Any] | Model, only_validate: bool = False) -> None:
        """Prepare, validate and commit a partial row.

        Args:
            row: Mapping of field name to raw value, or another model whose
                row is used.
            only_validate: Run the whole pipeline, including the ``validate``
                hook, but neither commit nor notify.

        Raises:
            NonObjectInputError: If *row* is neither a mapping nor a model.
            UnknownFieldError: For an undeclared key without a ``"*"`` entry.
            InvalidKeyError: For an extra key rejected by the ``"*"`` entry.
            InvalidValueError: If a prepared value fails its type's validation.
            ConstValueError: If a const field would change after construction.
            RequiredFieldError: If a required field would become None.
        """
        if isinstance(row, Model):
            row = row.row
        if not isinstance(row, Mapping):
            raise NonObjectInputError()

        compiled = compile_structure(type(self))
        old_row = self._row
        new_row = dict(old_row)

        for key, value in row.items():
            description = self._description_for_input(compiled, key)
            prepared = description.prepare(value, key, self)
            if not description.validate(prepared, key):
                raise InvalidValueError(key=key, value=invalid_value_as_string(prepared))
            new_row[key] = prepared

        has_row_hook = type(self).prepare is not Model.prepare
        staged = dict(new_row)
        self.prepare(new_row)

        changes: dict[str, Any] = {}
        for key, new_value in new_row.items():
            # Values added or rewritten by the prepare hook go through the input checks again.
            if has_row_hook and (key not in staged or staged[key] is not new_value):
                description = self._description_for_input(compiled, key)
                new_value = description.prepare(new_value, key, self)
                if not description.validate(new_value, key):
                    raise InvalidValueError(key=key, value=invalid_value_as_string(new_value))
                new_row[key] = new_value
            else:
                description = compiled.description(key)
                if description is None:
                    raise UnknownFieldError(property_name=key)

            old_value = old_row.get(key, _MISSING)
            changed = not same_value(old_value, new_value)

            if changed and description.const and not self._initializing:
                raise ConstValueError(key=key)
            if description.required and new_value is None:
                raise RequiredFieldError(key=key)
            if changed:
                changes[key] = new_value

        if not changes:
            return

        frozen_row = MappingProxyType(new_row)
        self.validate(frozen_row)

        if only_validate:
            return

        self._row = frozen_row
        self._refresh_primary_value(compiled)
        _adopt_children(changes.values(), self)

        for key, value in changes.items():
            self.trigger(f"change:{key}", ChangeKeyEvent(prev=old_row.get(key), change=value))
        self.trigger("change", ChangeEvent(prev=old_row, changes=MappingProxyType(changes)))

    def is_valid(self, row: Mapping[str, Any] | Model) -> bool:
        """Return True if ``set(row)`` would succeed, without applying it.

        Raises:
            NonObjectInputError: If *row* is neither a mapping nor a model.
        """
        if not isinstance(row, (Mapping, Model)):
            raise NonObjectInputError()
        try:
            self.set(row, only_validate=True)
        except Exception:  # the validate hook may raise any exception
            return False
        return True

    # Structural algorithms

    def to_json(self, stack: list[Any] | None = None) -> dict[str, Any]:
        """Return the row as plain data.

        Raises:
            CircularReferenceError: If a non-model structure refers to itself.
        """
        if stack is None:
            stack = [self]

        json: dict[str, Any] = {}
        for key, value in self._row.items():
            if value is None:
                json[key] = None
                continue
            json[key] = self._require_description(key).to_json(value, [*stack])

        self.prepare_json(json)
        return json

    def equal(self, other: Model | Mapping[str, Any], stack: EqualStack | None = None) -> bool:
        """Structural equality against another model or a plain row.

        Keys present on the other side but absent here make the two unequal.
        """
        if stack is None:
            stack = EqualStack()

        if isinstance(other, Model):
            other_row: Mapping[str, Any] = other.row
        elif isinstance(other, Mapping):
            other_row = other
        else:
            return False

        for key, value in self._row.items():
            if not self._require_description(key).equal(value, other_row.get(key), stack):
                return False

        return all(key in self._row for key in other_row)

    def clone(self: M, stack: EqualStack | None = None) -> M:
        """Return a deep copy; shared and cyclic references are copied once.

        The copy is built without running ``__init__``, so values are not
        re-validated and no events fire. Listeners are not copied.
        """
        if stack is None:
            stack = EqualStack()

        existing = stack.get(self)
        if existing is not None:
            return existing

        cls = type(self)
        copy = cls.__new__(cls)
        stack.add(self, copy)

        copy._parent = None
        copy._initializing = False
        copy.cid = unique_id(get_config().model_id_prefix)

        cloned_row: dict[str, Any] = {}
        for key, value in self._row.items():
            if value is not None:
                value = self._require_description(key).clone(value, stack, copy)
            cloned_row[key] = value

        copy._row = MappingProxyType(cloned_row)
        copy.primary_value = None
        copy._refresh_primary_value(compile_structure(cls))
        return copy

    # Traversal

    def walk(self, iteration: Callable[[Model, Walker], object], stack: EqualStack | None = None) -> None:
        """Depth-first pre-order visit of every model reachable from this one.

        Each model is visited at most once. The callback receives the model
        and a :class:`~entitree.graph.Walker`; ``walker.exit()`` stops the
        whole traversal and ``walker.skip()`` skips the model's children.
        """
        if stack is None:
            stack = EqualStack()
            stack.add(self, self)
        self._walk(iteration, stack)

    def find_child(self, iteration: Callable[[Model], bool]) -> Model | None:
        """Return the first descendant for which *iteration* is true."""
        found: list[Model] = []

        def _visit(model: Model, walker: Walker) -> None:
            if iteration(model):
                found.append(model)
                walker.exit()

        self.walk(_visit)
        return found[0] if found else None

    def filter_children(self, iteration: Callable[[Model], bool]) -> list[Model]:
        """Return every descendant for which *iteration* is true."""
        children: list[Model] = []

        def _visit(model: Model, walker: Walker) -> None:
            if iteration(model):
                children.append(model)

        self.walk(_visit)
        return children

    def filter_children_by_instance(self, model_class: type[M]) -> list[M]:
        return self.filter_children(lambda model: isinstance(model, model_class))  # type: ignore[return-value]

    def find_parent(self, iteration: Callable[[Model], bool]) -> Model | None:
        """Return the nearest ancestor for which *iteration* is true."""
        for parent in self._iter_parents():
            if iteration(parent):
                return parent
        return None

    def filter_parents(self, iteration: Callable[[Model], bool]) -> list[Model]:
        """Return every ancestor for which *iteration* is true, nearest first."""
        return [parent for parent in self._iter_parents() if iteration(parent)]

    def find_parent_instance(self, model_class: type[M]) -> M | None:
        return self.find_parent(lambda model: isinstance(model, model_class))  # type: ignore[return-value]

    def __repr__(self) -> str:
        cid = self.__dict__.get("cid", "?")
        primary_key = self.primary_key
        if primary_key is None:
            return f"<{type(self).__name__} {cid}>"
        return f"<{type(self).__name__} {cid} {primary_key}={self.primary_value!r}>"

    # ################
    # Implementation
    # ################

    def _description_for_input(self, compiled: CompiledStructure, key: str) -> Type:
        description = compiled.properties.get(key)
        if description is not None:
            return description
        if compiled.any_key is None:
            raise UnknownFieldError(property_name=key)
        if not compiled.any_key.validate_key(key):
            raise InvalidKeyError(key=key)
        return compiled.any_key

    def _require_description(self, key: str) -> Type:
        description = self.get_description(key)
        if description is None:
            raise UnknownFieldError(property_name=key)
        return description

    def _refresh_primary_value(self, compiled: CompiledStructure) -> None:
        if compiled.primary_key is None:
            return
        self.primary_value = self._row.get(compiled.primary_key)
        setattr(self, compiled.primary_key, self.primary_value)

    def _walk(self, iteration: Callable[[Model, Walker], object], stack: EqualStack) -> bool:
        # Returns True once a callback asked to exit.
        for value in self._row.values():
            for child in _child_models(value):
                if child in stack:
                    continue
                stack.add(child, child)

                walker = Walker()
                iteration(child, walker)
                if walker.exited:
                    return True
                if walker.skipped:
                    continue

                if child._walk(iteration, stack):
                    return True
        return False

    def _iter_parents(self) -> Iterator[Model]:
        visited = EqualStack()
        parent = self.parent
        while parent is not None and parent not in visited:
            visited.add(parent, parent)
            yield parent
            parent = parent.parent


_MISSING = object()


def _adopt_children(values: Iterable[Any], parent: Model) -> None:
    # Embedded models and collections, also inside arrays and objects, point at the owner.
    from entitree.entities.collection import Collection

    seen = EqualStack()
    pending = list(values)
    while pending:
        value = pending.pop()
        if isinstance(value, (Model, Collection)):
            value.parent = parent
        elif (is_plain_array(value) or is_plain_object(value)) and value not in seen:
            seen.add(value, value)
            pending.extend(value.values() if is_plain_object(value) else value)


def _child_models(value: Any) -> list[Model]:
    from entitree.entities.collection import Collection

    if isinstance(value, Model):
        return [value]
    if isinstance(value, Collection):
        return list(value.models)
    if is_plain_array(value):
        return [item for item in value if isinstance(item, Model)]
    return []
