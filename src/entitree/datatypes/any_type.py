# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""The ``any`` type and the generic structural algorithms behind it.

:func:`equal_values`, :func:`value_to_json` and :func:`clone_value` work on
arbitrary values: dates, patterns, plain lists/tuples, mappings, entities
and scalars. Other variants fall back to them for values they do not own.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date
from types import MappingProxyType
from typing import Any

from entitree.datatypes.base import Type
from entitree.errors import CircularReferenceError
from entitree.graph import EqualStack
from entitree.utils import is_nan, is_plain_array, is_plain_object

# ###############
# Public Interface
# ###############


class AnyType(Type):
    """Accepts any value; compares, clones and exports it structurally."""

    def value_to_json(self, value: Any, stack: list[Any]) -> Any:
        return value_to_json(value, stack)

    def clone_value(self, value: Any, stack: EqualStack, parent: Any) -> Any:
        return clone_value(value, stack)

    def equal_value(self, self_value: Any, other_value: Any, stack: EqualStack) -> bool:
        return equal_values(self_value, other_value, stack)


def guard_circular(value: object, stack: list[Any]) -> None:
    """Push *value* on the export path, failing if it is already there."""
    if any(item is value for item in stack):
        raise CircularReferenceError()
    stack.append(value)


def equal_values(self_value: Any, other_value: Any, stack: EqualStack) -> bool:
    """Structural equality of two arbitrary values.

    A container met again on the same comparison is not descended twice:
    a list/tuple is equal only to the counterpart it was first compared with,
    while a mapping or model short-circuits to True. This keeps the
    comparison finite on cyclic graphs.
    """
    from entitree.entities.collection import Collection
    from entitree.entities.model import Model

    if isinstance(self_value, date) and isinstance(other_value, date):
        return self_value == other_value

    if isinstance(self_value, re.Pattern) and isinstance(other_value, re.Pattern):
        return self_value.pattern == other_value.pattern and self_value.flags == other_value.flags

    if is_plain_array(self_value) and is_plain_array(other_value):
        if len(self_value) != len(other_value):
            return False
        if not self_value:
            return True

        if self_value in stack:
            return stack.get(self_value) is other_value
        stack.add(self_value, other_value)

        return all(
            equal_values(self_item, other_item, stack)
            for self_item, other_item in zip(self_value, other_value, strict=True)
        )

    if is_plain_object(self_value) and is_plain_object(other_value):
        if self_value in stack:
            return True
        stack.add(self_value, other_value)

        if self_value.keys() != other_value.keys():
            return False
        return all(equal_values(item, other_value[key], stack) for key, item in self_value.items())

    if isinstance(self_value, Model) and isinstance(other_value, Model):
        if self_value in stack:
            return True
        stack.add(self_value, other_value)
        return self_value.equal(other_value, stack)

    if isinstance(self_value, Collection) and isinstance(other_value, Collection):
        return self_value.equal(other_value, stack)

    if is_nan(self_value) and is_nan(other_value):
        return True

    if isinstance(self_value, bool) != isinstance(other_value, bool):
        return False

    return self_value == other_value


def value_to_json(value: Any, stack: list[Any]) -> Any:
    """Render *value* as plain data (dicts, lists, scalars, ISO dates).

    Raises:
        CircularReferenceError: If a container or entity appears twice on
            the current export path.
    """
    from entitree.entities.collection import Collection
    from entitree.entities.model import Model

    if isinstance(value, date):
        return value.isoformat()

    if isinstance(value, (Model, Collection)):
        guard_circular(value, stack)
        return value.to_json([*stack])

    if is_plain_array(value):
        guard_circular(value, stack)
        return [value_to_json(item, [*stack]) for item in value]

    if is_plain_object(value):
        guard_circular(value, stack)
        return {key: value_to_json(item, [*stack]) for key, item in value.items()}

    to_json = getattr(value, "to_json", None)
    if callable(to_json) and not isinstance(value, type):
        guard_circular(value, stack)
        return to_json()

    return value


def clone_value(value: Any, stack: EqualStack) -> Any:
    """Deep-copy *value*, mapping every shared or cyclic object to one copy."""
    from entitree.entities.collection import Collection
    from entitree.entities.model import Model

    if isinstance(value, date):
        return value.replace()

    if isinstance(value, (Model, Collection)):
        return value.clone(stack)

    if value in stack:
        return stack.get(value)

    if isinstance(value, list):
        items: list[Any] = []
        stack.add(value, items)
        items.extend(clone_value(item, stack) for item in value)
        return items

    if isinstance(value, tuple):
        cloned = tuple(clone_value(item, stack) for item in value)
        stack.add(value, cloned)
        return cloned

    if isinstance(value, Mapping):
        data: dict[Any, Any] = {}
        cloned_mapping: Mapping[Any, Any] = MappingProxyType(data) if isinstance(value, MappingProxyType) else data
        stack.add(value, cloned_mapping)
        for key, item in value.items():
            data[key] = clone_value(item, stack)
        return cloned_mapping

    return value
