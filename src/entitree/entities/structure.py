# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Per-class compilation of a Model's declared structure."""

from __future__ import annotations

import logging
import weakref
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from entitree.datatypes import Type, create_type

if TYPE_CHECKING:
    from entitree.entities.model import Model

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class CompiledStructure:
    """Resolved field types of one Model subclass.

    Attributes:
        properties: Declared fields, in declaration order, excluding ``"*"``.
        primary_key: Name of the primary field, if one is declared.
        any_key: Type of the catch-all ``"*"`` entry, if declared.
    """

    properties: Mapping[str, Type]
    primary_key: str | None = None
    any_key: Type | None = None

    def description(self, key: str) -> Type | None:
        """Return the type governing *key*, falling back to the catch-all."""
        found = self.properties.get(key)
        if found is not None:
            return found
        return self.any_key


def compile_structure(entity_class: type[Model]) -> CompiledStructure:
    """Compile ``entity_class.structure()`` once and cache the result.

    The cache is keyed weakly by class, so classes created at runtime
    (for example in tests) can be garbage-collected.
    """
    cached = _CACHE.get(entity_class)
    if cached is not None:
        return cached

    declarations: Mapping[str, Any] = entity_class.structure()

    properties: dict[str, Type] = {}
    primary_key: str | None = None
    any_key: Type | None = None
    for key, declaration in declarations.items():
        description = create_type(declaration, key)
        if key == "*":
            any_key = description
            continue
        properties[key] = description
        if description.primary:
            primary_key = key

    compiled = CompiledStructure(
        properties=MappingProxyType(properties),
        primary_key=primary_key,
        any_key=any_key,
    )
    _CACHE[entity_class] = compiled
    logger.debug(
        "Compiled structure of %s: %d field(s), primary key %r",
        entity_class.__name__,
        len(properties),
        primary_key,
    )
    return compiled


# ################
# Implementation
# ################

_CACHE: weakref.WeakKeyDictionary[type, CompiledStructure] = weakref.WeakKeyDictionary()
