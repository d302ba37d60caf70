# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Process-wide registry mapping type tags to type variants.

The registry is filled once when :mod:`entitree.datatypes` is imported and
is read-only afterwards in normal use. :func:`create_type` turns any
supported declaration form into a frozen :class:`~entitree.datatypes.base.Type`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from entitree.datatypes.base import Type
from entitree.errors import EntityError, ReservedPrimaryKeyError, UnknownTypeError
from entitree.utils import invalid_value_as_string

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

RESERVED_PRIMARY_KEYS: frozenset[str] = frozenset({"row", "primary_key", "primary_value", "cid"})


class TypeHelper:
    """Callable shorthand producing a parameter declaration for one tag.

    ``DataTypes.String(trim=True)`` returns ``{"type": "string", "trim": True}``.
    Used bare (``DataTypes.String``) it stands for the declaration without
    parameters. Helpers that take an *argument* accept it positionally, e.g.
    ``DataTypes.Array("number")``; a *variadic* helper collects every
    positional argument into a list, e.g. ``DataTypes.Or("string", "number")``.
    """

    def __init__(self, tag: str, argument: str | None = None, *, variadic: bool = False) -> None:
        self.tag = tag
        self.argument = argument
        self.variadic = variadic

    def __call__(self, *args: Any, **params: Any) -> dict[str, Any]:
        if args:
            if self.argument is None:
                raise TypeError(f"{self.tag} type helper takes no positional arguments")
            if self.variadic:
                params[self.argument] = list(args)
            elif len(args) == 1:
                params[self.argument] = args[0]
            else:
                raise TypeError(f"{self.tag} type helper takes at most one positional argument")
        return {**params, "type": self.tag}

    def __repr__(self) -> str:
        return f"TypeHelper({self.tag!r})"


def register_type(tag: str, type_class: type[Type]) -> None:
    """Register *type_class* under *tag*; a later registration wins."""
    _TYPES[tag] = type_class
    logger.debug("Registered type %r -> %s", tag, type_class.__name__)


def get_type_class(tag: str) -> type[Type] | None:
    """Return the variant registered under *tag*, or None."""
    return _TYPES.get(tag)


def registered_types() -> Mapping[str, type[Type]]:
    """Return a read-only view of the registry."""
    return MappingProxyType(_TYPES)


def create_type(declaration: Any, key: str) -> Type:
    """Resolve one field declaration into a frozen Type instance.

    Args:
        declaration: A bare tag (``"string"``), a parameter mapping with a
            ``type`` entry, a nested structure mapping, a list shorthand, a
            class, or a :class:`TypeHelper`.
        key: Name of the field being declared, used in error messages.

    Returns:
        The constructed, frozen Type.

    Raises:
        UnknownTypeError: If no variant is registered for the resolved tag.
        ReservedPrimaryKeyError: If a primary key uses a reserved name.
        EntityError: Any error raised by the variant, prefixed with *key*.
    """
    if isinstance(declaration, TypeHelper):
        declaration = declaration()

    if isinstance(declaration, Mapping) and declaration.get("type"):
        declaration = dict(declaration)
    else:
        declaration = {"type": declaration}

    # Each variant may rewrite shorthand such as ["string"] or a Model class.
    for type_class in dict.fromkeys(_TYPES.values()):
        declaration = type_class.normalize_declaration(declaration, key)

    tag = declaration.get("type")
    type_class = _TYPES.get(tag) if isinstance(tag, str) else None
    if type_class is None:
        rendered = tag if isinstance(tag, str) else invalid_value_as_string(tag)
        raise UnknownTypeError(key=key, type=rendered).with_key_prefix(key)

    if declaration.get("primary"):
        _check_primary_key(key)

    try:
        description = type_class(declaration)
    except EntityError as exc:
        exc.with_key_prefix(key)
        raise

    # Field types are shared by every instance of the entity.
    description.freeze()
    return description


# ################
# Implementation
# ################

_TYPES: dict[str, type[Type]] = {}


def _check_primary_key(key: str) -> None:
    from entitree.entities.model import Model

    if key in RESERVED_PRIMARY_KEYS or hasattr(Model, key):
        raise ReservedPrimaryKeyError(key=key)
