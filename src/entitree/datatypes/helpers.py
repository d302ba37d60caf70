# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declaration helpers, usable bare or called with parameters."""

from __future__ import annotations

from entitree.datatypes.registry import TypeHelper

# ###############
# Public Interface
# ###############


class DataTypes:
    """Namespace of :class:`TypeHelper` instances, one per built-in variant.

    Example::

        class User(Model):
            @classmethod
            def structure(cls):
                return {
                    "id": DataTypes.Number(primary=True),
                    "name": DataTypes.String(trim=True, required=True),
                    "tags": DataTypes.Array(DataTypes.String, unique=True),
                }
    """

    Any = TypeHelper("any")
    String = TypeHelper("string")
    Number = TypeHelper("number")
    Boolean = TypeHelper("boolean")
    Date = TypeHelper("date")
    Array = TypeHelper("array", "element")
    Object = TypeHelper("object", "element")
    Or = TypeHelper("or", "or", variadic=True)
    Model = TypeHelper("model", "model")
    Collection = TypeHelper("collection", "collection")
    CustomClass = TypeHelper("custom_class", "constructor")
