# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Runtime type system: the registry, the built-in variants and their helpers."""

from entitree.datatypes.any_type import AnyType
from entitree.datatypes.array_type import ArrayType
from entitree.datatypes.base import Type, TypeParams
from entitree.datatypes.boolean_type import BooleanType
from entitree.datatypes.collection_type import CollectionType
from entitree.datatypes.custom_class_type import CustomClassType
from entitree.datatypes.date_type import DateType
from entitree.datatypes.helpers import DataTypes
from entitree.datatypes.model_type import ModelType
from entitree.datatypes.number_type import NumberType
from entitree.datatypes.object_type import ObjectType
from entitree.datatypes.or_type import OrType
from entitree.datatypes.registry import (
    RESERVED_PRIMARY_KEYS,
    TypeHelper,
    create_type,
    get_type_class,
    register_type,
    registered_types,
)
from entitree.datatypes.string_type import StringType

register_type("*", AnyType)
register_type("any", AnyType)
register_type("array", ArrayType)
register_type("boolean", BooleanType)
register_type("date", DateType)
register_type("model", ModelType)
register_type("collection", CollectionType)
register_type("number", NumberType)
register_type("object", ObjectType)
register_type("string", StringType)
register_type("or", OrType)
# Matches any class, so it must normalize after every other variant.
register_type("custom_class", CustomClassType)

__all__ = [
    "RESERVED_PRIMARY_KEYS",
    "AnyType",
    "ArrayType",
    "BooleanType",
    "CollectionType",
    "CustomClassType",
    "DataTypes",
    "DateType",
    "ModelType",
    "NumberType",
    "ObjectType",
    "OrType",
    "StringType",
    "Type",
    "TypeHelper",
    "TypeParams",
    "create_type",
    "get_type_class",
    "register_type",
    "registered_types",
]
