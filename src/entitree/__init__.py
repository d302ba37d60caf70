# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema-validated, observable, cycle-safe entities for in-memory object graphs."""

from entitree.config import configure, configure_logging, get_config, load_config, set_lang
from entitree.datatypes import DataTypes, Type, create_type, register_type
from entitree.entities import Collection, Model
from entitree.errors import CircularReferenceError, EntityError
from entitree.events import ChangeEvent, ChangeKeyEvent, CollectionEvent, EventTrigger
from entitree.graph import EqualStack, Walker

__all__ = [
    "ChangeEvent",
    "ChangeKeyEvent",
    "CircularReferenceError",
    "Collection",
    "CollectionEvent",
    "DataTypes",
    "EntityError",
    "EqualStack",
    "EventTrigger",
    "Model",
    "Type",
    "Walker",
    "configure",
    "configure_logging",
    "create_type",
    "get_config",
    "load_config",
    "register_type",
    "set_lang",
]
