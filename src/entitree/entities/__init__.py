# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Models, collections and the per-class structure compiler."""

from entitree.entities.collection import Collection
from entitree.entities.model import Model
from entitree.entities.structure import CompiledStructure, compile_structure

__all__ = [
    "Collection",
    "CompiledStructure",
    "Model",
    "compile_structure",
]
