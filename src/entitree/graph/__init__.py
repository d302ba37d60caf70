# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Helpers for cycle-safe traversal of entity graphs."""

from entitree.graph.equal_stack import EqualStack
from entitree.graph.walker import Walker

__all__ = [
    "EqualStack",
    "Walker",
]
