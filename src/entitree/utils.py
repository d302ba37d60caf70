# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Small predicates and helpers shared by types and entities."""

from __future__ import annotations

import itertools
import json
import math
from collections.abc import Mapping
from datetime import date
from typing import Any

# ###############
# Public Interface
# ###############

MAX_DIAGNOSTIC_LENGTH = 50


def unique_id(prefix: str) -> str:
    """Return a process-unique identifier such as ``mod17``."""
    return f"{prefix}{next(_id_counter)}"


def is_plain_object(value: object) -> bool:
    """Return True for mappings that are data, not entities."""
    return isinstance(value, Mapping)


def is_plain_array(value: object) -> bool:
    """Return True for lists and tuples (strings and bytes are scalars)."""
    return isinstance(value, (list, tuple))


def is_nan(value: object) -> bool:
    """Return True if *value* is a float NaN."""
    return isinstance(value, float) and math.isnan(value)


def same_value(left: object, right: object) -> bool:
    """Shallow change detection: identity, or equality of immutable scalars.

    Containers and entities are compared by identity only, so a new object
    with equal content still counts as a change.
    """
    if left is right:
        return True
    if type(left) is not type(right):
        return False
    if isinstance(left, (str, int, float, bytes, date)):
        return left == right
    return False


def invalid_value_as_string(value: object) -> str:
    """Render *value* for an error message, truncated to a readable length."""
    try:
        rendered = json.dumps(value, ensure_ascii=False, default=_default_repr)
    except (TypeError, ValueError):
        rendered = repr(value)

    if len(rendered) > MAX_DIAGNOSTIC_LENGTH:
        rendered = rendered[:MAX_DIAGNOSTIC_LENGTH] + "..."
    return rendered


# ################
# Implementation
# ################

_id_counter = itertools.count(1)


def _default_repr(value: Any) -> Any:
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    return repr(value)
