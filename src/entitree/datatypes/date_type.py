# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""The ``date`` type."""

from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from typing import Any

from entitree.datatypes.base import Type
from entitree.errors import InvalidDateError
from entitree.graph import EqualStack
from entitree.utils import invalid_value_as_string

# ###############
# Public Interface
# ###############


class DateType(Type):
    """Points in time stored as :class:`datetime.datetime`.

    Accepted input: datetimes, dates (midnight UTC), ISO-8601 strings and
    POSIX timestamps in seconds. Booleans are rejected.
    """

    @classmethod
    def normalize_declaration(cls, declaration: dict[str, Any], key: str) -> dict[str, Any]:
        if declaration.get("type") in (datetime, date):
            return {**declaration, "type": "date"}
        return declaration

    def prepare_value(self, value: Any, key: str, model: Any) -> Any:
        if value is None:
            return None

        prepared = _to_datetime(value)
        if prepared is None:
            raise InvalidDateError(key=key, invalid_value=invalid_value_as_string(value))
        return prepared

    def value_to_json(self, value: Any, stack: list[Any]) -> Any:
        if value is None:
            return None
        return value.isoformat()

    def clone_value(self, value: Any, stack: EqualStack, parent: Any) -> Any:
        if value is None:
            return None
        return value.replace()

    def equal_value(self, self_value: Any, other_value: Any, stack: EqualStack) -> bool:
        if isinstance(self_value, datetime) and isinstance(other_value, datetime):
            return _instant(self_value) == _instant(other_value)
        return self_value is None and other_value is None


# ################
# Implementation
# ################


def _to_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value

    if isinstance(value, date):
        return datetime.combine(value, time(), tzinfo=timezone.utc)

    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None

    return None


def _instant(value: datetime) -> datetime:
    # Naive datetimes are compared as if they were UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
