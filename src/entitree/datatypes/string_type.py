# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""The ``string`` type."""

from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from entitree.datatypes.base import Type, TypeParams
from entitree.errors import (
    ConflictLowerUpperParameterError,
    ConflictNullAndEmptyStringParameterError,
    InvalidStringError,
)
from entitree.utils import invalid_value_as_string

# ###############
# Public Interface
# ###############


class StringParams(TypeParams):
    null_as_empty: bool = False
    empty_as_null: bool = False
    trim: bool = False
    lower: bool = False
    upper: bool = False


class StringType(Type):
    """Text values; finite numbers are converted with ``str()``, other objects are rejected."""

    params_model = StringParams

    def __init__(self, params: Mapping[str, Any]) -> None:
        super().__init__(params)
        self.null_as_empty: bool = self.params.null_as_empty
        self.empty_as_null: bool = self.params.empty_as_null
        self.trim: bool = self.params.trim
        self.lower: bool = self.params.lower
        self.upper: bool = self.params.upper

        if self.null_as_empty and self.empty_as_null:
            raise ConflictNullAndEmptyStringParameterError()
        if self.lower and self.upper:
            raise ConflictLowerUpperParameterError()

    @classmethod
    def normalize_declaration(cls, declaration: dict[str, Any], key: str) -> dict[str, Any]:
        if declaration.get("type") is str:
            return {**declaration, "type": "string"}
        return declaration

    def prepare_value(self, value: Any, key: str, model: Any) -> Any:
        if value is None:
            return "" if self.null_as_empty else None

        if not _is_convertible(value):
            raise InvalidStringError(key=key, invalid_value=invalid_value_as_string(value))

        text = value if isinstance(value, str) else str(value)

        if self.trim:
            text = text.strip()

        if self.empty_as_null and text == "":
            return None

        if self.lower:
            text = text.lower()
        elif self.upper:
            text = text.upper()

        return text


# ################
# Implementation
# ################


def _is_convertible(value: Any) -> bool:
    if isinstance(value, str):
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Decimal):
        return value.is_finite()
    return False
