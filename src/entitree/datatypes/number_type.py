# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""The ``number`` type."""

from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from entitree.datatypes.base import Type, TypeParams
from entitree.errors import ConflictNullAndZeroParameterError, ConflictRoundingParameterError, InvalidNumberError
from entitree.utils import invalid_value_as_string

# ###############
# Public Interface
# ###############


class NumberParams(TypeParams):
    null_as_zero: bool = False
    zero_as_null: bool = False
    ceil: bool = False
    floor: bool = False
    round: int | None = None
    unsigned: bool = False
    min: float | None = None
    max: float | None = None


class NumberType(Type):
    """Integers and floats; numeric strings are parsed, NaN and infinities are rejected.

    ``ceil`` and ``floor`` produce ints. ``round`` rounds half away from
    zero to the given number of decimal digits (an int for 0 digits).
    ``unsigned``, ``min`` and ``max`` are checked by ``validate``.
    """

    params_model = NumberParams

    def __init__(self, params: Mapping[str, Any]) -> None:
        super().__init__(params)
        self.null_as_zero: bool = self.params.null_as_zero
        self.zero_as_null: bool = self.params.zero_as_null
        self.ceil: bool = self.params.ceil
        self.floor: bool = self.params.floor
        self.round: int | None = self.params.round
        self.unsigned: bool = self.params.unsigned
        self.min: float | None = self.params.min
        self.max: float | None = self.params.max

        if self.null_as_zero and self.zero_as_null:
            raise ConflictNullAndZeroParameterError()
        if sum((self.ceil, self.floor, self.round is not None)) > 1:
            raise ConflictRoundingParameterError()

    @classmethod
    def normalize_declaration(cls, declaration: dict[str, Any], key: str) -> dict[str, Any]:
        if declaration.get("type") in (int, float):
            return {**declaration, "type": "number"}
        return declaration

    def prepare_value(self, value: Any, key: str, model: Any) -> Any:
        if value is None:
            return 0 if self.null_as_zero else None

        number = _to_number(value)
        if number is None:
            raise InvalidNumberError(key=key, invalid_value=invalid_value_as_string(value))

        if self.ceil:
            number = math.ceil(number)
        elif self.floor:
            number = math.floor(number)
        elif self.round is not None:
            number = _round_half_up(number, self.round)

        if self.zero_as_null and number == 0:
            return None
        return number

    def validate_value(self, value: Any, key: str) -> bool:
        if not super().validate_value(value, key):
            return False
        if value is None:
            return True
        if self.unsigned and value < 0:
            return False
        if self.min is not None and value < self.min:
            return False
        return not (self.max is not None and value > self.max)


# ################
# Implementation
# ################


def _to_number(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return None

    if isinstance(value, str):
        text = value.strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                return None

    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    return None


def _round_half_up(number: int | float, digits: int) -> int | float:
    exponent = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(number)).quantize(exponent, rounding=ROUND_HALF_UP)
    return int(rounded) if digits <= 0 else float(rounded)
