# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the number type."""

from typing import Any

import pytest

from entitree.datatypes import NumberType, create_type
from entitree.errors import ConflictNullAndZeroParameterError, ConflictRoundingParameterError, InvalidNumberError


# ###############
# Helpers
# ###############


def _number(**params: Any) -> NumberType:
    description = create_type({"type": "number", **params}, "amount")
    assert isinstance(description, NumberType)
    return description


# ###############
# Normal Cases
# ###############


def test_numbers_pass_through() -> None:
    """Integers and floats are stored unchanged."""
    assert _number().prepare(3, "amount") == 3
    assert _number().prepare(2.5, "amount") == 2.5


def test_numeric_strings_are_parsed() -> None:
    """Numeric strings become ints or floats."""
    assert _number().prepare("12", "amount") == 12
    assert isinstance(_number().prepare("12", "amount"), int)
    assert _number().prepare(" 1.25 ", "amount") == 1.25


def test_null_as_zero_and_zero_as_null() -> None:
    """None and zero can be mapped onto each other."""
    assert _number(null_as_zero=True).prepare(None, "amount") == 0
    assert _number(zero_as_null=True).prepare(0, "amount") is None
    assert _number(zero_as_null=True).prepare(1, "amount") == 1


def test_rounding_modes() -> None:
    """ceil and floor produce ints, round rounds half away from zero."""
    assert _number(ceil=True).prepare(1.2, "amount") == 2
    assert _number(floor=True).prepare(1.8, "amount") == 1
    assert _number(round=2).prepare(1.005, "amount") == 1.01
    assert _number(round=0).prepare(2.5, "amount") == 3
    assert _number(round=0).prepare(-2.5, "amount") == -3


def test_unsigned_min_max_validation() -> None:
    """unsigned, min and max are checked by validate, not prepare."""
    unsigned = _number(unsigned=True)
    bounded = _number(min=1, max=10)

    assert unsigned.prepare(-1, "amount") == -1
    assert unsigned.validate(-1, "amount") is False
    assert unsigned.validate(0, "amount") is True
    assert bounded.validate(0, "amount") is False
    assert bounded.validate(10, "amount") is True
    assert bounded.validate(11, "amount") is False
    assert bounded.validate(None, "amount") is True


# ###############
# Error Cases
# ###############


@pytest.mark.parametrize("value", [True, "abc", "nan", float("nan"), float("inf"), [1], {"a": 1}])
def test_rejected_values(value: Any) -> None:
    """Booleans, non-numeric strings, NaN, infinities and containers are not numbers."""
    with pytest.raises(InvalidNumberError, match="invalid number for amount"):
        _number().prepare(value, "amount")


def test_conflicting_null_parameters() -> None:
    """null_as_zero and zero_as_null cannot be combined."""
    with pytest.raises(ConflictNullAndZeroParameterError):
        _number(null_as_zero=True, zero_as_null=True)


def test_conflicting_rounding_parameters() -> None:
    """Only one rounding mode may be declared."""
    with pytest.raises(ConflictRoundingParameterError, match="only one of round, floor, ceil"):
        _number(ceil=True, round=2)
