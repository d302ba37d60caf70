# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the boolean and date types."""

from datetime import date, datetime, timedelta, timezone
from typing import Any

import pytest

from entitree.datatypes import create_type
from entitree.errors import InvalidBooleanError, InvalidDateError
from entitree.graph import EqualStack


# ###############
# Normal Cases
# ###############


def test_boolean_accepts_bool_and_none() -> None:
    """True, False and None are stored as is."""
    description = create_type("boolean", "flag")

    assert description.prepare(True, "flag") is True
    assert description.prepare(False, "flag") is False
    assert description.prepare(None, "flag") is None


def test_date_from_datetime() -> None:
    """datetime values are stored unchanged."""
    value = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)

    assert create_type("date", "at").prepare(value, "at") is value


def test_date_from_date_is_midnight_utc() -> None:
    """Plain dates become midnight UTC."""
    prepared = create_type("date", "at").prepare(date(2024, 5, 1), "at")

    assert prepared == datetime(2024, 5, 1, tzinfo=timezone.utc)


def test_date_from_iso_string_and_timestamp() -> None:
    """ISO-8601 strings and POSIX timestamps in seconds are parsed."""
    description = create_type("date", "at")

    assert description.prepare("2024-05-01T12:30:00+00:00", "at") == datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    assert description.prepare(0, "at") == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_date_to_json_is_iso_string() -> None:
    """Dates are exported as ISO-8601 strings."""
    value = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)

    assert create_type("date", "at").to_json(value, []) == "2024-05-01T12:30:00+00:00"


def test_date_clone_is_new_instance_with_same_instant() -> None:
    """Cloning a date keeps the instant."""
    value = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)

    cloned = create_type("date", "at").clone(value, EqualStack())

    assert cloned == value


def test_date_equal_compares_instants() -> None:
    """The same instant in two time zones is equal."""
    description = create_type("date", "at")
    utc = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    plus_two = datetime(2024, 5, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))

    assert description.equal(utc, plus_two, EqualStack()) is True
    assert description.equal(utc, utc + timedelta(seconds=1), EqualStack()) is False
    assert description.equal(None, None, EqualStack()) is True
    assert description.equal(utc, None, EqualStack()) is False


# ###############
# Error Cases
# ###############


@pytest.mark.parametrize("value", [1, "true", 0.0, [True]])
def test_boolean_rejects_other_values(value: Any) -> None:
    """No truthiness coercion: only real booleans are accepted."""
    with pytest.raises(InvalidBooleanError, match="invalid boolean for flag"):
        create_type("boolean", "flag").prepare(value, "flag")


@pytest.mark.parametrize("value", ["yesterday", True, float("nan"), {"a": 1}, [2024, 5, 1]])
def test_date_rejects_other_values(value: Any) -> None:
    """Unparseable strings, booleans, NaN and containers are not dates."""
    with pytest.raises(InvalidDateError, match="invalid date for at"):
        create_type("date", "at").prepare(value, "at")
