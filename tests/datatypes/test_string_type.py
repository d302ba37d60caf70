# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the string type."""

from datetime import datetime
from decimal import Decimal
from typing import Any

import pytest

from entitree import Model
from entitree.datatypes import StringType, create_type
from entitree.errors import ConflictLowerUpperParameterError, InvalidStringError


# ###############
# Helpers
# ###############


def _string(**params: Any) -> StringType:
    description = create_type({"type": "string", **params}, "text")
    assert isinstance(description, StringType)
    return description


class Tag(Model):
    @classmethod
    def structure(cls) -> dict[str, Any]:
        return {"label": "string"}


# ###############
# Normal Cases
# ###############


def test_plain_strings_pass_through() -> None:
    """Strings are stored unchanged by default."""
    assert _string().prepare("  Hello ", "text") == "  Hello "


def test_numbers_are_converted() -> None:
    """Finite numbers are converted with str()."""
    assert _string().prepare(42, "text") == "42"
    assert _string().prepare(1.5, "text") == "1.5"
    assert _string().prepare(Decimal("2.50"), "text") == "2.50"


def test_none_stays_none() -> None:
    """None means absent."""
    assert _string().prepare(None, "text") is None


def test_null_as_empty() -> None:
    """null_as_empty turns None into an empty string."""
    assert _string(null_as_empty=True).prepare(None, "text") == ""


def test_empty_as_null_after_trim() -> None:
    """empty_as_null is applied after trimming."""
    description = _string(trim=True, empty_as_null=True)

    assert description.prepare("   ", "text") is None
    assert description.prepare(" a ", "text") == "a"


def test_lower_and_upper() -> None:
    """lower and upper change the case."""
    assert _string(lower=True).prepare("MiXeD", "text") == "mixed"
    assert _string(upper=True).prepare("MiXeD", "text") == "MIXED"


# ###############
# Error Cases
# ###############


@pytest.mark.parametrize(
    "value",
    [True, float("nan"), float("inf"), float("-inf"), Decimal("NaN"), {"a": 1}, [1], (1,), b"x"],
)
def test_rejected_values(value: Any) -> None:
    """Booleans, NaN, infinities, mappings and sequences are not strings."""
    with pytest.raises(InvalidStringError, match="invalid string for text"):
        _string().prepare(value, "text")


def test_objects_are_rejected() -> None:
    """Dates, models and other objects are not converted to text."""
    description = _string()

    with pytest.raises(InvalidStringError, match="invalid string for text"):
        description.prepare(datetime(2020, 1, 1), "text")
    with pytest.raises(InvalidStringError, match="invalid string for text"):
        description.prepare(Tag({"label": "x"}), "text")
    with pytest.raises(InvalidStringError):
        description.prepare(object(), "text")


def test_model_field_rejects_object_input() -> None:
    """A string field of a model rejects a nested model as its value."""
    with pytest.raises(InvalidStringError, match="invalid string for label"):
        Tag({"label": Tag({"label": "inner"})})


def test_conflicting_case_parameters() -> None:
    """lower and upper cannot be combined."""
    with pytest.raises(ConflictLowerUpperParameterError, match="lower and upper"):
        _string(lower=True, upper=True)
