"""Tests for core utilities and enums."""

from datetime import date, datetime

import numpy as np
import pandas as pd
import pytest

from column_mapping.core.enums import TimeUnit
from column_mapping.core.utils import (
    display_format_of,
    display_text,
    format_datetime,
    is_missing,
    json_text,
)


def test_time_unit_ordering():
    assert TimeUnit.MILLISECOND < TimeUnit.SECOND < TimeUnit.DAY < TimeUnit.YEAR
    assert min(TimeUnit.MONTH, TimeUnit.HOUR) == TimeUnit.HOUR
    assert TimeUnit.YEAR >= TimeUnit.YEAR


@pytest.mark.parametrize("unit", list(TimeUnit))
def test_every_unit_has_display_format(unit):
    assert display_format_of(unit)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, True),
        (float("nan"), True),
        (np.float32("nan"), True),
        (pd.NA, True),
        (pd.NaT, True),
        (np.datetime64("NaT"), True),
        ("", False),
        (0, False),
        ("nan", False),
    ],
)
def test_is_missing(value, expected):
    assert is_missing(value) is expected


def test_format_datetime():
    """Test rendering of native date/time values."""
    assert format_datetime(datetime(2019, 1, 18, 11, 0), "%d %b %Y %H:%M:%S") == "18 Jan 2019 11:00:00"
    assert format_datetime(date(2019, 1, 18), "%d %b %Y") == "18 Jan 2019"
    assert format_datetime(np.datetime64("2019-01-18T11:00"), "%H:%M") == "11:00"
    assert format_datetime("2019-01-18", "%Y") is None


def test_display_and_json_text():
    assert display_text({"a": [1, 2]}) == '{"a": [1, 2]}'
    assert display_text(1.5) == "1.5"
    assert json_text({"a": 1}) == '{\n  "a": 1\n}'
    assert json_text({"b", "a"}) == '[\n  "a",\n  "b"\n]'


def test_display_text_of_integers_beyond_digit_limit():
    """Test that huge integers render as text of their decimal length."""
    assert len(display_text(10**5000)) == 5001
    assert len(display_text(10**5000 - 1)) == 5000
    assert display_text(-(10**4999)).startswith("-")
    assert len(display_text(-(10**4999))) == 5001


def test_text_of_containers_json_cannot_encode():
    """Test that non-string keys and circular references fall back to str()."""
    assert display_text({(1, 2): "x"}) == "{(1, 2): 'x'}"
    assert json_text({(1, 2): "x"}) == "{(1, 2): 'x'}"

    circular = []
    circular.append(circular)
    assert display_text(circular) == "[[...]]"
    assert json_text(circular) == "[[...]]"
