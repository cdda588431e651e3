"""Tests for primitive type classification and number helpers.

This module verifies `DataTypeClassifier.type_of()` on native and textual
values, and the `to_number`, `is_integer` and `count_digits` helpers from
`column_mapping.mapping.detectors.data_types`.
"""

from datetime import date, datetime
from decimal import Decimal

import numpy as np
import pandas as pd
import pytest

from column_mapping.core.enums import DataType
from column_mapping.mapping.detectors import DataTypeClassifier, count_digits, is_integer, to_number


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", None),
        (None, None),
        (float("nan"), None),
        (pd.NA, None),
        (pd.NaT, None),
        (np.nan, None),
        ("   ", DataType.TEXT),
        ("hello", DataType.TEXT),
        ("true", DataType.BOOLEAN),
        ("FALSE", DataType.BOOLEAN),
        (True, DataType.BOOLEAN),
        (np.bool_(False), DataType.BOOLEAN),
        (0, DataType.NUMBER),
        (-12.5, DataType.NUMBER),
        (Decimal("1.10"), DataType.NUMBER),
        (np.int64(7), DataType.NUMBER),
        ("1,234.5", DataType.NUMBER),
        ("-3", DataType.NUMBER),
        ("1e5", DataType.NUMBER),
        (datetime(2019, 1, 18), DataType.TIME),
        (date(2019, 1, 18), DataType.TIME),
        (pd.Timestamp("2019-01-18"), DataType.TIME),
        ({"a": 1}, DataType.OBJECT),
        ([], DataType.OBJECT),
        ((1, 2), DataType.OBJECT),
        ({"x"}, DataType.OBJECT),
    ],
    ids=[
        "empty_string",
        "none",
        "nan",
        "pd_na",
        "nat",
        "np_nan",
        "blank",
        "text",
        "true_text",
        "false_text_upper",
        "bool",
        "np_bool",
        "zero",
        "negative_float",
        "decimal",
        "np_int",
        "grouped_number_text",
        "negative_text",
        "exponent_text",
        "datetime",
        "date",
        "timestamp",
        "dict",
        "empty_list",
        "tuple",
        "set",
    ],
)
def test_type_of(en_us, value, expected):
    """Test that type_of() maps every value shape to the expected type."""
    assert DataTypeClassifier.type_of(value, en_us) == expected


def test_type_of_uses_locale_for_numbers(en_us, de_de):
    """Test that number-like strings are classified per locale."""
    assert DataTypeClassifier.type_of("1.234,5", de_de) == DataType.NUMBER
    assert DataTypeClassifier.type_of("1.234,5", en_us) == DataType.TEXT


def test_type_of_unknown_objects_use_their_text(en_us):
    """Test that unsupported objects are classified by their string form."""

    class Code:
        def __str__(self):
            return "42"

    assert DataTypeClassifier.type_of(Code(), en_us) == DataType.NUMBER


def test_to_number(en_us, de_de):
    """Test numeric conversion of native values and locale strings."""
    assert to_number(5, en_us) == 5
    assert to_number("1,000", en_us) == 1000
    assert to_number("1.000", de_de) == 1000
    assert to_number(np.float64(2.5), en_us) == 2.5
    assert to_number(True, en_us) is None
    assert to_number("abc", en_us) is None
    assert to_number(float("nan"), en_us) is None


@pytest.mark.parametrize(
    "value, expected",
    [
        (10, True),
        (10.0, True),
        (10.5, False),
        ("1547809200000", True),
        ("1,000", True),
        ("1.5", False),
        (np.int32(3), True),
        (True, False),
        ("x", False),
        (None, False),
    ],
)
def test_is_integer(en_us, value, expected):
    """Test integer detection on native and textual numbers."""
    assert is_integer(value, en_us) is expected


def test_count_digits():
    """Test that only ASCII digits are counted."""
    assert count_digits("2019-01-18") == 8
    assert count_digits("abc") == 0
    assert count_digits(1234) == 4
    assert count_digits("١٢") == 0


def test_huge_values_classify_without_error(en_us):
    """Test classification of values whose text exceeds the integer digit limit."""
    assert DataTypeClassifier.type_of("9" * 5000, en_us) == DataType.NUMBER
    assert DataTypeClassifier.type_of(10**5000, en_us) == DataType.NUMBER
    assert is_integer(10**5000, en_us) is True
    assert count_digits(10**5000) == 5001
