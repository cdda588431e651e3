"""Core utility functions for column mapping.

This module provides date/time and text helpers shared by the detectors and
the column mapping generator.
"""

from __future__ import annotations

import json
import math
from datetime import date, datetime
from typing import Any, Optional

import numpy as np
import pandas as pd

from column_mapping.core.enums import TimeUnit

# Display formats (strftime) per grouping time unit
_DISPLAY_FORMATS = {
    TimeUnit.MILLISECOND: "%d %b %Y %H:%M:%S.%f",
    TimeUnit.SECOND: "%d %b %Y %H:%M:%S",
    TimeUnit.MINUTE: "%d %b %Y %H:%M",
    TimeUnit.HOUR: "%d %b %Y %H",
    TimeUnit.DAY: "%d %b %Y",
    TimeUnit.MONTH: "%b %Y",
    TimeUnit.YEAR: "%Y",
}


def display_format_of(time_unit: TimeUnit) -> str:
    """Get the display format matching a time unit.

    Args:
        time_unit: Grouping time unit of a TIME column.

    Returns:
        A ``strftime`` pattern showing the value down to that unit.

    Examples:
        >>> display_format_of(TimeUnit.DAY)
        '%d %b %Y'
        >>> display_format_of(TimeUnit.SECOND)
        '%d %b %Y %H:%M:%S'
    """
    return _DISPLAY_FORMATS[time_unit]


def is_missing(value: Any) -> bool:
    """Return True for values that carry no information (None, NaN, NA, NaT)."""
    if value is None or value is pd.NA or value is pd.NaT:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, np.floating) and np.isnan(value):
        return True
    if isinstance(value, np.datetime64) and np.isnat(value):
        return True
    return False


def is_date_value(value: Any) -> bool:
    """Return True for native date/time values (datetime, date, Timestamp, datetime64)."""
    return isinstance(value, (datetime, date, np.datetime64))


def to_datetime(value: Any) -> Optional[datetime]:
    """Convert a native date/time value to ``datetime``.

    ``pandas.Timestamp`` is already a ``datetime``; ``numpy.datetime64`` and
    plain ``date`` objects are converted. Other values return None.
    """
    if is_missing(value):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, np.datetime64):
        return pd.Timestamp(value).to_pydatetime()
    return None


def format_datetime(value: Any, pattern: str) -> Optional[str]:
    """Render a native date/time value with a ``strftime`` pattern.

    Returns:
        The formatted text, or None if the value is not a date/time value.

    Examples:
        >>> format_datetime(datetime(2019, 1, 18, 11, 0), "%d %b %Y")
        '18 Jan 2019'
    """
    dt = to_datetime(value)
    if dt is None:
        return None
    return dt.strftime(pattern)


def display_text(value: Any) -> str:
    """Text a value is displayed with; mappings and sequences as compact JSON.

    Containers JSON cannot encode (non-string keys, circular references) are
    shown with ``str``. Integers beyond the interpreter's digit limit are
    shown as a run of nines of the same length.

    Examples:
        >>> display_text({"a": [1, 2]})
        '{"a": [1, 2]}'
        >>> len(display_text(10**5000))
        5001
    """
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            return _plain_text(value)
    return _plain_text(value)


def json_text(value: Any) -> str:
    """Pretty-printed JSON text of a value (two-space indentation)."""
    try:
        if isinstance(value, (set, frozenset)):
            value = sorted(value, key=str)
        return json.dumps(value, indent=2, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return _plain_text(value)


def _plain_text(value: Any) -> str:
    try:
        return str(value)
    except ValueError:
        if isinstance(value, int):
            sign = "-" if value < 0 else ""
            return sign + "9" * _decimal_digits(value)
        return f"<{type(value).__name__}>"


def _decimal_digits(value: int) -> int:
    number = abs(value)
    digits = int((number.bit_length() - 1) * math.log10(2)) + 1
    if number >= 10**digits:
        digits += 1
    return digits


__all__ = [
    "display_format_of",
    "display_text",
    "format_datetime",
    "is_date_value",
    "is_missing",
    "json_text",
    "to_datetime",
]
