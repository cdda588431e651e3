"""Primitive type classification of raw document values.

Every value seen by the column mapping generator is reduced to one closed
type tag here; nothing downstream tests Python types again.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from numbers import Number
from typing import Any, Optional, Union

import numpy as np

from column_mapping.core.enums import DataType
from column_mapping.core.locale import LocaleServices
from column_mapping.core.utils import display_text, is_missing

_BOOLEAN_LITERALS = ("true", "false")


class DataTypeClassifier:
    """Classify raw values as TEXT, NUMBER, BOOLEAN, TIME or OBJECT."""

    @staticmethod
    def type_of(value: Any, locale: LocaleServices) -> Optional[DataType]:
        """Classify one value.

        Args:
            value: Raw value of unknown shape.
            locale: Locale services used to parse number-like strings.

        Returns:
            The data type, or None for values without type evidence (empty
            string, None, NaN, NA, NaT).

        Examples:
            >>> services = get_locale_services("en-US")
            >>> DataTypeClassifier.type_of("1,234.5", services)
            <DataType.NUMBER: 'NUMBER'>
            >>> DataTypeClassifier.type_of("", services) is None
            True
        """
        if isinstance(value, str):
            return DataTypeClassifier.type_of_text(value, locale)
        if is_missing(value):
            return None
        if isinstance(value, (bool, np.bool_)):
            return DataType.BOOLEAN
        if isinstance(value, (datetime, date, np.datetime64)):
            return DataType.TIME
        if isinstance(value, (Number, np.number)):
            return DataType.NUMBER
        if isinstance(value, (Mapping, list, tuple, set, frozenset)):
            return DataType.OBJECT
        return DataTypeClassifier.type_of_text(display_text(value), locale)

    @staticmethod
    def type_of_text(value: str, locale: LocaleServices) -> Optional[DataType]:
        if value == "":
            return None
        if value.strip().lower() in _BOOLEAN_LITERALS:
            return DataType.BOOLEAN
        if locale.parse_number(value) is not None:
            return DataType.NUMBER
        return DataType.TEXT


def to_number(value: Any, locale: LocaleServices) -> Optional[Union[int, float, Decimal]]:
    """Numeric value of a native number or a locale-formatted number string."""
    if isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, str):
        return locale.parse_number(value)
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, np.floating):
        return float(value)
    if isinstance(value, Number) and not is_missing(value):
        return value
    return None


def is_integer(value: Any, locale: LocaleServices) -> bool:
    """Return True if the value is a number without fractional part.

    Examples:
        >>> is_integer("1,000", get_locale_services("en-US"))
        True
        >>> is_integer(1.5, get_locale_services("en-US"))
        False
    """
    number = to_number(value, locale)
    if number is None:
        return False
    if isinstance(number, int):
        return True
    try:
        return float(number).is_integer()
    except (OverflowError, ValueError, TypeError):
        return False


def count_digits(value: Any) -> int:
    """Count ASCII digits in the text form of a value."""
    return sum(1 for ch in display_text(value) if "0" <= ch <= "9")


__all__ = ["DataTypeClassifier", "count_digits", "is_integer", "to_number"]
