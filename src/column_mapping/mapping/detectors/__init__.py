"""Detectors used by the column mapping generator.

Each detector looks at one column and one sample value and answers a single
question; detectors never call each other, only the generator combines them:

- DataTypeClassifier: primitive type of a raw value
- TimeGuesser: does a number look like an epoch timestamp?
- TimeUnitDetector: does the column name (plus value) imply a time unit?
- DateTimeColumnDetector: does a text parse as a date, and with which pattern?

Detectors that promote numeric columns to TIME follow the protocols below,
so alternative heuristics can be passed to ColumnMappingGenerator.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

from column_mapping.core.enums import TimeUnit
from column_mapping.core.locale import LocaleServices
from ..models import ColumnPair
from .data_types import DataTypeClassifier, count_digits, is_integer, to_number
from .date_time_column import DateTimeColumnDetector
from .time_guesser import TimeGuesser
from .time_unit import TimeUnitDetector


class EpochGuesser(Protocol):
    """Protocol for value-only epoch detection."""

    def is_assumedly_time(self, column_pair: ColumnPair, value: Any, locale: LocaleServices) -> bool:
        """Return True if the value's magnitude is plausible as an epoch timestamp."""
        ...


class ColumnNameUnitDetector(Protocol):
    """Protocol for name-based time unit detection."""

    def from_column_name(
        self,
        column_pair: ColumnPair,
        value: Any,
        current_unit: Optional[TimeUnit],
        locale: LocaleServices,
    ) -> Optional[TimeUnit]:
        """Return the time unit the column name implies, or None."""
        ...


__all__ = [
    "ColumnNameUnitDetector",
    "DataTypeClassifier",
    "DateTimeColumnDetector",
    "EpochGuesser",
    "TimeGuesser",
    "TimeUnitDetector",
    "count_digits",
    "is_integer",
    "to_number",
]
