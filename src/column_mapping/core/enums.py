"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class DataType(str, Enum):
    """Data types a column can be inferred to hold.

    Values are strings to ease serialization and CLI interchange.
    """

    TEXT = "TEXT"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    TIME = "TIME"
    OBJECT = "OBJECT"


class TimeUnit(str, Enum):
    """Time granularities ordered from finest to coarsest.

    Examples:
        >>> TimeUnit.MILLISECOND < TimeUnit.SECOND
        True
        >>> min(TimeUnit.DAY, TimeUnit.HOUR)
        <TimeUnit.HOUR: 'HOUR'>
    """

    MILLISECOND = "MILLISECOND"
    SECOND = "SECOND"
    MINUTE = "MINUTE"
    HOUR = "HOUR"
    DAY = "DAY"
    MONTH = "MONTH"
    YEAR = "YEAR"

    @property
    def rank(self) -> int:
        return _TIME_UNIT_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, TimeUnit):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, TimeUnit):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, TimeUnit):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, TimeUnit):
            return NotImplemented
        return self.rank >= other.rank


_TIME_UNIT_ORDER = list(TimeUnit)


__all__ = ["DataType", "TimeUnit"]
