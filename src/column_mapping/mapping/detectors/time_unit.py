"""Time unit detection from column names.

Columns such as ``created_at``, ``timestamp_ms`` or ``eventDate`` holding
epoch-like integers are time columns even when the value alone is too
ambiguous for the TimeGuesser. The name picks the granularity, the value's
magnitude picks between seconds and milliseconds and must fall into a
plausible calendar window.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, List, Optional

from column_mapping.core.enums import TimeUnit
from column_mapping.core.locale import LocaleServices
from ..config import DEFAULT_CONFIG, MappingConfig
from ..models import ColumnPair
from .data_types import is_integer, to_number

logger = logging.getLogger(__name__)

# Name tokens naming a unit (checked in this order)
UNIT_TOKENS = [
    (TimeUnit.MILLISECOND, {"ms", "msec", "millis", "milli", "millisecond", "milliseconds"}),
    (TimeUnit.SECOND, {"sec", "secs", "second", "seconds", "epoch", "unix"}),
    (TimeUnit.MINUTE, {"min", "minute", "minutes"}),
    (TimeUnit.HOUR, {"hour", "hours", "hr"}),
    (TimeUnit.DAY, {"date", "day", "days"}),
    (TimeUnit.MONTH, {"month", "months"}),
    (TimeUnit.YEAR, {"year", "years"}),
]

# Name tokens suggesting a point in time without naming a unit
TIME_TOKENS = {
    "time",
    "timestamp",
    "ts",
    "datetime",
    "at",
    "on",
    "when",
    "created",
    "updated",
    "modified",
    "deleted",
    "expires",
    "expiry",
}

# Epochs at or above this magnitude are read as milliseconds
MILLIS_MAGNITUDE = 10**11

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def split_column_name(name: str) -> List[str]:
    """Split a column name into lower-case tokens.

    Examples:
        >>> split_column_name("eventTimestamp_ms")
        ['event', 'timestamp', 'ms']
        >>> split_column_name("Created-At")
        ['created', 'at']
    """
    tokens = []
    for part in _SEPARATORS.split(str(name)):
        tokens.extend(t.lower() for t in _CAMEL_BOUNDARY.split(part) if t)
    return tokens


class TimeUnitDetector:
    """Infer a grouping time unit from a column name and an epoch-like value."""

    def __init__(self, config: Optional[MappingConfig] = None) -> None:
        config = config or DEFAULT_CONFIG
        self.min_millis = _epoch_millis(config.named_epoch_min_year)
        self.max_millis = _epoch_millis(config.named_epoch_max_year)

    def from_column_name(
        self,
        column_pair: ColumnPair,
        value: Any,
        current_unit: Optional[TimeUnit],
        locale: LocaleServices,
    ) -> Optional[TimeUnit]:
        """Infer the time unit of a numeric column from its name.

        Args:
            column_pair: Column whose name is examined.
            value: Sample value (native number or locale-formatted number string).
            current_unit: Unit inferred so far, if any; the result is never
                coarser than this.
            locale: Locale services used to parse number strings.

        Returns:
            The time unit, or None when the name does not suggest a time or
            the value is not a plausible epoch.

        Examples:
            >>> detector.from_column_name(pair_named("created_at"), 1547809200, None, services)
            <TimeUnit.SECOND: 'SECOND'>
            >>> detector.from_column_name(pair_named("birth_date"), 1547769600000, None, services)
            <TimeUnit.DAY: 'DAY'>
            >>> detector.from_column_name(pair_named("price"), 1547809200, None, services) is None
            True
        """
        tokens = split_column_name(column_pair.name)
        named_unit = self._named_unit(tokens)
        if named_unit is None and not TIME_TOKENS.intersection(tokens):
            return None
        if not is_integer(value, locale):
            return None
        number = int(to_number(value, locale))
        if number <= 0:
            return None

        if named_unit == TimeUnit.MILLISECOND:
            millis = number
        elif named_unit == TimeUnit.SECOND:
            millis = number * 1000
        else:
            millis = number if number >= MILLIS_MAGNITUDE else number * 1000
        if not self.min_millis <= millis < self.max_millis:
            return None

        if named_unit in (None, TimeUnit.SECOND):
            unit = TimeUnit.MILLISECOND if millis % 1000 else TimeUnit.SECOND
        else:
            unit = named_unit
        if current_unit is not None:
            unit = min(unit, current_unit)
        logger.debug("Column '%s': name suggests time unit %s", column_pair.name, unit.value)
        return unit

    @staticmethod
    def _named_unit(tokens: List[str]) -> Optional[TimeUnit]:
        for unit, names in UNIT_TOKENS:
            if names.intersection(tokens):
                return unit
        return None


def _epoch_millis(year: int) -> int:
    return int(datetime(year, 1, 1, tzinfo=timezone.utc).timestamp()) * 1000


__all__ = ["TimeUnitDetector", "split_column_name"]
