"""Epoch guessing for numeric columns.

A numeric column is assumed to hold times when its value has the magnitude
of a Unix epoch in milliseconds (and, if enabled, in seconds) within a
plausible calendar window. The column name is deliberately not consulted;
see TimeUnitDetector for name-based detection.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from column_mapping.core.locale import LocaleServices
from ..config import DEFAULT_CONFIG, MappingConfig
from ..models import ColumnPair
from .data_types import is_integer, to_number

logger = logging.getLogger(__name__)


def _epoch_seconds(year: int) -> int:
    return int(datetime(year, 1, 1, tzinfo=timezone.utc).timestamp())


class TimeGuesser:
    """Decide whether a number looks like a Unix epoch timestamp."""

    def __init__(self, config: Optional[MappingConfig] = None) -> None:
        config = config or DEFAULT_CONFIG
        self.guess_second_epochs = config.guess_second_epochs
        self.min_seconds = _epoch_seconds(config.epoch_min_year)
        self.max_seconds = _epoch_seconds(config.epoch_max_year)

    def is_assumedly_time(self, column_pair: ColumnPair, value: Any, locale: LocaleServices) -> bool:
        """Check whether a value of a numeric column is plausibly an epoch.

        Args:
            column_pair: Column the value belongs to (only used for logging).
            value: Native number or locale-formatted number string.
            locale: Locale services used to parse number strings.

        Returns:
            True for integral millisecond epochs within the configured window,
            or second epochs when second guessing is enabled.

        Examples:
            >>> guesser = TimeGuesser()
            >>> guesser.is_assumedly_time(pair, 1547809200000, services)
            True
            >>> guesser.is_assumedly_time(pair, 1547809200, services)
            False
        """
        if not is_integer(value, locale):
            return False
        number = int(to_number(value, locale))

        if self.min_seconds * 1000 <= number < self.max_seconds * 1000:
            logger.debug("Column '%s': %s looks like a millisecond epoch", column_pair.name, number)
            return True
        if self.guess_second_epochs and self.min_seconds <= number < self.max_seconds:
            logger.debug("Column '%s': %s looks like a second epoch", column_pair.name, number)
            return True
        return False


__all__ = ["TimeGuesser"]
