"""Date/time detection for text columns.

A text column becomes a TIME column once a sample parses with one of the
locale's candidate date patterns. Numeric day/month orders such as
``01/02/2019`` may match several patterns; such a column keeps all matching
patterns as candidates and narrows them with every further sample until a
single parse pattern remains.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from column_mapping.core.enums import DataType, TimeUnit
from column_mapping.core.locale import DatePattern, LocaleServices
from column_mapping.core.utils import display_format_of
from ..models import ColumnPair

logger = logging.getLogger(__name__)

_UNIT_BY_DISPLAY_FORMAT = {display_format_of(unit): unit for unit in TimeUnit}


class DateTimeColumnDetector:
    """Detect and refine date/time formats of text columns."""

    def detect(self, column_pair: ColumnPair, value: str, locale: LocaleServices) -> None:
        """Promote a column to TIME if the value parses as a date.

        Args:
            column_pair: Column to promote; left untouched if nothing matches.
            value: Text sample.
            locale: Locale services providing the ordered candidate patterns.
        """
        if not isinstance(value, str):
            return
        matched = locale.matching_patterns(value)
        if not matched:
            return
        column_pair.set_data_type(DataType.TIME)
        self._apply(column_pair, matched)
        logger.debug(
            "Column '%s': detected date/time text, candidates %s",
            column_pair.name,
            [p.name for p in matched],
        )

    def refine_date_time_format(
        self, column_pair: ColumnPair, value: Any, locale: LocaleServices
    ) -> None:
        """Narrow the candidate patterns of a TIME column with a new sample.

        Does nothing once the parse pattern is fixed, for non-text samples,
        or when the sample matches none of the candidates. The display format
        is never coarsened.
        """
        if column_pair.source.format or not isinstance(value, str):
            return
        matched = locale.matching_patterns(value, self._candidates(column_pair))
        if not matched:
            return
        self._apply(column_pair, matched, _UNIT_BY_DISPLAY_FORMAT.get(column_pair.target.format))
        if column_pair.source.format:
            logger.debug(
                "Column '%s': date/time format fixed to %s",
                column_pair.name,
                column_pair.source.format,
            )

    def accepts(self, column_pair: ColumnPair, value: str, locale: LocaleServices) -> bool:
        """Check whether a text sample fits the column's fixed or candidate patterns."""
        if column_pair.source.format:
            candidates = [column_pair.source.format]
        else:
            candidates = self._candidates(column_pair)
        return bool(locale.matching_patterns(value, candidates))

    @staticmethod
    def _candidates(column_pair: ColumnPair) -> Optional[List[str]]:
        return list(column_pair.source.candidate_formats) or None

    @staticmethod
    def _apply(
        column_pair: ColumnPair, matched: List[DatePattern], current_unit: Optional[TimeUnit] = None
    ) -> None:
        if len(matched) == 1:
            column_pair.source.format = matched[0].format
            column_pair.source.candidate_formats = []
        else:
            column_pair.source.candidate_formats = [p.format for p in matched]
        unit = matched[0].time_unit
        if current_unit is not None:
            unit = min(unit, current_unit)
        column_pair.target.format = display_format_of(unit)


__all__ = ["DateTimeColumnDetector"]
