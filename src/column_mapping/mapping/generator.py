"""Column mapping generation.

ColumnMappingGenerator walks a sample of documents and folds every value
into one evolving ColumnPair per field name:

- first observation: classify the value, sharpen the type (detect times
  hidden in numbers and text), compute width and indexability
- refinement: unify the new value's type with the column's type,
  downgrading on conflicts, and widen/disqualify as needed
- finalization: columns that never saw a typed value become TEXT
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Union

from column_mapping.core.enums import DataType, TimeUnit
from column_mapping.core.locale import LocaleServices, resolve_locale
from column_mapping.core.utils import (
    display_format_of,
    display_text,
    format_datetime,
    is_date_value,
    json_text,
)
from .config import DEFAULT_CONFIG, INCOMPATIBLE_DATA_TYPES, MappingConfig
from .detectors import (
    ColumnNameUnitDetector,
    DataTypeClassifier,
    DateTimeColumnDetector,
    EpochGuesser,
    TimeGuesser,
    TimeUnitDetector,
    count_digits,
    is_integer,
)
from .models import ColumnPair

logger = logging.getLogger(__name__)


class ColumnMappingGenerator:
    """Infer column pairs (type, format, width, indexing) from sample documents.

    Instances hold configuration and detectors only; every `generate()` call
    works on its own column collection, so one instance can serve
    independent callers.

    Examples:
        >>> generator = ColumnMappingGenerator()
        >>> pairs = generator.generate([{"a": "1"}, {"a": "x"}], "en-US")
        >>> pairs[0].target.data_type
        <DataType.TEXT: 'TEXT'>
    """

    def __init__(
        self,
        config: Optional[MappingConfig] = None,
        time_guesser: Optional[EpochGuesser] = None,
        time_unit_detector: Optional[ColumnNameUnitDetector] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.date_time_column_detector = DateTimeColumnDetector()
        self.time_guesser = time_guesser or TimeGuesser(self.config)
        self.time_unit_detector = time_unit_detector or TimeUnitDetector(self.config)

    def generate(
        self,
        documents: Optional[Iterable[Mapping]],
        locale: Union[str, LocaleServices, None] = None,
    ) -> List[ColumnPair]:
        """Generate one column pair per field name found in the documents.

        Args:
            documents: Sample documents (field name -> value). None or empty
                yields an empty list.
            locale: Locale token or LocaleServices governing number and date
                parsing. Defaults to the configured default locale.

        Returns:
            Column pairs in the order field names were first seen.
        """
        if documents is None:
            return []
        services = resolve_locale(locale or self.config.default_locale)

        column_names_to_pair: Dict[str, ColumnPair] = {}
        document_count = 0
        for document in documents:
            if not isinstance(document, Mapping):
                logger.debug("Skipping non-mapping document of type %s", type(document).__name__)
                continue
            document_count += 1
            for key, value in document.items():
                column_pair = column_names_to_pair.get(key)
                if column_pair is not None:
                    self._refine(column_pair, value, services)
                else:
                    column_names_to_pair[key] = self._create_column_pair(key, value, services)

        logger.debug(
            "Generated %d column pairs from %d documents", len(column_names_to_pair), document_count
        )
        return self._extract_column_pairs(column_names_to_pair)

    def _create_column_pair(self, name: str, value: Any, locale: LocaleServices) -> ColumnPair:
        data_type = DataTypeClassifier.type_of(value, locale)
        column_pair = ColumnPair.of(name, data_type, indexed=self._shall_be_indexed(value))
        self._sharpen_mapping(data_type, column_pair, value, locale)
        column_pair.source.width = column_pair.target.width = self._compute_width(value, column_pair)
        return column_pair

    def _refine(self, column_pair: ColumnPair, value: Any, locale: LocaleServices) -> None:
        data_type = self._effective_type_of(column_pair, value, locale)
        if data_type is None:
            return

        current_type = column_pair.data_type
        if current_type is None:
            column_pair.set_data_type(data_type)
            self._sharpen_mapping(data_type, column_pair, value, locale)
        elif data_type == DataType.NUMBER and current_type == DataType.TIME:
            if not is_integer(value, locale):
                self._warn(column_pair)
                self._downgrade(column_pair, DataType.NUMBER)
        elif data_type != current_type:
            if current_type == DataType.TIME:
                self._warn(column_pair)
            self._downgrade(column_pair, DataType.TEXT)
        elif current_type == DataType.TIME and column_pair.source.format is None:
            self.date_time_column_detector.refine_date_time_format(column_pair, value, locale)

        width = max(column_pair.target.width, self._compute_width(value, column_pair))
        column_pair.source.width = column_pair.target.width = width
        if column_pair.target.indexed and not self._shall_be_indexed(value):
            column_pair.target.indexed = False
            logger.debug("Column '%s': not indexed any more", column_pair.name)

    def _effective_type_of(
        self, column_pair: ColumnPair, value: Any, locale: LocaleServices
    ) -> Optional[DataType]:
        data_type = DataTypeClassifier.type_of(value, locale)
        if (
            data_type == DataType.TEXT
            and column_pair.data_type == DataType.TIME
            and self.date_time_column_detector.accepts(column_pair, display_text(value), locale)
        ):
            return DataType.TIME
        return data_type

    def _sharpen_mapping(
        self, data_type: Optional[DataType], column_pair: ColumnPair, value: Any, locale: LocaleServices
    ) -> None:
        if data_type == DataType.TIME:
            column_pair.target.format = display_format_of(TimeUnit.SECOND)
        elif data_type in (DataType.NUMBER, DataType.TEXT):
            self._detect_date_time(column_pair, value, locale)

    def _downgrade(self, column_pair: ColumnPair, data_type: DataType) -> None:
        logger.debug(
            "Column '%s': downgraded from %s to %s",
            column_pair.name,
            column_pair.data_type.value,
            data_type.value,
        )
        column_pair.set_data_type(data_type)
        column_pair.clear_formats()

    @staticmethod
    def _warn(column_pair: ColumnPair) -> None:
        if column_pair.warning is None:
            column_pair.warning = INCOMPATIBLE_DATA_TYPES

    def _detect_date_time(self, column_pair: ColumnPair, value: Any, locale: LocaleServices) -> None:
        if (
            column_pair.data_type == DataType.TEXT
            and count_digits(value) >= self.config.datestring_min_expected_digits
        ):
            self.date_time_column_detector.detect(column_pair, display_text(value), locale)
        elif column_pair.data_type == DataType.NUMBER:
            self._detect_date_time_from_number(column_pair, value, locale)

    def _detect_date_time_from_number(
        self, column_pair: ColumnPair, value: Any, locale: LocaleServices
    ) -> None:
        # Epoch guess first, name-based unit second
        if self.time_guesser.is_assumedly_time(column_pair, value, locale):
            column_pair.set_data_type(DataType.TIME)
            column_pair.target.format = display_format_of(TimeUnit.SECOND)
        else:
            time_unit = self.time_unit_detector.from_column_name(column_pair, value, None, locale)
            if time_unit:
                column_pair.set_data_type(DataType.TIME)
                column_pair.target.format = display_format_of(time_unit)

    def _shall_be_indexed(self, value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, (Mapping, list, tuple, set, frozenset)):
            value = json_text(value)
        return not isinstance(value, str) or len(value) <= self.config.max_text_length_to_be_indexed

    def _compute_width(self, value: Any, column_pair: ColumnPair) -> int:
        width = self.config.min_width
        if not self._is_truthy(value):
            return width
        formatted_value = None
        if is_date_value(value) and column_pair.target.format:
            formatted_value = format_datetime(value, column_pair.target.format)
        elif column_pair.target.data_type != DataType.BOOLEAN:
            text = display_text(value)
            if len(text) > width:
                formatted_value = text
        if formatted_value:
            width = max(width, min(len(formatted_value), self.config.max_width))
        return width

    @staticmethod
    def _is_truthy(value: Any) -> bool:
        try:
            return bool(value)
        except (TypeError, ValueError):
            # numpy.datetime64 and similar scalars without a truth value
            return True

    def _extract_column_pairs(self, column_names_to_pair: Dict[str, ColumnPair]) -> List[ColumnPair]:
        column_pairs = list(column_names_to_pair.values())
        for column_pair in column_pairs:
            if column_pair.data_type is None:
                column_pair.set_data_type(DataType.TEXT)
        return column_pairs


def generate(
    documents: Optional[Iterable[Mapping]],
    locale: Union[str, LocaleServices, None] = None,
    config: Optional[MappingConfig] = None,
) -> List[ColumnPair]:
    """Generate column pairs for a sample of documents.

    Convenience wrapper around `ColumnMappingGenerator.generate()`.

    Args:
        documents: Sample documents (field name -> value).
        locale: Locale token or LocaleServices. Defaults to en-US.
        config: Optional MappingConfig overriding the default limits.

    Returns:
        Column pairs in first-seen field order.

    Examples:
        >>> pairs = generate([{"t": 1547809200000}, {"t": 1547812800000}])
        >>> pairs[0].target.data_type, pairs[0].target.format
        (<DataType.TIME: 'TIME'>, '%d %b %Y %H:%M:%S')
    """
    return ColumnMappingGenerator(config).generate(documents, locale)


__all__ = ["ColumnMappingGenerator", "generate"]
