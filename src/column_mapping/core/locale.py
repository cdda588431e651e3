"""Locale services for number parsing and date pattern matching.

The column mapping engine never inspects a locale token itself. Every
locale-sensitive decision goes through a `LocaleServices` instance:

- parse_number(): numbers written with the locale's decimal and grouping separators
- date_patterns(): candidate date/time patterns, ordered for the locale
- parse_date(): match a text against one candidate pattern
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import List, Optional, Tuple, Union

from column_mapping.core.enums import TimeUnit

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en-US"

# (decimal separator, grouping separators, day-first dates)
_POINT = (".", (",",))
_COMMA = (",", (".",))
_COMMA_SPACE = (",", (" ", "\u00a0", "\u202f"))

_LOCALE_CONVENTIONS = {
    "en-us": _POINT + (False,),
    "en-ca": _POINT + (False,),
    "en-ph": _POINT + (False,),
    "en": _POINT + (True,),
    "ja": _POINT + (False,),
    "zh": _POINT + (False,),
    "ko": _POINT + (False,),
    "he": _POINT + (True,),
    "th": _POINT + (True,),
    "de-ch": (".", ("'", "\u2019")) + (True,),
    "de": _COMMA + (True,),
    "nl": _COMMA + (True,),
    "it": _COMMA + (True,),
    "es": _COMMA + (True,),
    "pt": _COMMA + (True,),
    "da": _COMMA + (True,),
    "tr": _COMMA + (True,),
    "id": _COMMA + (True,),
    "el": _COMMA + (True,),
    "hy": _COMMA_SPACE + (True,),
    "fr": _COMMA_SPACE + (True,),
    "ru": _COMMA_SPACE + (True,),
    "uk": _COMMA_SPACE + (True,),
    "pl": _COMMA_SPACE + (True,),
    "cs": _COMMA_SPACE + (True,),
    "sk": _COMMA_SPACE + (True,),
    "sv": _COMMA_SPACE + (True,),
    "nb": _COMMA_SPACE + (True,),
    "fi": _COMMA_SPACE + (True,),
    "hu": _COMMA_SPACE + (True,),
}


@dataclass(frozen=True)
class DatePattern:
    """A candidate date/time parse pattern.

    Attributes:
        name: Short identifier (e.g., "iso8601_date").
        format: ``strptime`` pattern the text must match entirely.
        time_unit: Finest time unit the pattern carries.
        ambiguous: True for numeric day/month orders that may read both ways.
    """

    name: str
    format: str
    time_unit: TimeUnit
    ambiguous: bool = False


# Unambiguous patterns, tried first regardless of locale
UNAMBIGUOUS_PATTERNS = [
    DatePattern("iso8601_tz_ms", "%Y-%m-%dT%H:%M:%S.%f%z", TimeUnit.MILLISECOND),
    DatePattern("iso8601_ms", "%Y-%m-%dT%H:%M:%S.%f", TimeUnit.MILLISECOND),
    DatePattern("iso8601_tz", "%Y-%m-%dT%H:%M:%S%z", TimeUnit.SECOND),
    DatePattern("iso8601", "%Y-%m-%dT%H:%M:%S", TimeUnit.SECOND),
    DatePattern("iso8601_minute", "%Y-%m-%dT%H:%M", TimeUnit.MINUTE),
    DatePattern("sql_datetime_ms", "%Y-%m-%d %H:%M:%S.%f", TimeUnit.MILLISECOND),
    DatePattern("python_logging", "%Y-%m-%d %H:%M:%S,%f", TimeUnit.MILLISECOND),
    DatePattern("sql_datetime", "%Y-%m-%d %H:%M:%S", TimeUnit.SECOND),
    DatePattern("sql_datetime_minute", "%Y-%m-%d %H:%M", TimeUnit.MINUTE),
    DatePattern("iso8601_date", "%Y-%m-%d", TimeUnit.DAY),
    DatePattern("iso8601_month", "%Y-%m", TimeUnit.MONTH),
    DatePattern("slash_datetime", "%Y/%m/%d %H:%M:%S", TimeUnit.SECOND),
    DatePattern("slash_date", "%Y/%m/%d", TimeUnit.DAY),
    DatePattern("rfc2822", "%a, %d %b %Y %H:%M:%S %z", TimeUnit.SECOND),
    DatePattern("apache_common", "%d/%b/%Y:%H:%M:%S %z", TimeUnit.SECOND),
    DatePattern("text_datetime", "%d %b %Y %H:%M:%S", TimeUnit.SECOND),
    DatePattern("text_date", "%d %b %Y", TimeUnit.DAY),
    DatePattern("us_text_date", "%b %d, %Y", TimeUnit.DAY),
    DatePattern("dotted_datetime", "%d.%m.%Y %H:%M:%S", TimeUnit.SECOND),
    DatePattern("dotted_datetime_minute", "%d.%m.%Y %H:%M", TimeUnit.MINUTE),
    DatePattern("dotted_date", "%d.%m.%Y", TimeUnit.DAY),
]

DAY_FIRST_PATTERNS = [
    DatePattern("eu_slash_datetime", "%d/%m/%Y %H:%M:%S", TimeUnit.SECOND, True),
    DatePattern("eu_slash_datetime_minute", "%d/%m/%Y %H:%M", TimeUnit.MINUTE, True),
    DatePattern("eu_slash_date", "%d/%m/%Y", TimeUnit.DAY, True),
    DatePattern("eu_dash_date", "%d-%m-%Y", TimeUnit.DAY, True),
]

MONTH_FIRST_PATTERNS = [
    DatePattern("us_slash_datetime", "%m/%d/%Y %H:%M:%S", TimeUnit.SECOND, True),
    DatePattern("us_slash_datetime_minute", "%m/%d/%Y %H:%M", TimeUnit.MINUTE, True),
    DatePattern("us_slash_date", "%m/%d/%Y", TimeUnit.DAY, True),
    DatePattern("us_dash_date", "%m-%d-%Y", TimeUnit.DAY, True),
]

_PATTERNS_BY_FORMAT = {
    p.format: p for p in UNAMBIGUOUS_PATTERNS + DAY_FIRST_PATTERNS + MONTH_FIRST_PATTERNS
}

# Texts without a single digit never parse as dates
_DATE_SHAPE = re.compile(r"^\s*\S.*\d.*$")


@dataclass(frozen=True)
class LocaleServices:
    """Locale-aware number and date services.

    Attributes:
        locale: Normalized locale token (e.g., "en-US", "de-CH").
        decimal_separator: Decimal separator of written numbers.
        group_separators: Accepted digit grouping separators.
        day_first: True if ambiguous numeric dates read day before month.

    Examples:
        >>> services = get_locale_services("de-DE")
        >>> services.parse_number("1.234,5")
        1234.5
        >>> services.parse_number("abc") is None
        True
    """

    locale: str
    decimal_separator: str = "."
    group_separators: Tuple[str, ...] = (",",)
    day_first: bool = False

    def _number_regex(self) -> re.Pattern:
        return _compile_number_regex(self.decimal_separator, self.group_separators)

    def parse_number(self, text: str) -> Optional[Union[int, float]]:
        """Parse a number written in this locale.

        Args:
            text: Candidate number text; surrounding whitespace is ignored.

        Returns:
            An int for integral literals without decimals or exponent, a float
            otherwise, or None if the text is not a number in this locale.
        """
        candidate = text.strip()
        if not candidate:
            return None
        match = self._number_regex().match(candidate)
        if not match:
            return None
        normalized = candidate
        for separator in self.group_separators:
            normalized = normalized.replace(separator, "")
        normalized = normalized.replace(self.decimal_separator, ".")
        if re.fullmatch(r"[+-]?\d+", normalized):
            try:
                return int(normalized)
            except ValueError:
                # Beyond the interpreter's integer digit limit
                return float(normalized)
        try:
            return float(normalized)
        except ValueError:
            return None

    def date_patterns(self) -> List[DatePattern]:
        """Candidate date patterns: unambiguous first, then the locale's preferred day/month order."""
        if self.day_first:
            return UNAMBIGUOUS_PATTERNS + DAY_FIRST_PATTERNS + MONTH_FIRST_PATTERNS
        return UNAMBIGUOUS_PATTERNS + MONTH_FIRST_PATTERNS + DAY_FIRST_PATTERNS

    def parse_date(self, text: str, pattern: str) -> Optional[datetime]:
        """Parse a text with a ``strptime`` pattern, returning None on mismatch."""
        candidate = text.strip()
        if not _DATE_SHAPE.match(candidate):
            return None
        try:
            return datetime.strptime(candidate, pattern)
        except ValueError:
            return None

    def matching_patterns(self, text: str, candidates: Optional[List[str]] = None) -> List[DatePattern]:
        """Return the patterns (in candidate order) the text parses with.

        Args:
            text: Date/time text.
            candidates: Restrict matching to these ``strptime`` formats. Defaults
                to all locale-ordered patterns.
        """
        if candidates is None:
            patterns = self.date_patterns()
        else:
            patterns = [pattern_of(fmt) for fmt in candidates]
        return [p for p in patterns if self.parse_date(text, p.format) is not None]


def pattern_of(fmt: str) -> DatePattern:
    """Look up the known pattern for a ``strptime`` format.

    Raises:
        ValueError: If the format is not one of the known candidate patterns.
    """
    try:
        return _PATTERNS_BY_FORMAT[fmt]
    except KeyError:
        raise ValueError(f"Unknown date pattern: {fmt}") from None


@lru_cache(maxsize=None)
def _compile_number_regex(decimal_separator: str, group_separators: Tuple[str, ...]) -> re.Pattern:
    decimal = re.escape(decimal_separator)
    groups = "|".join(re.escape(s) for s in group_separators)
    integer = rf"(?:\d{{1,3}}(?:(?:{groups})\d{{3}})+|\d+)"
    return re.compile(
        rf"^[+-]?(?:{integer}(?:{decimal}\d+)?|{decimal}\d+)(?:[eE][+-]?\d+)?$"
    )


def normalize_locale(token: Optional[str]) -> str:
    """Normalize a locale token: "de_ch" -> "de-CH", "FR" -> "fr".

    Examples:
        >>> normalize_locale("en_us")
        'en-US'
        >>> normalize_locale(None)
        'en-US'
    """
    if not token:
        return DEFAULT_LOCALE
    parts = token.strip().replace("_", "-").split(".")[0].split("-")
    language = parts[0].lower()
    if len(parts) > 1 and parts[1]:
        return f"{language}-{parts[1].upper()}"
    return language


@lru_cache(maxsize=64)
def get_locale_services(locale: Optional[str] = None) -> LocaleServices:
    """Get the services for a locale token.

    Lookup goes from the full token to its language and finally to the
    default locale, so unknown tokens never raise.

    Args:
        locale: Locale token such as "en-US", "de_CH" or "fr".

    Returns:
        A (cached) LocaleServices instance.
    """
    normalized = normalize_locale(locale)
    language = normalized.split("-")[0]
    conventions = _LOCALE_CONVENTIONS.get(normalized.lower()) or _LOCALE_CONVENTIONS.get(language)
    if conventions is None:
        logger.debug("No conventions for locale %s, using %s", normalized, DEFAULT_LOCALE)
        conventions = _LOCALE_CONVENTIONS[DEFAULT_LOCALE.lower()]
    decimal_separator, group_separators, day_first = conventions
    return LocaleServices(
        locale=normalized,
        decimal_separator=decimal_separator,
        group_separators=group_separators,
        day_first=day_first,
    )


def resolve_locale(locale: Union[str, LocaleServices, None]) -> LocaleServices:
    """Accept either a locale token or ready-made services."""
    if isinstance(locale, LocaleServices):
        return locale
    return get_locale_services(locale)


__all__ = [
    "DEFAULT_LOCALE",
    "DatePattern",
    "LocaleServices",
    "get_locale_services",
    "normalize_locale",
    "pattern_of",
    "resolve_locale",
]
