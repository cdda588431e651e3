"""Tests for locale services: number parsing and date pattern ordering."""

import pytest

from column_mapping.core.locale import (
    DAY_FIRST_PATTERNS,
    MONTH_FIRST_PATTERNS,
    UNAMBIGUOUS_PATTERNS,
    LocaleServices,
    get_locale_services,
    normalize_locale,
    pattern_of,
    resolve_locale,
)


@pytest.mark.parametrize(
    "token, expected",
    [
        ("en-US", "en-US"),
        ("en_us", "en-US"),
        ("de_CH.UTF-8", "de-CH"),
        ("FR", "fr"),
        (" hy-am ", "hy-AM"),
        (None, "en-US"),
        ("", "en-US"),
    ],
)
def test_normalize_locale(token, expected):
    assert normalize_locale(token) == expected


@pytest.mark.parametrize(
    "locale, text, expected",
    [
        ("en-US", "1234", 1234),
        ("en-US", "1,234.5", 1234.5),
        ("en-US", "-0.25", -0.25),
        ("en-US", ".5", 0.5),
        ("en-US", "+3", 3),
        ("en-US", " 42 ", 42),
        ("en-US", "1.5e3", 1500.0),
        ("de-DE", "1.234,5", 1234.5),
        ("de-DE", "3,14", 3.14),
        ("de-CH", "1'234.50", 1234.5),
        ("fr-FR", "1 234,5", 1234.5),
        ("hy-AM", "1 234", 1234),
    ],
)
def test_parse_number(locale, text, expected):
    """Test that numbers written per locale conventions are parsed."""
    assert get_locale_services(locale).parse_number(text) == expected


@pytest.mark.parametrize(
    "locale, text",
    [
        ("en-US", ""),
        ("en-US", "abc"),
        ("en-US", "1,23"),
        ("en-US", "1.2.3"),
        ("en-US", "12a"),
        ("en-US", "2019-01-18"),
        ("en-US", "1 234"),
        ("de-DE", "1,234.5"),
    ],
)
def test_parse_number_rejects(locale, text):
    """Test that texts that are not numbers in the locale yield None."""
    assert get_locale_services(locale).parse_number(text) is None


def test_parse_number_returns_int_for_integral_literals():
    services = get_locale_services("en-US")
    assert isinstance(services.parse_number("1,000"), int)
    assert isinstance(services.parse_number("1.0"), float)


def test_get_locale_services_fallbacks():
    """Test lookup from full token to language to the default locale."""
    assert get_locale_services("de-AT").decimal_separator == ","
    assert get_locale_services("de-AT").locale == "de-AT"
    assert get_locale_services("en-US").day_first is False
    assert get_locale_services("en-GB").day_first is True

    unknown = get_locale_services("xx-YY")
    assert unknown.locale == "xx-YY"
    assert unknown.decimal_separator == "."
    assert unknown.day_first is False


def test_date_patterns_order():
    """Test that unambiguous patterns come first, then the locale's day/month order."""
    us = get_locale_services("en-US").date_patterns()
    de = get_locale_services("de-DE").date_patterns()

    assert us[: len(UNAMBIGUOUS_PATTERNS)] == UNAMBIGUOUS_PATTERNS
    assert us[len(UNAMBIGUOUS_PATTERNS)] == MONTH_FIRST_PATTERNS[0]
    assert de[len(UNAMBIGUOUS_PATTERNS)] == DAY_FIRST_PATTERNS[0]
    assert len(us) == len(de)


def test_parse_date():
    services = get_locale_services("en-US")
    assert services.parse_date("2019-01-18", "%Y-%m-%d").day == 18
    assert services.parse_date("2019-01-18x", "%Y-%m-%d") is None
    assert services.parse_date("Jan", "%b") is None


def test_matching_patterns_restricted_to_candidates():
    services = get_locale_services("en-US")
    matched = services.matching_patterns("01/02/2019", ["%d/%m/%Y"])
    assert [p.format for p in matched] == ["%d/%m/%Y"]


def test_pattern_of_unknown_format():
    assert pattern_of("%Y-%m-%d").name == "iso8601_date"
    with pytest.raises(ValueError, match="Unknown date pattern"):
        pattern_of("%Q")


def test_resolve_locale_passes_services_through():
    services = LocaleServices(locale="custom", decimal_separator=",", group_separators=(".",), day_first=True)
    assert resolve_locale(services) is services
    assert resolve_locale("de").decimal_separator == ","


def test_parse_number_beyond_integer_digit_limit():
    """Test that digit runs too long for int() still parse as numbers."""
    services = get_locale_services("en-US")
    assert services.parse_number("9" * 5000) > 10**4000
    assert services.parse_number("1" * 20) == int("1" * 20)
