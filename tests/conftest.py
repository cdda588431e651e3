"""Shared pytest configuration and fixtures for column mapping tests."""

import pytest

from column_mapping.core.locale import LocaleServices, get_locale_services
from column_mapping.mapping.generator import ColumnMappingGenerator
from column_mapping.mapping.models import ColumnPair


@pytest.fixture
def en_us() -> LocaleServices:
    """Fixed en-US locale services (point decimals, month-first dates)."""
    return LocaleServices(locale="en-US", decimal_separator=".", group_separators=(",",), day_first=False)


@pytest.fixture
def de_de() -> LocaleServices:
    """Fixed de-DE locale services (comma decimals, day-first dates)."""
    return get_locale_services("de-DE")


@pytest.fixture
def generator() -> ColumnMappingGenerator:
    """Generator with default configuration."""
    return ColumnMappingGenerator()


@pytest.fixture
def make_pair():
    """Factory for a fresh column pair with the given name and type."""

    def _make(name, data_type=None, indexed=True):
        return ColumnPair.of(name, data_type, indexed=indexed)

    return _make
