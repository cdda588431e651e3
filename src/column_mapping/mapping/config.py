"""Column mapping configuration constants.

This module centralizes the limits and heuristics bounds of the column
mapping generator. Adjust these constants, or override them from a YAML file
with `load_config()`, to tune inference on real data.

YAML layout:
    mapping:
      min_width: 10
      max_width: 300
      max_text_length_to_be_indexed: 100
      guess_second_epochs: false
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

from column_mapping.core.locale import DEFAULT_LOCALE

# ============================================================================
# WIDTH AND INDEXING
# ============================================================================

MIN_WIDTH = 10
MAX_WIDTH = 300

# Text (or pretty-printed JSON) longer than this is not indexed
MAX_TEXT_LENGTH_TO_BE_INDEXED = 100


# ============================================================================
# DATE/TIME DETECTION
# ============================================================================

# Text values with fewer digits are never tried as dates
DATESTRING_MIN_EXPECTED_DIGITS = 2

# Epoch guessing window (UTC years, upper bound exclusive)
EPOCH_MIN_YEAR = 2000
EPOCH_MAX_YEAR = 2100

# Ten-digit identifiers are common, so second epochs are only guessed on request
GUESS_SECOND_EPOCHS = False

# Window for epochs whose column name suggests a time (UTC years, upper bound exclusive)
NAMED_EPOCH_MIN_YEAR = 1980
NAMED_EPOCH_MAX_YEAR = 2100


# ============================================================================
# MESSAGES
# ============================================================================

INCOMPATIBLE_DATA_TYPES = "Column contains values of incompatible data types"


@dataclass(frozen=True)
class MappingConfig:
    """Tunable parameters of the column mapping generator.

    Defaults mirror the module constants.

    Examples:
        >>> MappingConfig().max_width
        300
        >>> MappingConfig(min_width=20).min_width
        20
    """

    min_width: int = MIN_WIDTH
    max_width: int = MAX_WIDTH
    max_text_length_to_be_indexed: int = MAX_TEXT_LENGTH_TO_BE_INDEXED
    datestring_min_expected_digits: int = DATESTRING_MIN_EXPECTED_DIGITS
    epoch_min_year: int = EPOCH_MIN_YEAR
    epoch_max_year: int = EPOCH_MAX_YEAR
    guess_second_epochs: bool = GUESS_SECOND_EPOCHS
    named_epoch_min_year: int = NAMED_EPOCH_MIN_YEAR
    named_epoch_max_year: int = NAMED_EPOCH_MAX_YEAR
    default_locale: str = DEFAULT_LOCALE

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if self.min_width < 1:
            raise ValueError(f"min_width must be positive, got {self.min_width}")
        if self.min_width > self.max_width:
            raise ValueError(
                f"min_width ({self.min_width}) must not exceed max_width ({self.max_width})"
            )
        if self.epoch_min_year >= self.epoch_max_year:
            raise ValueError("epoch_min_year must be lower than epoch_max_year")
        if self.named_epoch_min_year >= self.named_epoch_max_year:
            raise ValueError("named_epoch_min_year must be lower than named_epoch_max_year")


DEFAULT_CONFIG = MappingConfig()


def load_config(config_file: Path) -> MappingConfig:
    """Load a MappingConfig from a YAML file.

    Keys not present in the file keep their defaults.

    Args:
        config_file: Path to a YAML file with a top-level ``mapping`` section.

    Returns:
        The resulting configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the YAML is malformed, contains unknown keys, or values
            violate configuration constraints.

    Examples:
        >>> config = load_config(Path("config/mapping.yaml"))
        >>> config.max_width
        300
    """
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_file}")
    try:
        with config_file.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to read config file {config_file}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_file} must contain a mapping")
    section = data.get("mapping", {}) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'mapping' section of {config_file} must be a mapping")

    known = {f.name: f for f in fields(MappingConfig)}
    unknown = sorted(set(section) - set(known))
    if unknown:
        raise ValueError(
            f"Unknown config keys in {config_file}: {', '.join(unknown)}. "
            f"Valid keys: {', '.join(known)}"
        )

    overrides = {}
    for key, value in section.items():
        expected = type(getattr(DEFAULT_CONFIG, key))
        if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValueError(f"Config key '{key}' must be an integer, got {value!r}")
        if expected is bool and not isinstance(value, bool):
            raise ValueError(f"Config key '{key}' must be true or false, got {value!r}")
        if expected is str and not isinstance(value, str):
            raise ValueError(f"Config key '{key}' must be a string, got {value!r}")
        overrides[key] = value

    return replace(DEFAULT_CONFIG, **overrides)


__all__ = [
    "DATESTRING_MIN_EXPECTED_DIGITS",
    "DEFAULT_CONFIG",
    "INCOMPATIBLE_DATA_TYPES",
    "MAX_TEXT_LENGTH_TO_BE_INDEXED",
    "MAX_WIDTH",
    "MIN_WIDTH",
    "MappingConfig",
    "load_config",
]
