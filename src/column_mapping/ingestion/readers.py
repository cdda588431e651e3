"""Document readers.

Load a finite sample of documents from JSON, JSON Lines or CSV files
(optionally gzip-compressed) for column mapping generation.
"""

from __future__ import annotations

import gzip
import io
import json
import logging
import zlib
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

logger = logging.getLogger(__name__)

JSON_SUFFIXES = (".json",)
JSON_LINES_SUFFIXES = (".jsonl", ".ndjson")
CSV_SUFFIXES = (".csv",)

SUPPORTED_SUFFIXES = JSON_SUFFIXES + JSON_LINES_SUFFIXES + CSV_SUFFIXES


def detect_format(path: Path) -> str:
    """Detect the document format from a file name.

    Args:
        path: Input file; a trailing ``.gz`` is ignored.

    Returns:
        One of "json", "jsonl" or "csv".

    Raises:
        ValueError: If the suffix is not supported.

    Examples:
        >>> detect_format(Path("events.jsonl.gz"))
        'jsonl'
    """
    suffixes = [s.lower() for s in path.suffixes]
    if suffixes and suffixes[-1] == ".gz":
        suffixes = suffixes[:-1]
    suffix = suffixes[-1] if suffixes else ""
    if suffix in JSON_SUFFIXES:
        return "json"
    if suffix in JSON_LINES_SUFFIXES:
        return "jsonl"
    if suffix in CSV_SUFFIXES:
        return "csv"
    raise ValueError(
        f"Unsupported input file: {path}. Supported suffixes: {', '.join(SUPPORTED_SUFFIXES)} "
        f"(optionally followed by .gz)"
    )


def _read_text(path: Path) -> str:
    if path.suffix.lower() == ".gz":
        with gzip.open(path, "rt", encoding="utf-8-sig") as f:
            return f.read()
    with open(path, "r", encoding="utf-8-sig") as f:
        return f.read()


def _parse_json(text: str, path: Path) -> List[Dict]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse JSON file {path}: {e}") from e
    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list):
        raise ValueError(f"JSON file {path} must contain an object or an array of objects")
    documents = [d for d in data if isinstance(d, dict)]
    skipped = len(data) - len(documents)
    if skipped:
        logger.warning("Skipped %d non-object entries in %s", skipped, path)
    return documents


def _parse_json_lines(text: str, path: Path, limit: Optional[int]) -> List[Dict]:
    documents: List[Dict] = []
    for line_number, line in enumerate(text.splitlines(), 1):
        if limit is not None and len(documents) >= limit:
            break
        line = line.strip()
        if not line:
            continue
        try:
            document = json.loads(line)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse line {line_number} of {path}: {e}") from e
        if isinstance(document, dict):
            documents.append(document)
        else:
            logger.warning("Skipping non-object line %d in %s", line_number, path)
    return documents


def _parse_csv(text: str, path: Path, limit: Optional[int]) -> List[Dict]:
    # Keep cells as raw strings; type inference is the generator's job
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            nrows=limit,
        )
    except pd.errors.EmptyDataError:
        return []
    except pd.errors.ParserError as e:
        raise ValueError(f"Failed to parse CSV file {path}: {e}") from e
    return df.to_dict(orient="records")


def read_documents(path: Path, limit: Optional[int] = None) -> List[Dict]:
    """Read a sample of documents from a file.

    Args:
        path: JSON (object or array of objects), JSON Lines or CSV file,
            optionally gzip-compressed.
        limit: Maximum number of documents to read. None reads all.

    Returns:
        List of documents (field name -> value). CSV cells are kept as raw
        strings, empty cells as "".

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the format is unsupported or the content cannot be parsed.

    Examples:
        >>> documents = read_documents(Path("data/events.jsonl"), limit=1000)
        >>> len(documents)
        1000
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    if not path.is_file():
        raise ValueError(f"Path is not a file: {path}")
    if limit is not None and limit < 0:
        raise ValueError(f"limit must not be negative, got {limit}")

    fmt = detect_format(path)
    try:
        text = _read_text(path)
    except (OSError, EOFError, zlib.error, UnicodeDecodeError) as e:
        raise ValueError(f"Failed to read input file {path}: {e}") from e

    if fmt == "json":
        documents = _parse_json(text, path)
        if limit is not None:
            documents = documents[:limit]
    elif fmt == "jsonl":
        documents = _parse_json_lines(text, path, limit)
    else:
        documents = _parse_csv(text, path, limit)

    logger.info("Read %d documents from %s", len(documents), path)
    return documents


__all__ = ["SUPPORTED_SUFFIXES", "detect_format", "read_documents"]
