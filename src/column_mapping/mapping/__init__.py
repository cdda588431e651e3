"""Column mapping for Column Mapping Tools.

This module infers the column schema of semi-structured documents:

- **Models**: ColumnDescriptor, ColumnPair, MappingReport - inferred schema structures
- **Detectors**: type classification and date/time heuristics (see mapping/detectors/)
- **Config**: width, indexing and epoch limits (import from .config)
- **Generator**: generate() - the single entry point folding a document sample
  into column pairs

Public API:
    ColumnPair: Source and target descriptors of one field
    ColumnMappingGenerator: Configurable generator instance
    generate: Infer column pairs for a sample of documents
    build_report: Wrap generated pairs into a MappingReport

Usage:
    >>> from column_mapping.mapping import generate
    >>> pairs = generate([{"name": "a", "created_at": 1547809200}], "en-US")
    >>> [(p.name, p.target.data_type.value) for p in pairs]
    [('name', 'TEXT'), ('created_at', 'TIME')]
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from column_mapping.core.enums import DataType, TimeUnit
from column_mapping.core.locale import get_locale_services

from .config import MappingConfig, load_config
from .generator import ColumnMappingGenerator, generate
from .models import ColumnDescriptor, ColumnPair, MappingReport


def build_report(
    documents: List[dict],
    locale: Optional[str] = None,
    config: Optional[MappingConfig] = None,
    sources: Optional[Iterable[str]] = None,
) -> MappingReport:
    """Generate column pairs and wrap them into a MappingReport.

    Args:
        documents: Sample documents.
        locale: Locale token. Defaults to the configured default locale.
        config: Optional MappingConfig.
        sources: Names of the inputs the documents came from.

    Returns:
        MappingReport with the generated column pairs.
    """
    generator = ColumnMappingGenerator(config)
    services = get_locale_services(locale or generator.config.default_locale)
    return MappingReport(
        columns=generator.generate(documents, services),
        locale=services.locale,
        document_count=len(documents),
        sources=list(sources or []),
    )


__all__ = [
    # Data models
    "ColumnDescriptor",
    "ColumnPair",
    "MappingReport",
    # Generation
    "ColumnMappingGenerator",
    "generate",
    "build_report",
    # Configuration
    "MappingConfig",
    "load_config",
    # Enums
    "DataType",
    "TimeUnit",
]
