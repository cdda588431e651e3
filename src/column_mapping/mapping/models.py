"""Column mapping data models.

This module defines core data structures for column mapping results:
- ColumnDescriptor: One side (source or target) of a field's inferred schema
- ColumnPair: Source and target descriptors of one field plus an optional warning
- MappingReport: Generated column pairs with rendering helpers
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from column_mapping.core.enums import DataType


@dataclass
class ColumnDescriptor:
    """Inferred schema of one field, as observed (source) or as stored (target).

    Attributes:
        name: Field key, stable for the descriptor's lifetime.
        data_type: Inferred data type; None until a non-empty value was seen.
        format: Date/time format, only present on TIME columns. On the source
            side this is the pattern values were parsed with, on the target
            side the display format.
        width: Display width in characters.
        indexed: Whether the field is eligible for indexing (target side only).
        candidate_formats: Parse patterns still matching every sample of an
            ambiguous date column (e.g., day-first and month-first).
    """

    name: str
    data_type: Optional[DataType] = None
    format: Optional[str] = None
    width: Optional[int] = None
    indexed: Optional[bool] = None
    candidate_formats: List[str] = field(default_factory=list, repr=False)


@dataclass
class ColumnPair:
    """Source and target descriptors of one field.

    Attributes:
        source: What was observed in the documents.
        target: The storage/index-facing shape of the field.
        warning: Set once a sample forced an irreversible downgrade from TIME.

    Examples:
        >>> pair = ColumnPair.of("age", DataType.NUMBER, indexed=True)
        >>> pair.set_data_type(DataType.TEXT)
        >>> pair.target.data_type
        <DataType.TEXT: 'TEXT'>
    """

    source: ColumnDescriptor
    target: ColumnDescriptor
    warning: Optional[str] = None

    @classmethod
    def of(cls, name: str, data_type: Optional[DataType], indexed: bool) -> ColumnPair:
        """Create a pair whose source and target start out identical."""
        return cls(
            source=ColumnDescriptor(name=name, data_type=data_type),
            target=ColumnDescriptor(name=name, data_type=data_type, indexed=indexed),
        )

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def data_type(self) -> Optional[DataType]:
        return self.source.data_type

    def set_data_type(self, data_type: DataType) -> None:
        """Set the data type on both sides."""
        self.source.data_type = data_type
        self.target.data_type = data_type

    def clear_formats(self) -> None:
        """Remove formats and pending format candidates on both sides."""
        for descriptor in (self.source, self.target):
            descriptor.format = None
            descriptor.candidate_formats = []

    def to_column(self) -> Dict:
        """Storage-facing column definition of this pair.

        Returns:
            Dictionary with name, dataType, width, indexed and, on TIME
            columns with a display format, format.
        """
        column = {
            "name": self.target.name,
            "dataType": self.target.data_type.value if self.target.data_type else None,
            "width": self.target.width,
            "indexed": bool(self.target.indexed),
        }
        if self.target.format:
            column["format"] = self.target.format
        return column


@dataclass
class MappingReport:
    """Column pairs generated from one sample of documents.

    Attributes:
        columns: Generated column pairs, in first-seen field order.
        locale: Locale the sample was interpreted with.
        document_count: Number of documents in the sample.
        sources: Names of the inputs the documents were read from.
    """

    columns: List[ColumnPair]
    locale: str
    document_count: int
    sources: List[str] = field(default_factory=list)

    def get_warnings(self) -> List[ColumnPair]:
        """Return the pairs that carry a warning."""
        return [c for c in self.columns if c.warning]

    def count_by_type(self) -> Dict[str, int]:
        """Count columns per data type, in DataType declaration order."""
        counts = {t.value: 0 for t in DataType}
        for column in self.columns:
            if column.target.data_type is not None:
                counts[column.target.data_type.value] += 1
        return {k: v for k, v in counts.items() if v}

    def summary(self) -> str:
        """Generate a concise text summary of the mapping.

        Examples:
            >>> print(report.summary())
            Column Mapping Summary:
              Sample: 120 documents (events.jsonl), locale en-US
              Columns: 6 (NUMBER: 2, TEXT: 3, TIME: 1)
              Warnings: 0
        """
        by_type = ", ".join(f"{k}: {v}" for k, v in self.count_by_type().items())
        sources = f" ({', '.join(self.sources)})" if self.sources else ""
        return (
            f"Column Mapping Summary:\n"
            f"  Sample: {self.document_count} documents{sources}, locale {self.locale}\n"
            f"  Columns: {len(self.columns)}" + (f" ({by_type})" if by_type else "") + "\n"
            f"  Warnings: {len(self.get_warnings())}"
        )

    def to_console_summary(self) -> str:
        """Generate the summary followed by one line per column."""
        lines = [self.summary(), ""]
        for column in self.columns:
            target = column.target
            fmt = f" [{target.format}]" if target.format else ""
            index = "indexed" if target.indexed else "not indexed"
            icon = "⚠️ " if column.warning else ""
            lines.append(
                f"{icon}{target.name}: {target.data_type.value}{fmt}, width {target.width}, {index}"
            )
            if column.warning:
                lines.append(f"   - {column.warning}")
        return "\n".join(lines)

    def to_markdown(self) -> str:
        """Generate a Markdown table of the inferred columns.

        Returns:
            Formatted Markdown with a summary section, the column table and,
            if any, a warnings section.
        """
        from datetime import datetime

        lines = [
            "# Column Mapping Report",
            "",
            f"**Sources:** {', '.join(self.sources) if self.sources else '-'}",
            f"**Documents:** {self.document_count}",
            f"**Locale:** {self.locale}",
            f"**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            "",
            "## Columns",
            "",
            "| Name | Data Type | Format | Width | Indexed |",
            "|------|-----------|--------|-------|---------|",
        ]
        for column in self.columns:
            target = column.target
            lines.append(
                f"| {target.name} | {target.data_type.value} | {target.format or ''} "
                f"| {target.width} | {'yes' if target.indexed else 'no'} |"
            )
        lines.append("")

        warnings = self.get_warnings()
        if warnings:
            lines.append("## ⚠️ Warnings")
            lines.append("")
            for column in warnings:
                lines.append(f"- **{column.name}**: {column.warning}")
            lines.append("")

        return "\n".join(lines)

    def to_json(self) -> str:
        """Generate a JSON document with column definitions and warnings."""
        import json
        from datetime import datetime

        report_data = {
            "metadata": {
                "sources": self.sources,
                "document_count": self.document_count,
                "locale": self.locale,
                "generated_at": datetime.now().isoformat(),
            },
            "columns": [c.to_column() for c in self.columns],
            "warnings": [{"name": c.name, "warning": c.warning} for c in self.get_warnings()],
        }
        return json.dumps(report_data, indent=2, ensure_ascii=False)


__all__ = ["ColumnDescriptor", "ColumnPair", "MappingReport"]
