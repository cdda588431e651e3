"""Column Mapping Tools: schema inference for semi-structured documents.

The package derives, per field of a document sample, a data type, a display
format, a column width and an indexing flag. `column_mapping.mapping` holds
the engine; the CLI (`column-mapping infer`) reads JSON, JSON Lines and CSV
samples and reports the inferred columns.
"""

__all__ = [
    "__version__",
    "generate",
]

__version__ = "0.1.0"

from .mapping import generate  # noqa: E402
