"""
Ingestion package for csvquery.

Re-exports the row parsers and the source/directory loaders so callers can
import from `csvquery.ingestion` directly.
"""

from csvquery.ingestion.loader import (
    IngestResult,
    ingest_directory,
    ingest_source,
    ingest_sources,
    iter_csv_sources,
)
from csvquery.ingestion.parsing import (
    ColumnSchema,
    build_column_index,
    parse_price,
    parse_row,
)

__all__ = [
    # Parsing
    "ColumnSchema",
    "build_column_index",
    "parse_price",
    "parse_row",
    # Loading
    "IngestResult",
    "ingest_directory",
    "ingest_source",
    "ingest_sources",
    "iter_csv_sources",
]
