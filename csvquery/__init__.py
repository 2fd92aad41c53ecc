"""
csvquery - in-memory price queries over product CSV files.

This package loads comma-separated product listings into a thread-safe
in-memory store and answers simple price comparisons against it:

- Tolerant CSV ingestion (rows with an unparsable price are dropped)
- Concurrent loading of directories or explicit file lists
- Snapshot reads that never expose the store's internal list
- Table or JSON output from a small typer CLI
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from csvquery.config import Settings, get_settings
from csvquery.domain.models import Record
from csvquery.errors import (
    ConfigurationError,
    CsvQueryError,
    IngestionError,
    SchemaError,
    SourceReadError,
)
from csvquery.ingestion import (
    ColumnSchema,
    IngestResult,
    ingest_directory,
    ingest_source,
    ingest_sources,
)
from csvquery.store import TabularStore
from csvquery.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Record",
    "TabularStore",
    # Ingestion
    "ColumnSchema",
    "IngestResult",
    "ingest_directory",
    "ingest_source",
    "ingest_sources",
    # Errors
    "CsvQueryError",
    "ConfigurationError",
    "IngestionError",
    "SchemaError",
    "SourceReadError",
    # Logging
    "configure_logging",
    "get_logger",
]
