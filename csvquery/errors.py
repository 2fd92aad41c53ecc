"""
Exception hierarchy for csvquery.

Configuration problems are caught at the CLI boundary before any ingestion
runs; ingestion failures carry the offending source so the caller can report
it once and stop. Unparsable price cells are not errors and never reach this
module.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class CsvQueryError(Exception):
    """Base exception for all csvquery failures."""


class ConfigurationError(CsvQueryError):
    """Raised for invalid command-line input (missing source, bad operator, bad threshold)."""


class IngestionError(CsvQueryError):
    """Raised when a source cannot be ingested."""

    def __init__(self, source: Path | str, message: str) -> None:
        self.source = str(source)
        super().__init__(message)


class SourceReadError(IngestionError):
    """Raised when a source cannot be opened or read."""

    def __init__(self, source: Path | str, reason: str) -> None:
        super().__init__(source, f"read {source}: {reason}")


class SchemaError(IngestionError):
    """Raised when a source header lacks one or more required columns."""

    def __init__(self, source: Path | str, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        quoted = ", ".join(f"'{name}'" for name in self.missing)
        super().__init__(source, f"{source} missing required column(s) {quoted}")


__all__ = [
    "CsvQueryError",
    "ConfigurationError",
    "IngestionError",
    "SourceReadError",
    "SchemaError",
]
