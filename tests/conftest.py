"""
Pytest configuration for csvquery.

Provides fixtures for:
- Isolated settings (environment cleared, cache reset per test)
- Writing small CSV sources under tmp_path
- Restoring root logging after tests that reconfigure it
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Callable, Generator, Iterable, Sequence

import pytest

from csvquery.config import get_settings
from csvquery.store import TabularStore

_SETTINGS_ENV = (
    "APP_ENV",
    "LOG_LEVEL",
    "LOG_JSON",
    "INGEST_WORKERS",
    "INGEST_CSV_SUFFIX",
    "INGEST_ID_COLUMN",
    "INGEST_CATEGORY_COLUMN",
    "INGEST_PRICE_COLUMN",
    "INGEST_CURRENCY_SYMBOLS",
)

PRODUCT_HEADER = ["CompanyID", "Kind", "Price"]

CsvWriter = Callable[..., Path]


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """
    Clear settings-related environment variables and the settings cache.

    Runs from tmp_path so a developer's `.env` file is never picked up.
    """
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_root_logging() -> Generator[None, None, None]:
    """Drop stream handlers installed by configure_logging during a test."""
    root = logging.getLogger()
    before = set(root.handlers)
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in before and type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def store() -> TabularStore:
    return TabularStore()


@pytest.fixture
def write_csv(tmp_path: Path) -> CsvWriter:
    """
    Factory writing a CSV file and returning its path.

    Usage: write_csv("a.csv", [["A1", "lamp", "$19.99"]], header=[...], directory=...)
    """

    def _write(
        name: str,
        rows: Iterable[Sequence[str]],
        header: Sequence[str] | None = PRODUCT_HEADER,
        directory: Path | None = None,
    ) -> Path:
        target_dir = directory or tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            if header is not None:
                writer.writerow(header)
            writer.writerows(rows)
        return path

    return _write
