"""
Source and directory ingestion.

Each source is parsed in full before any of its rows reach the store, so a
source that fails (unreadable file, missing required column, malformed CSV)
contributes nothing. Sources are independent: when one fails, the ones already
ingested stay in the store.

Directory and multi-file ingestion fan out over a thread pool, one task per
source. The first failure stops further dispatch, cancels queued sources and
is re-raised once the sources already running have finished.
"""

from __future__ import annotations

import csv
import os
import stat
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from csvquery.config import get_settings
from csvquery.domain.models import Record
from csvquery.errors import SchemaError, SourceReadError
from csvquery.ingestion.parsing import (
    ColumnSchema,
    build_column_index,
    missing_columns,
    parse_row,
)
from csvquery.store.memory import TabularStore
from csvquery.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class IngestResult:
    """Per-source summary: rows added to the store and rows dropped for a bad price."""

    source: str
    added: int
    skipped: int


def _resolve_schema(schema: Optional[ColumnSchema]) -> ColumnSchema:
    return schema or ColumnSchema.from_settings(get_settings())


def _read_source(path: Path, schema: ColumnSchema) -> Tuple[List[Record], int]:
    records: List[Record] = []
    skipped = 0
    try:
        # utf-8-sig drops a leading BOM that would otherwise stick to the first header
        with path.open("r", newline="", encoding="utf-8-sig") as handle:
            reader = csv.reader(handle, skipinitialspace=True)
            header = next((row for row in reader if row), None)
            if header is None:
                raise SchemaError(path, schema.required)
            index = build_column_index(header)
            missing = missing_columns(index, schema)
            if missing:
                raise SchemaError(path, missing)

            for row in reader:
                if not row:
                    continue
                record = parse_row(row, index, schema)
                if record is None:
                    skipped += 1
                    log.debug(
                        "Dropped row with unparsable price",
                        extra={"source": str(path), "line": reader.line_num},
                    )
                    continue
                records.append(record)
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise SourceReadError(path, str(exc)) from exc
    return records, skipped


def ingest_source(
    path: Path | str,
    store: TabularStore,
    schema: Optional[ColumnSchema] = None,
) -> IngestResult:
    """
    Parse one CSV source and append its rows to `store`.

    Parameters
    ----------
    path : Path | str
        File to read. Must start with a header row.
    store : TabularStore
        Destination; receives one `add` call per accepted row.
    schema : ColumnSchema | None
        Required header names. Defaults to the configured ones.

    Returns
    -------
    IngestResult
        Counts of added and dropped rows.

    Raises
    ------
    SourceReadError
        The file could not be opened, decoded or parsed as CSV.
    SchemaError
        The header lacks a required column. Nothing from the source is stored.
    """
    source = Path(path)
    records, skipped = _read_source(source, _resolve_schema(schema))
    for record in records:
        store.add(record)

    log.info(
        f"Ingested {source}",
        extra={"source": str(source), "added": len(records), "skipped": skipped},
    )
    return IngestResult(source=str(source), added=len(records), skipped=skipped)


def _raise_on_walk_error(exc: OSError) -> None:
    raise exc


def iter_csv_sources(root: Path | str, suffix: str = ".csv") -> Iterator[Path]:
    """
    Yield every file under `root` whose name ends with `suffix` (case-insensitive).

    Directories are visited in sorted order. The first filesystem error met
    while walking (missing root, permission denied, ...) is raised as is.
    A `root` that is a file is yielded itself when its name matches.
    """
    suffix = suffix.lower()
    root_path = Path(root)
    if not stat.S_ISDIR(os.stat(root_path).st_mode):
        if root_path.name.lower().endswith(suffix):
            yield root_path
        return

    for dirpath, dirnames, filenames in os.walk(root_path, onerror=_raise_on_walk_error):
        dirnames.sort()
        for name in sorted(filenames):
            if name.lower().endswith(suffix):
                yield Path(dirpath) / name


def _raise_first_failure(futures: Iterable[Future[IngestResult]]) -> None:
    for future in futures:
        if future.done() and not future.cancelled() and future.exception() is not None:
            future.result()


def _ingest_all(
    paths: Iterable[Path],
    store: TabularStore,
    max_workers: int,
    schema: ColumnSchema,
) -> List[IngestResult]:
    if max_workers <= 1:
        return [ingest_source(path, store, schema) for path in paths]

    futures: List[Future[IngestResult]] = []
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="ingest") as executor:
        try:
            for path in paths:
                _raise_first_failure(futures)
                futures.append(executor.submit(ingest_source, path, store, schema))
            wait(futures, return_when=FIRST_EXCEPTION)
            _raise_first_failure(futures)
        except BaseException:
            for future in futures:
                future.cancel()
            raise
    return [future.result() for future in futures]


def _log_summary(results: List[IngestResult]) -> None:
    log.info(
        f"Ingestion complete: {len(results)} source(s)",
        extra={
            "sources": len(results),
            "added": sum(result.added for result in results),
            "skipped": sum(result.skipped for result in results),
        },
    )


def ingest_directory(
    root: Path | str,
    store: TabularStore,
    max_workers: Optional[int] = None,
    schema: Optional[ColumnSchema] = None,
    suffix: Optional[str] = None,
) -> List[IngestResult]:
    """
    Ingest every CSV file found under `root`.

    Sources are dispatched to worker threads as the walk discovers them.
    Results are returned in discovery order. Ingestion is not transactional
    across sources: when a walk or source error is raised, rows from sources
    that completed remain in `store`.
    """
    settings = get_settings()
    results = _ingest_all(
        iter_csv_sources(root, suffix or settings.csv_suffix),
        store,
        max_workers or settings.ingest_workers,
        _resolve_schema(schema),
    )
    _log_summary(results)
    return results


def ingest_sources(
    paths: Iterable[Path | str],
    store: TabularStore,
    max_workers: Optional[int] = None,
    schema: Optional[ColumnSchema] = None,
) -> List[IngestResult]:
    """
    Ingest an explicit list of files concurrently.

    Unlike `ingest_directory`, no suffix filter is applied.
    """
    settings = get_settings()
    results = _ingest_all(
        (Path(path) for path in paths),
        store,
        max_workers or settings.ingest_workers,
        _resolve_schema(schema),
    )
    _log_summary(results)
    return results


__all__ = [
    "IngestResult",
    "ingest_source",
    "ingest_directory",
    "ingest_sources",
    "iter_csv_sources",
]
