from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer

from csvquery import query
from csvquery.config import get_settings
from csvquery.errors import ConfigurationError, IngestionError
from csvquery.ingestion import ingest_directory, ingest_sources
from csvquery.query import SUPPORTED_OPERATORS
from csvquery.reporter import print_records, records_to_json
from csvquery.store import TabularStore
from csvquery.utils.logging import configure_logging, get_logger
from csvquery.utils.profiler import profile_block

app = typer.Typer(help="Load product CSVs into memory and filter them by price.")
log = get_logger(__name__)


def _split_paths(values: Optional[List[str]]) -> List[Path]:
    """Accept both repeated --csv options and comma-separated lists."""
    paths: List[Path] = []
    for value in values or []:
        paths.extend(Path(part.strip()) for part in value.split(",") if part.strip())
    return paths


def validate_request(
    directory: Optional[Path],
    csv_files: List[Path],
    op: str,
    price: float,
) -> None:
    """
    Reject unusable input before anything is read.

    Raises
    ------
    ConfigurationError
        No source was given, the operator is unknown, or the threshold is not positive.
    """
    if directory is None and not csv_files:
        raise ConfigurationError(
            "please provide --dir pointing at the CSV folder or at least one --csv file"
        )
    if op not in SUPPORTED_OPERATORS:
        allowed = ", ".join(f'"{symbol}"' for symbol in SUPPORTED_OPERATORS)
        raise ConfigurationError(f"--op must be one of {allowed}")
    if not price > 0:
        raise ConfigurationError("--price must be a positive number")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"env={settings.app_env} log_level={settings.log_level} json_logs={settings.log_json} | "
        f"workers={settings.ingest_workers} suffix={settings.csv_suffix} | "
        f"columns=({settings.id_column}, {settings.category_column}, {settings.price_column}) "
        f"currency='{settings.currency_symbols}'"
    )


@app.command("query")
def run_query(
    directory: Optional[Path] = typer.Option(
        None,
        "--dir",
        "-d",
        help="Directory containing CSV files (searched recursively).",
    ),
    csv: Optional[List[str]] = typer.Option(
        None,
        "--csv",
        "-c",
        help="CSV file to load; repeat the option or pass a comma-separated list.",
    ),
    op: str = typer.Option(
        "",
        "--op",
        "-o",
        help='Price comparison operator: "<", "=" or ">".',
    ),
    price: float = typer.Option(
        0.0,
        "--price",
        "-p",
        help="Positive price to compare against.",
    ),
    kind: Optional[str] = typer.Option(
        None,
        "--kind",
        "-k",
        help="Only keep matches with exactly this kind (case-sensitive).",
    ),
    cheapest: bool = typer.Option(
        False,
        "--cheapest",
        help="Only output the cheapest match.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output matches as JSON instead of a table.",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        help="Concurrent ingestion workers (default from settings).",
    ),
) -> None:
    """
    Load CSV sources, then print the products whose price matches the comparison.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    csv_files = _split_paths(csv)

    try:
        validate_request(directory, csv_files, op, price)
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    store = TabularStore()
    try:
        with profile_block("load") as stats:
            if directory is not None:
                ingest_directory(directory, store, max_workers=workers)
            if csv_files:
                ingest_sources(csv_files, store, max_workers=workers)
    except (IngestionError, OSError) as exc:
        typer.echo(f"Error loading CSVs: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    total = len(store)
    log.info(
        f"Loaded {total} total records",
        extra={
            "records": total,
            "duration_seconds": round(stats.duration_seconds, 3),
            "rows_per_sec": round(stats.rate(total), 2),
            "peak_rss_bytes": stats.peak_rss_bytes,
            "cpu_percent": stats.cpu_percent,
        },
    )

    matches = store.filter_by_price(op, price)
    if kind is not None:
        matches = query.filter_by_category(matches, kind)
    if cheapest:
        best = query.cheapest(matches)
        matches = [best] if best is not None else []

    if json_output:
        typer.echo(records_to_json(matches))
    else:
        print_records(matches)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
