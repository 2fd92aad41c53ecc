"""
Sample data generator for csvquery.

Writes deterministic pseudo-random product CSVs, with a configurable share of
dirty price cells, so the loader's tolerance can be exercised by hand.
"""

from __future__ import annotations

import csv
import random
import sys
import time
from pathlib import Path

import typer

app = typer.Typer(help="Generate synthetic product CSV files.")

HEADER = ["CompanyID", "Kind", "Price"]
KINDS = ["desk lamp", "chair", "table", "shelf", "lamp", "sofa"]
DIRTY_PRICES = ["abc", "", "n/a", "12,50", "$"]


def _format_price(rng: random.Random, amount: float) -> str:
    text = f"{amount:.2f}"
    if rng.random() < 0.5:
        text = f"${text}"
    if rng.random() < 0.2:
        text = f" {text} "
    return text


def _generate_rows_csv(
    csv_path: Path,
    rows: int,
    seed: int,
    dirty_ratio: float = 0.0,
    prefix: str = "P",
) -> int:
    """
    Write `rows` data rows to `csv_path` and return how many carry a valid price.
    """
    rng = random.Random(seed)
    valid = 0

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(HEADER)
        for i in range(rows):
            if rng.random() < dirty_ratio:
                price = rng.choice(DIRTY_PRICES)
            else:
                price = _format_price(rng, round(rng.uniform(1, 500), 2))
                valid += 1
            writer.writerow([f"{prefix}{i + 1:06d}", rng.choice(KINDS), price])
    return valid


@app.command()
def main(
    output: Path = typer.Option(
        Path("data"),
        "--output",
        "-o",
        help="Directory the CSV files are written to.",
    ),
    files: int = typer.Option(
        3,
        "--files",
        "-f",
        min=1,
        help="Number of CSV files to write.",
    ),
    rows: int = typer.Option(
        1_000,
        "--rows",
        "-r",
        min=0,
        help="Rows per file.",
    ),
    dirty_ratio: float = typer.Option(
        0.05,
        "--dirty-ratio",
        min=0.0,
        max=1.0,
        help="Share of rows whose price cell is unparsable.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
) -> None:
    """
    Generate product CSV files for csvquery.
    """
    start = time.perf_counter()
    output.mkdir(parents=True, exist_ok=True)

    total_valid = 0
    for index in range(files):
        csv_path = output / f"products_{index + 1:02d}.csv"
        total_valid += _generate_rows_csv(
            csv_path,
            rows=rows,
            seed=seed + index,
            dirty_ratio=dirty_ratio,
            prefix=f"F{index + 1:02d}-",
        )
        typer.echo(f"Wrote {rows:,} rows -> {csv_path}")

    duration = time.perf_counter() - start
    typer.echo(
        f"Generated {files * rows:,} rows ({total_valid:,} with a valid price) "
        f"in {duration:.2f}s."
    )


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
