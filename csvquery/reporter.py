from __future__ import annotations

import json
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from csvquery.domain.models import Record

EMPTY_MESSAGE = "No matching products."


def records_to_json(records: Sequence[Record]) -> str:
    """
    Serialize records as a JSON array keyed company_id/kind/price.
    """
    payload: List[dict] = [record.model_dump(by_alias=True) for record in records]
    return json.dumps(payload, indent=1)


def build_table(records: Sequence[Record], title: Optional[str] = None) -> Table:
    """Build the rich table used by `print_records`."""
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("CompanyID", style="cyan", no_wrap=True)
    table.add_column("Kind", style="magenta")
    table.add_column("Price", justify="right", style="bold green")

    for record in records:
        table.add_row(record.identifier, record.category, f"{record.price:,.2f}")
    return table


def print_records(
    records: Sequence[Record],
    console: Optional[Console] = None,
    title: Optional[str] = None,
) -> None:
    """
    Render records as a rich table.

    Prints a short notice instead of an empty table when nothing matched.
    """
    console = console or Console()

    if not records:
        console.print(f"[yellow]{EMPTY_MESSAGE}[/yellow]")
        return

    console.print(build_table(records, title=title))


__all__ = ["EMPTY_MESSAGE", "build_table", "print_records", "records_to_json"]
