"""
Row-level parsing for CSV sources.

Nothing in this module raises on bad data. An unparsable price yields None
and the caller drops the row; that is the only lossy path in ingestion.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from csvquery.config import Settings
from csvquery.domain.models import Record


@dataclass(frozen=True)
class ColumnSchema:
    """Header names (already lower-cased) of the three required columns."""

    identifier: str = "companyid"
    category: str = "kind"
    price: str = "price"
    currency_symbols: str = "$"

    @classmethod
    def from_settings(cls, settings: Settings) -> "ColumnSchema":
        return cls(
            identifier=normalize_header(settings.id_column),
            category=normalize_header(settings.category_column),
            price=normalize_header(settings.price_column),
            currency_symbols=settings.currency_symbols,
        )

    @property
    def required(self) -> tuple[str, str, str]:
        return (self.identifier, self.category, self.price)


def normalize_header(name: str) -> str:
    return name.strip().lower()


def build_column_index(header: Sequence[str]) -> Dict[str, int]:
    """
    Map normalized header names to their positions.

    A name that appears twice resolves to its last position.
    """
    return {normalize_header(name): position for position, name in enumerate(header)}


def missing_columns(index: Dict[str, int], schema: ColumnSchema) -> List[str]:
    return [name for name in schema.required if name not in index]


def parse_price(text: str, currency_symbols: str = "$") -> Optional[float]:
    """
    Parse a price cell such as "$12.50" or " 49.00 ".

    Every character in `currency_symbols` is removed before surrounding
    whitespace is trimmed. Returns None for empty, non-numeric or non-finite
    text, and for the non-ASCII digits ("١٢", "１２") and digit separators
    ("1_000") that float() alone would accept. NaN and infinities are dropped
    so every stored price falls in exactly one of `<`, `=`, `>`.
    """
    for symbol in currency_symbols:
        text = text.replace(symbol, "")
    text = text.strip()
    if not text or not text.isascii() or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _field(row: Sequence[str], position: int) -> str:
    # Short rows read missing trailing fields as empty strings.
    return row[position] if position < len(row) else ""


def parse_row(row: Sequence[str], index: Dict[str, int], schema: ColumnSchema) -> Optional[Record]:
    """Build a Record from one data row, or None when its price does not parse."""
    price = parse_price(_field(row, index[schema.price]), schema.currency_symbols)
    if price is None:
        return None
    return Record(
        identifier=_field(row, index[schema.identifier]),
        category=_field(row, index[schema.category]),
        price=price,
    )


__all__ = [
    "ColumnSchema",
    "build_column_index",
    "missing_columns",
    "normalize_header",
    "parse_price",
    "parse_row",
]
