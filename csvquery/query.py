"""
Comparison filters over Record snapshots.

Every function here is pure: it takes a sequence of Records (normally a store
snapshot) and returns a new list, leaving its input untouched. Operator
validation is the caller's job; an unknown operator simply matches nothing.

Equality on price is exact float comparison. `19.99` typed on the command
line matches a `19.99` cell because both go through the same float parser,
but computed values may not compare equal.
"""

from __future__ import annotations

import enum
import operator as _op
from typing import Callable, Iterable, List, Optional, Sequence

from csvquery.domain.models import Record


class Operator(str, enum.Enum):
    """Price comparison operators accepted on the command line."""

    LT = "<"
    EQ = "="
    GT = ">"


SUPPORTED_OPERATORS: tuple[str, ...] = tuple(member.value for member in Operator)

_COMPARATORS: dict[str, Callable[[float, float], bool]] = {
    Operator.LT.value: _op.lt,
    Operator.EQ.value: _op.eq,
    Operator.GT.value: _op.gt,
}


def price_predicate(op: str, value: float) -> Optional[Callable[[float], bool]]:
    """
    Build a `price <op> value` predicate, or None when `op` is not supported.
    """
    compare = _COMPARATORS.get(op)
    if compare is None:
        return None
    return lambda price: compare(price, value)


def filter_by_price(records: Iterable[Record], op: str, value: float) -> List[Record]:
    """Return the records whose price satisfies `price <op> value`, in input order."""
    predicate = price_predicate(op, value)
    if predicate is None:
        return []
    return [record for record in records if predicate(record.price)]


def filter_by_category(records: Iterable[Record], category: str) -> List[Record]:
    """Exact, case-sensitive category match."""
    return [record for record in records if record.category == category]


def cheapest(records: Sequence[Record]) -> Optional[Record]:
    """Lowest-priced record; the earliest one wins a tie."""
    if not records:
        return None
    return min(records, key=lambda record: record.price)


__all__ = [
    "Operator",
    "SUPPORTED_OPERATORS",
    "price_predicate",
    "filter_by_price",
    "filter_by_category",
    "cheapest",
]
