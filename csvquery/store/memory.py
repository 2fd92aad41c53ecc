"""
In-memory tabular store.

The store is the only shared mutable object in csvquery: ingestion workers
append to it concurrently while queries read from it. Every read returns a new
list, so a caller iterating a result never sees rows appended afterwards and
cannot reach the internal list.
"""

from __future__ import annotations

from typing import List

from csvquery import query
from csvquery.domain.models import Record
from csvquery.store.rwlock import ReadWriteLock


class TabularStore:
    """
    Append-only, thread-safe collection of Records.

    `add` takes the lock exclusively; `all`, `filter_by_price` and `len()`
    share it. Records are frozen, so shallow copies are independent snapshots.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._records: List[Record] = []

    def add(self, record: Record) -> None:
        """Append one record. No validation beyond what ingestion already did."""
        with self._lock.write_locked():
            self._records.append(record)

    def all(self) -> List[Record]:
        """Snapshot of every stored record, in insertion order."""
        with self._lock.read_locked():
            return list(self._records)

    def filter_by_price(self, op: str, value: float) -> List[Record]:
        """
        Snapshot of the records satisfying `price <op> value`.

        `op` is one of "<", "=", ">"; anything else matches nothing.
        Equality is exact float comparison.
        """
        with self._lock.read_locked():
            return query.filter_by_price(self._records, op, value)

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._records)

    def __repr__(self) -> str:
        return f"TabularStore(records={len(self)})"


__all__ = ["TabularStore"]
