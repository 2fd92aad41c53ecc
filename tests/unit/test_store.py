from __future__ import annotations

import random
import threading
from typing import List

import pytest

from csvquery.domain.models import Record
from csvquery.store import TabularStore

WORKER_COUNT = 8
RECORDS_PER_WORKER = 250


def _record(identifier: str, price: float, category: str = "lamp") -> Record:
    return Record(identifier=identifier, category=category, price=price)


def _ids(records: List[Record]) -> List[str]:
    return [record.identifier for record in records]


def test_new_store_is_empty(store: TabularStore) -> None:
    assert store.all() == []
    assert len(store) == 0
    assert store.filter_by_price(">", 0.0) == []


def test_add_preserves_insertion_order(store: TabularStore) -> None:
    for index, price in enumerate([5.0, 1.0, 3.0]):
        store.add(_record(f"R{index}", price))

    assert _ids(store.all()) == ["R0", "R1", "R2"]
    assert len(store) == 3


def test_store_accepts_duplicate_identifiers(store: TabularStore) -> None:
    store.add(_record("A1", 1.0))
    store.add(_record("A1", 1.0))

    assert len(store.all()) == 2


def test_all_returns_independent_snapshot(store: TabularStore) -> None:
    store.add(_record("A1", 1.0))
    snapshot = store.all()

    store.add(_record("A2", 2.0))
    assert _ids(snapshot) == ["A1"]

    snapshot.clear()
    snapshot.append(_record("X", 9.0))
    assert _ids(store.all()) == ["A1", "A2"]


def test_filter_result_is_independent_of_store(store: TabularStore) -> None:
    store.add(_record("A1", 10.0))
    matches = store.filter_by_price(">", 5.0)

    matches.pop()
    store.add(_record("A2", 20.0))

    assert matches == []
    assert _ids(store.filter_by_price(">", 5.0)) == ["A1", "A2"]


@pytest.mark.parametrize(
    ("op", "value", "expected"),
    [
        ("<", 20.0, ["A1"]),
        (">", 20.0, ["A2"]),
        ("=", 19.99, ["A1"]),
        ("=", 20.0, []),
        ("<", 19.99, []),
        (">", 49.0, []),
    ],
)
def test_filter_by_price(store: TabularStore, op: str, value: float, expected: List[str]) -> None:
    store.add(_record("A1", 19.99))
    store.add(_record("A2", 49.0, category="chair"))

    assert _ids(store.filter_by_price(op, value)) == expected


@pytest.mark.parametrize("op", ["<=", ">=", "==", "!=", "", "lt"])
def test_unknown_operator_matches_nothing(store: TabularStore, op: str) -> None:
    store.add(_record("A1", 19.99))

    assert store.filter_by_price(op, 1.0) == []


def test_equality_is_exact(store: TabularStore) -> None:
    store.add(_record("A1", 0.1 + 0.2))

    assert store.filter_by_price("=", 0.3) == []
    assert len(store.filter_by_price("=", 0.1 + 0.2)) == 1


def test_operators_partition_the_store(store: TabularStore) -> None:
    rng = random.Random(7)
    prices = [round(rng.uniform(0, 100), 2) for _ in range(200)] + [50.0, 50.0]
    for index, price in enumerate(prices):
        store.add(_record(f"R{index}", price))

    less = store.filter_by_price("<", 50.0)
    equal = store.filter_by_price("=", 50.0)
    greater = store.filter_by_price(">", 50.0)

    ids = [set(_ids(group)) for group in (less, equal, greater)]
    assert ids[0].isdisjoint(ids[1])
    assert ids[0].isdisjoint(ids[2])
    assert ids[1].isdisjoint(ids[2])
    assert ids[0] | ids[1] | ids[2] == set(_ids(store.all()))
    assert len(less) + len(equal) + len(greater) == len(prices)


def test_concurrent_adds_lose_nothing(store: TabularStore) -> None:
    barrier = threading.Barrier(WORKER_COUNT)

    def worker(worker_id: int) -> None:
        barrier.wait()
        for index in range(RECORDS_PER_WORKER):
            store.add(_record(f"w{worker_id}-{index}", float(index)))

    threads = [threading.Thread(target=worker, args=(w,)) for w in range(WORKER_COUNT)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    records = store.all()
    assert len(records) == WORKER_COUNT * RECORDS_PER_WORKER
    assert len(set(_ids(records))) == len(records)

    for worker_id in range(WORKER_COUNT):
        own = [r.identifier for r in records if r.identifier.startswith(f"w{worker_id}-")]
        assert own == [f"w{worker_id}-{index}" for index in range(RECORDS_PER_WORKER)]


def test_snapshots_taken_during_writes_are_consistent(store: TabularStore) -> None:
    done = threading.Event()
    errors: List[str] = []

    def writer() -> None:
        for index in range(2_000):
            store.add(_record(f"R{index}", float(index)))
        done.set()

    def reader() -> None:
        previous = 0
        while not done.is_set():
            snapshot = store.all()
            if len(snapshot) < previous:
                errors.append("snapshot shrank")
            if _ids(snapshot) != [f"R{index}" for index in range(len(snapshot))]:
                errors.append("snapshot is not a prefix of the insertion order")
            previous = len(snapshot)

    threads = [threading.Thread(target=writer)] + [
        threading.Thread(target=reader) for _ in range(3)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(store) == 2_000
