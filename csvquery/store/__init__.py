"""
Store package for csvquery.

Holds the in-memory tabular store and the lock that guards it.
"""

from csvquery.store.memory import TabularStore
from csvquery.store.rwlock import ReadWriteLock

__all__ = [
    "TabularStore",
    "ReadWriteLock",
]
