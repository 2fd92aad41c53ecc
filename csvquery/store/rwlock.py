"""
Readers-writer lock built on threading.Condition.

Any number of readers may hold the lock together; a writer holds it alone.
Waiting writers block new readers, so a busy query loop cannot starve
ingestion.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Generator


class ReadWriteLock:
    """Writer-preferring shared/exclusive lock. Not reentrant."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer_active or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a matching acquire_read()")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer_active or self._readers:
                    self._cond.wait()
            except BaseException:
                self._writers_waiting -= 1
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer_active = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer_active:
                raise RuntimeError("release_write() called without a matching acquire_write()")
            self._writer_active = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Generator[None, None, None]:
        """Hold the lock in shared mode for the duration of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Generator[None, None, None]:
        """Hold the lock in exclusive mode for the duration of the block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


__all__ = ["ReadWriteLock"]
