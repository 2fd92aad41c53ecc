"""
Profiling utilities for csvquery.

Measures wall-clock time, peak RSS and CPU usage of a block of code. The CLI
wraps the load phase with it so the ingestion summary can report throughput.

Usage:
    from csvquery.utils.profiler import profile_block

    with profile_block("load") as stats:
        ingest_directory(root, store)

    print(stats.duration_seconds, stats.peak_rss_bytes)
"""

from __future__ import annotations

import contextlib
import threading
import time
from dataclasses import dataclass, field
from typing import Generator, Optional

import psutil


@dataclass
class ProfileStats:
    """
    Container for profiling measurements.
    """

    label: str
    duration_seconds: float = field(default=0.0)
    peak_rss_bytes: Optional[int] = field(default=None)
    cpu_percent: Optional[float] = field(default=None)

    def rate(self, count: int) -> float:
        """Items per second over the measured duration (0.0 when nothing was timed)."""
        return count / self.duration_seconds if self.duration_seconds > 0 else 0.0


@contextlib.contextmanager
def profile_block(label: str, sample_interval_ms: int = 50) -> Generator[ProfileStats, None, None]:
    """
    Context manager to profile a block of code.

    Parameters
    ----------
    label : str
        Human-friendly label for the profiled block.
    sample_interval_ms : int
        Interval in milliseconds for RSS sampling.

    Notes
    -----
    RSS is sampled on a background thread so short allocation bursts during
    parsing show up in the peak, not just the start/end values.
    """
    stats = ProfileStats(label=label)
    process = psutil.Process()
    peak_rss = process.memory_info().rss
    stop_sampling = threading.Event()

    def _sample_memory() -> None:
        nonlocal peak_rss
        while not stop_sampling.is_set():
            try:
                peak_rss = max(peak_rss, process.memory_info().rss)
            except psutil.Error:
                return
            stop_sampling.wait(timeout=sample_interval_ms / 1000.0)

    # CPU percent needs a priming call
    process.cpu_percent(interval=None)

    sampler = threading.Thread(target=_sample_memory, daemon=True, name=f"profile-{label}")
    sampler.start()

    start = time.perf_counter()
    try:
        yield stats
    finally:
        stats.duration_seconds = time.perf_counter() - start

        stop_sampling.set()
        sampler.join(timeout=1.0)

        stats.peak_rss_bytes = peak_rss if peak_rss > 0 else None
        stats.cpu_percent = process.cpu_percent(interval=None)


__all__ = ["ProfileStats", "profile_block"]
