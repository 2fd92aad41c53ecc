"""
Utilities package for csvquery.

Exports shared helpers for logging and profiling. Keep this package free of
domain-specific logic.
"""

from csvquery.utils.logging import configure_logging, get_logger
from csvquery.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
