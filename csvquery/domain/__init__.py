"""
Domain package for csvquery.

Exports the core domain models shared by ingestion, the store and reporting.
"""

from csvquery.domain.models import Record

__all__ = [
    "Record",
]
