"""
Domain models for csvquery.

A Record is one parsed CSV row. Instances are frozen so the store can hand
out shallow list copies without callers being able to alter stored rows.
"""
from __future__ import annotations

from pydantic import BaseModel, Field


class Record(BaseModel):
    """
    A single product row: identifier, category and price.

    Serializes (``by_alias=True``) with the ``company_id``/``kind``/``price``
    keys used by the JSON output.
    """

    identifier: str = Field(
        ..., serialization_alias="company_id", description="External key; not required unique."
    )
    category: str = Field(
        ..., serialization_alias="kind", description="Free-form classification label."
    )
    price: float = Field(..., description="Numeric price.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


__all__ = ["Record"]
