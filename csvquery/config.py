"""
Configuration settings for csvquery.

Uses Pydantic Settings to load environment variables for logging, ingestion
concurrency, and the header names of the required CSV columns.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Ingestion
    ingest_workers: int = Field(4, ge=1, alias="INGEST_WORKERS")
    csv_suffix: str = Field(".csv", alias="INGEST_CSV_SUFFIX")
    id_column: str = Field("companyid", alias="INGEST_ID_COLUMN")
    category_column: str = Field("kind", alias="INGEST_CATEGORY_COLUMN")
    price_column: str = Field("price", alias="INGEST_PRICE_COLUMN")
    currency_symbols: str = Field("$", alias="INGEST_CURRENCY_SYMBOLS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
