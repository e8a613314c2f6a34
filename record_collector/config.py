"""
Configuration settings for the Record Collector.

Uses Pydantic Settings to load environment variables for the pool size, the
item count, the synthetic data source, and logging.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Collection defaults
    collector_items: int = Field(50, ge=0, alias="COLLECTOR_ITEMS")
    collector_workers: int = Field(5, ge=1, alias="COLLECTOR_WORKERS")
    collector_pool: str = Field("threaded", alias="COLLECTOR_POOL")
    collector_sample_size: int = Field(5, ge=0, alias="COLLECTOR_SAMPLE_SIZE")

    # Synthetic source
    collector_seed: Optional[int] = Field(None, alias="COLLECTOR_SEED")
    collector_corruption_rate: float = Field(0.05, ge=0.0, le=1.0, alias="COLLECTOR_CORRUPTION_RATE")
    collector_latency_min_ms: int = Field(50, ge=0, alias="COLLECTOR_LATENCY_MIN_MS")
    collector_latency_max_ms: int = Field(150, ge=0, alias="COLLECTOR_LATENCY_MAX_MS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _check_latency_bounds(self) -> "Settings":
        if self.collector_latency_max_ms < self.collector_latency_min_ms:
            raise ValueError("COLLECTOR_LATENCY_MAX_MS must be >= COLLECTOR_LATENCY_MIN_MS")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
