"""Library configuration via environment variables."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "yamgo"

    # Timeouts (seconds)
    short_timeout: float = Field(default=5.0, gt=0)  # single-document lookups
    long_timeout: float = Field(default=30.0, gt=0)  # scans, counts, aggregations

    # Pagination
    default_page_limit: int = Field(default=50, ge=1)

    # App
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="YAMGO_", env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings instance (created on first call)."""
    return Settings()


def reset_settings() -> None:
    """Clear the cached settings so they are re-read on next use."""
    get_settings.cache_clear()
