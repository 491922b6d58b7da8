"""Lightweight configuration for the Undersea tools."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process settings, read from ``UNDERSEA_*`` variables or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="UNDERSEA_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    data_dir: Path = Field(default=Path("campaigns"), description="Where campaign snapshots live")
    log_level: str = Field(default="INFO", description="Root logging level for the CLI")
    default_seed: str | None = Field(
        default=None,
        description="Fixed dice seed; when unset each day is seeded from the campaign clock",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    settings = Settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
