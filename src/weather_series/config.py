"""
Application settings.

Values come from environment variables prefixed with ``WEATHER_SERIES_``
(or a local ``.env`` file), e.g. ``WEATHER_SERIES_DEBUG=true``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the CLI, flows and forecast client."""

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_SERIES_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "weather-series"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    data_dir: Path = Path("data")
    site_dir: Path = Path("site")
    api_port: int = 8000

    api_url: str = "https://api.open-meteo.com/v1/forecast"
    # "Today" is computed here, not in the viewer's zone
    reference_timezone: str = "Asia/Tokyo"

    request_timeout: float = Field(default=10.0, gt=0)
    load_timeout: float = Field(default=12.0, gt=0)
    cache_ttl_minutes: int = Field(default=5, ge=0)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
