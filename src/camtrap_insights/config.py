"""
Application settings.

Values can be overridden with ``CAMTRAP_``-prefixed environment variables,
e.g. ``CAMTRAP_LOG_LEVEL=DEBUG`` or ``CAMTRAP_MAP_ZOOM=12``.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for analysis and map rendering."""

    model_config = SettingsConfigDict(env_prefix="CAMTRAP_", extra="ignore")

    app_name: str = "camtrap-insights"
    debug: bool = False
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Leaflet base layer
    map_tiles_url: str = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
    map_attribution: str = "&copy; OpenStreetMap contributors"
    map_zoom: int = Field(default=10, ge=0, le=20)

    # Feature encoding on the deployment map
    palette_low: str = "#ffffff"
    palette_high: str = "#0000ff"
    na_color: str = "#808080"
    legend_bins: int = Field(default=6, ge=2)
    radius_min: float = Field(default=10.0, ge=0)
    radius_max: float = Field(default=50.0, ge=0)


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging from settings.

    Library code only creates module loggers; call this from scripts or
    notebooks that want the package's log messages printed.
    """
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format=settings.log_format)
