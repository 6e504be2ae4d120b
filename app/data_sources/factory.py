"""Factory helpers for choosing the weather data source at startup."""

from __future__ import annotations

from app import config
from app.data_sources.base import CallableWeatherDataSource, WeatherDataSource
from app.data_sources.openweather_client import fetch_city_weather
from utils.logging_utils import get_tagged_logger, mask_url_secrets

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "openweathermap"


def build_data_source(settings: config.Settings | None = None) -> WeatherDataSource:
    """Instantiate the configured weather data source."""
    settings = settings or config.settings
    source = (settings.data_source or DEFAULT_SOURCE_NAME).lower()

    if source == "openweathermap":
        if not settings.openweather_api_key:
            logger.warning("No OpenWeatherMap API key configured; upstream calls will likely be rejected")
        logger.info(
            "Using OpenWeatherMap data source",
            extra={"base_url": mask_url_secrets(settings.openweather_base_url),
                   "timeout": settings.fetch_timeout_seconds},
        )
        return CallableWeatherDataSource(
            fetch=fetch_city_weather,
            options={
                "api_key": settings.openweather_api_key,
                "base_url": settings.openweather_base_url,
                "timeout": settings.fetch_timeout_seconds,
            },
        )

    raise ValueError(f"Unknown weather data source '{source}'")
