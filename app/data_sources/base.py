"""Interfaces and helpers for city weather data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from app.data_sources.openweather_client import Observation
from app.domain import CityConfig


class WeatherDataSource(Protocol):
    """Interface for anything that can provide a city's current observation."""

    def fetch_city_weather(self, city: CityConfig) -> Observation:
        """Return the current observation, raising FetchFailed on any failure."""
        ...


@dataclass
class CallableWeatherDataSource(WeatherDataSource):
    """Wrap a fetch callable plus its fixed keyword arguments (key, URL, timeout)."""

    fetch: Callable[..., Observation]
    options: dict

    def fetch_city_weather(self, city: CityConfig) -> Observation:
        """Delegate to the configured fetch callable."""
        return self.fetch(city, **self.options)
