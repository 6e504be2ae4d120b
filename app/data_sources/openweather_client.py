"""Helpers for fetching current city weather from the OpenWeatherMap API."""
from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Any, Mapping

import requests

from app.domain import CityConfig
from app.errors import FetchFailed
from utils.logging_utils import get_tagged_logger, mask_url_secrets

logger = get_tagged_logger(__name__, tag="openweather_client")

OPENWEATHER_CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_TIMEOUT_SECONDS = 10.0

# No retries or response caching at this layer.
session = requests.Session()


@dataclass
class Observation:
    """Normalized current-weather reading for one city (metric units)."""
    city_id: str
    city: str
    temperature: int | float  # °C
    humidity: int | float  # %
    wind_speed: int | float  # m/s
    description: str


def _require_number(data: Mapping[str, Any], section: str, field: str) -> int | float:
    """Return data[section][field] unchanged, raising on missing/non-numeric values."""
    block = data.get(section)
    if not isinstance(block, Mapping):
        raise ValueError(f"missing '{section}' object")
    value = block.get(field)
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValueError(f"'{section}.{field}' must be a number, got {value!r}")
    return value


def parse_observation(city: CityConfig, data: Any) -> Observation:
    """Turn an OpenWeatherMap current-weather document into an Observation.

    Raises ValueError when any of the fields we rely on is missing or malformed.
    """
    if not isinstance(data, Mapping):
        raise ValueError("response body is not a JSON object")

    temperature = _require_number(data, "main", "temp")
    humidity = _require_number(data, "main", "humidity")
    wind_speed = _require_number(data, "wind", "speed")
    if wind_speed < 0:
        raise ValueError(f"'wind.speed' must not be negative, got {wind_speed}")

    weather = data.get("weather")
    if not isinstance(weather, list) or not weather or not isinstance(weather[0], Mapping):
        raise ValueError("missing 'weather[0]' entry")
    description = weather[0].get("description")
    if not isinstance(description, str):
        raise ValueError("'weather[0].description' must be a string")

    name = data.get("name")
    if name is not None and not isinstance(name, str):
        raise ValueError("'name' must be a string")

    return Observation(
        city_id=city.city_id,
        city=name or city.name or city.city_id,
        temperature=temperature,
        humidity=humidity,
        wind_speed=wind_speed,
        description=description,
    )


def fetch_city_weather(
    city: CityConfig,
    *,
    api_key: str | None = None,
    base_url: str = OPENWEATHER_CURRENT_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    units: str = "metric",
) -> Observation:
    """Fetch the current observation for one city, in one request.

    Any network error, timeout, non-2xx status or unusable body raises
    FetchFailed carrying the city id and the underlying cause.
    """
    params = {"id": city.city_id, "units": units}
    if api_key:
        params["appid"] = api_key

    try:
        resp = session.get(base_url, params=params, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as exc:
        logger.warning(
            "OpenWeatherMap request failed",
            extra={
                "city_id": city.city_id,
                "url": mask_url_secrets(getattr(exc.request, "url", None) or base_url),
                "error": str(exc),
            },
        )
        raise FetchFailed(city.city_id, exc) from exc
    except ValueError as exc:
        raise FetchFailed(city.city_id, f"invalid JSON body: {exc}") from exc

    try:
        observation = parse_observation(city, data)
    except ValueError as exc:
        logger.warning("Malformed OpenWeatherMap payload", extra={"city_id": city.city_id, "error": str(exc)})
        raise FetchFailed(city.city_id, exc) from exc

    logger.debug(
        "Fetched observation",
        extra={"city_id": city.city_id, "city": observation.city, "temp": observation.temperature},
    )
    return observation
