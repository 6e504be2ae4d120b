"""Weather data sources and the factory that picks one at startup."""

from .base import CallableWeatherDataSource, WeatherDataSource
from .factory import build_data_source
from .openweather_client import Observation, fetch_city_weather, parse_observation

__all__ = [
    "build_data_source",
    "WeatherDataSource",
    "CallableWeatherDataSource",
    "Observation",
    "fetch_city_weather",
    "parse_observation",
]
