"""Exceptions raised while refreshing city weather."""

from __future__ import annotations


class WeatherServiceError(Exception):
    """Base class for errors surfaced by the weather aggregation core."""


class FetchFailed(WeatherServiceError):
    """A single city's observation could not be fetched or parsed."""

    def __init__(self, city_id: str, cause: BaseException | str) -> None:
        self.city_id = city_id
        self.cause = cause
        super().__init__(f"Failed to fetch weather for city '{city_id}': {cause}")


class AggregationFailed(WeatherServiceError):
    """A refresh was aborted because at least one city fetch failed."""

    def __init__(self, first_cause: FetchFailed) -> None:
        self.first_cause = first_cause
        super().__init__(f"Weather refresh failed: {first_cause}")

    @property
    def city_id(self) -> str:
        return self.first_cause.city_id
