"""Fetch every configured city, score it, and rank the results."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import List, Sequence

from app.comfort import comfort_score
from app.data_sources.base import WeatherDataSource
from app.data_sources.openweather_client import Observation
from app.domain import CityConfig, ScoredCity
from app.errors import AggregationFailed, FetchFailed
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="aggregator")

DEFAULT_MAX_WORKERS = 8


def rank_observations(observations: Sequence[Observation]) -> List[ScoredCity]:
    """Score observations and rank them, best first.

    Python's sort is stable, so cities with equal scores keep their input order.
    Ranks are 1..N in list order.
    """
    scored = [(obs, comfort_score(obs.temperature, obs.humidity, obs.wind_speed)) for obs in observations]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return [
        ScoredCity(
            city=obs.city,
            temp=obs.temperature,
            humidity=obs.humidity,
            wind_speed=obs.wind_speed,
            description=obs.description,
            comfort_score=score,
            rank=idx,
            city_id=obs.city_id,
        )
        for idx, (obs, score) in enumerate(scored, start=1)
    ]


class Aggregator:
    """Runs one refresh: concurrent per-city fetches, then all-or-nothing ranking."""

    def __init__(self, data_source: WeatherDataSource, max_workers: int = DEFAULT_MAX_WORKERS) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.data_source = data_source
        self.max_workers = max_workers

    def _fetch_one(self, city: CityConfig) -> Observation:
        try:
            return self.data_source.fetch_city_weather(city)
        except FetchFailed:
            raise
        except Exception as exc:
            raise FetchFailed(city.city_id, exc) from exc

    def fetch_all(self, cities: Sequence[CityConfig]) -> List[Observation]:
        """Fetch every city concurrently and wait for all outcomes.

        Raises AggregationFailed wrapping the failure of the earliest failing
        city in input order; no observations are returned in that case.
        """
        if not cities:
            return []

        workers = min(len(cities), self.max_workers)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="city-fetch") as pool:
            futures: List[Future] = [pool.submit(self._fetch_one, city) for city in cities]
            wait(futures)

        failures = [fut.exception() for fut in futures if fut.exception() is not None]
        if failures:
            first = failures[0]
            logger.error(
                "Refresh aborted; city fetch failed",
                extra={"failed": len(failures), "total": len(cities), "city_id": first.city_id},
            )
            raise AggregationFailed(first) from first

        return [fut.result() for fut in futures]

    def refresh(self, cities: Sequence[CityConfig]) -> List[ScoredCity]:
        """Fetch, score and rank all cities; raises AggregationFailed on any failure."""
        observations = self.fetch_all(cities)
        ranked = rank_observations(observations)
        logger.info(
            "Refreshed city rankings",
            extra={"cities": len(ranked), "top": ranked[0].city if ranked else None},
        )
        return ranked
