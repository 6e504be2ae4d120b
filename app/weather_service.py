"""Query facade: serve ranked cities from cache, refreshing on expiry."""

from __future__ import annotations

import threading
from typing import Optional, Sequence

from app.aggregator import Aggregator
from app.app_types import WeatherResult
from app.cache_store import CacheStore
from app import config
from app.data_sources import build_data_source
from app.domain import CacheSource, CityConfig
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="weather_service")


class WeatherService:
    """Single entry point for ranked weather and cache status.

    With `single_flight` on, at most one refresh runs at a time; callers that
    queued behind it re-check the cache and get the fresh result as a HIT.
    With it off, concurrent misses each refresh and the last write wins.
    """

    def __init__(
        self,
        aggregator: Aggregator,
        cities: Sequence[CityConfig],
        cache: CacheStore,
        *,
        single_flight: bool = True,
    ) -> None:
        self.aggregator = aggregator
        self.cities = tuple(cities)
        self.cache = cache
        self.single_flight = single_flight
        self._refresh_lock = threading.Lock()

    def _cached_result(self) -> Optional[WeatherResult]:
        """Return the cached result as a HIT when fresh, else None."""
        data = self.cache.fresh_data()
        if data is not None:
            return WeatherResult(source=CacheSource.HIT, data=data)
        return None

    def _refresh(self) -> WeatherResult:
        ranked = self.aggregator.refresh(self.cities)
        entry = self.cache.write(ranked)
        return WeatherResult(source=CacheSource.MISS, data=entry.data)

    def get_weather(self) -> WeatherResult:
        """Return ranked cities; raises AggregationFailed if a needed refresh fails."""
        cached = self._cached_result()
        if cached is not None:
            logger.debug("Serving ranked cities from cache")
            return cached

        if not self.single_flight:
            logger.info("Cache miss; refreshing city weather")
            return self._refresh()

        with self._refresh_lock:
            # another caller may have refreshed while we waited
            cached = self._cached_result()
            if cached is not None:
                logger.debug("Refresh completed by a concurrent caller; serving cache")
                return cached
            logger.info("Cache miss; refreshing city weather")
            return self._refresh()

    def get_cache_status(self) -> CacheSource:
        """HIT or MISS for the cache right now; never refreshes."""
        return self.cache.status()


def build_service(settings: config.Settings | None = None) -> WeatherService:
    """Wire a WeatherService from settings: city list, data source and cache."""
    settings = settings or config.settings
    cities = config.load_cities(settings.cities_file)
    aggregator = Aggregator(build_data_source(settings), max_workers=settings.max_fetch_workers)
    cache = CacheStore(ttl_seconds=settings.cache_ttl_seconds)
    logger.info(
        "Weather service ready",
        extra={"cities": len(cities), "ttl_seconds": settings.cache_ttl_seconds,
               "single_flight": settings.single_flight},
    )
    return WeatherService(aggregator, cities, cache, single_flight=settings.single_flight)


_service: Optional[WeatherService] = None
_service_lock = threading.Lock()


def get_service() -> WeatherService:
    """Return the process-wide service, building it on first use."""
    global _service
    with _service_lock:
        if _service is None:
            _service = build_service()
        return _service


def use_service_for_tests(service: Optional[WeatherService]) -> None:
    """Override (or reset, with None) the process-wide service."""
    global _service
    with _service_lock:
        _service = service


def get_weather() -> WeatherResult:
    """Ranked cities from the process-wide service."""
    return get_service().get_weather()


def get_cache_status() -> CacheSource:
    """Cache status from the process-wide service."""
    return get_service().get_cache_status()
