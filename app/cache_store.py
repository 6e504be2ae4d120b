"""Process-local, single-entry cache for the ranked city list."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, Optional, Tuple

from app.app_types import CacheEntry
from app.domain import CacheSource, ScoredCity
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="cache_store")

DEFAULT_TTL_SECONDS = 300.0


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class CacheStore:
    """Thread-safe holder of the latest ranked result and its fetch time.

    The entry is an immutable CacheEntry replaced wholesale on write, so
    readers always see either the previous result or the new one. Stale
    entries are kept; they just stop counting as fresh.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS,
                 clock: Callable[[], datetime] = utc_now) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._entry = CacheEntry()
        self._lock = threading.Lock()

    def now(self) -> datetime:
        """Current time according to the store's clock."""
        return self._clock()

    def read(self) -> CacheEntry:
        """Return the current entry (possibly empty)."""
        with self._lock:
            return self._entry

    def _entry_is_fresh(self, entry: CacheEntry, now: Optional[datetime]) -> bool:
        if entry.fetched_at is None:
            return False
        now = now or self._clock()
        return (now - entry.fetched_at) < self.ttl

    def is_fresh(self, now: Optional[datetime] = None) -> bool:
        """True when an entry exists and is younger than the TTL."""
        return self._entry_is_fresh(self.read(), now)

    def fresh_data(self, now: Optional[datetime] = None) -> Optional[Tuple[ScoredCity, ...]]:
        """Cached data if fresh, else None; judged on a single read of the entry."""
        entry = self.read()
        return entry.data if self._entry_is_fresh(entry, now) else None

    def status(self, now: Optional[datetime] = None) -> CacheSource:
        """HIT if the entry is fresh, MISS otherwise."""
        return CacheSource.HIT if self.fresh_data(now) is not None else CacheSource.MISS

    def write(self, data: Iterable[ScoredCity], now: Optional[datetime] = None) -> CacheEntry:
        """Replace the entry with `data` stamped at `now`."""
        entry = CacheEntry(data=tuple(data), fetched_at=now or self._clock())
        with self._lock:
            self._entry = entry
        logger.debug("Cache entry replaced", extra={"cities": len(entry.data), "fetched_at": entry.fetched_at})
        return entry
