"""Shared dataclasses and lightweight types used across modules."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from app.domain import CacheSource, ScoredCity


@dataclass(frozen=True)
class CacheEntry:
    """Ranked result with the time it was fetched; both absent when empty."""
    data: Optional[Tuple[ScoredCity, ...]] = None
    fetched_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if (self.data is None) != (self.fetched_at is None):
            raise ValueError("CacheEntry data and fetched_at must be set together")

    @property
    def is_empty(self) -> bool:
        return self.fetched_at is None


@dataclass(frozen=True)
class WeatherResult:
    """Ranked cities plus whether they came from cache."""
    source: CacheSource
    data: Tuple[ScoredCity, ...]

    def to_payload(self) -> dict:
        """JSON shape served by GET /weather."""
        return {"source": self.source.value, "data": [city.to_payload() for city in self.data]}
