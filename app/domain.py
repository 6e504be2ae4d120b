"""Domain vocabulary and schemas for ranked city comfort results.

These models are the stable contract between the aggregation core and the
HTTP layer: the static city configuration, the scored/ranked city record and
the HIT/MISS cache indicator. No fetching or scoring logic lives here.
"""

from __future__ import annotations

from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class _FrozenModel(BaseModel):
    """Base model that is immutable once built."""

    model_config = ConfigDict(frozen=True)


class CacheSource(str, Enum):
    """Whether a result was served from cache or required a refresh."""
    HIT = "HIT"
    MISS = "MISS"


class CityConfig(_FrozenModel):
    """Static city entry: provider identifier plus a display name fallback."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    city_id: str = Field(validation_alias=AliasChoices("city_id", "CityCode", "id"), min_length=1)
    name: str = Field(default="", validation_alias=AliasChoices("name", "CityName"))

    @field_validator("city_id", mode="before")
    @classmethod
    def coerce_city_id(cls, v):
        """City codes are often stored as JSON numbers; keep them as strings."""
        if isinstance(v, bool):
            raise ValueError("city id must be a string or integer")
        if isinstance(v, int):
            return str(v)
        if isinstance(v, str):
            return v.strip()
        return v


class ScoredCity(_FrozenModel):
    """One city's observation with its comfort score and rank.

    Serializes with the camelCase keys consumed by the dashboard:
    ``city, temp, humidity, windSpeed, description, comfortScore, rank``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    city: str
    temp: int | float
    humidity: int | float
    wind_speed: int | float = Field(alias="windSpeed")
    description: str
    comfort_score: int = Field(ge=0, le=100, alias="comfortScore")
    rank: int = Field(ge=1)
    city_id: str | None = Field(default=None, exclude=True)

    def to_payload(self) -> dict:
        """Return the JSON-ready dict used in API responses."""
        return self.model_dump(by_alias=True)
