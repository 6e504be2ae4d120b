"""Application configuration pulled from environment variables via pydantic."""
import json
from pathlib import Path
from typing import Tuple

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.domain import CityConfig
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="config")

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CITIES_FILE = _PROJECT_ROOT / "data" / "cities.json"


class Settings(BaseSettings):
    """Environment-driven configuration for the comfort ranker service."""
    model_config = SettingsConfigDict(
        env_prefix="COMFORT_", env_file=".env", extra="ignore", populate_by_name=True
    )

    data_source: str = "openweathermap"
    openweather_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("COMFORT_OPENWEATHER_API_KEY", "OPENWEATHER_API_KEY"),
    )
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5/weather"
    fetch_timeout_seconds: float = Field(default=10.0, gt=0)
    cache_ttl_seconds: float = Field(default=300.0, gt=0)
    max_fetch_workers: int = Field(default=8, ge=1)
    single_flight: bool = True
    cities_file: Path = DEFAULT_CITIES_FILE
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @field_validator("openweather_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")


def load_cities(path: Path | str) -> Tuple[CityConfig, ...]:
    """Read the ordered city list from a JSON array file.

    Each entry needs a provider id (``CityCode`` or ``id``) and may carry a
    display name (``CityName`` or ``name``). Order in the file is the order
    used for tie-breaking when ranking.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Unable to read cities file '{path}': {exc}") from exc

    if isinstance(raw, dict) and "List" in raw:
        raw = raw["List"]
    if not isinstance(raw, list):
        raise ValueError(f"Cities file '{path}' must contain a JSON array")

    cities = []
    for idx, entry in enumerate(raw):
        try:
            cities.append(CityConfig.model_validate(entry))
        except ValidationError as exc:
            raise ValueError(f"Invalid city entry #{idx} in '{path}': {exc}") from exc

    logger.info("Loaded city list", extra={"path": str(path), "count": len(cities)})
    return tuple(cities)


settings = Settings()


if __name__ == "__main__":
    logger.logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4, exclude={'openweather_api_key'})}")
