"""HTTP API for ranked city comfort scores."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app import weather_service
from app.domain import CacheSource, ScoredCity
from app.errors import AggregationFailed
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/api")

router = APIRouter()


class WeatherResponse(BaseModel):
    """Ranked cities, best first, and whether they came from cache."""
    source: CacheSource
    data: list[ScoredCity]


class CacheStatusResponse(BaseModel):
    """Current cache state."""
    status: CacheSource


class ErrorResponse(BaseModel):
    """Error body returned when a refresh fails."""
    error: str


@router.get(
    "/weather",
    response_model=WeatherResponse,
    responses={500: {"model": ErrorResponse}},
)
def get_weather():
    """Return cities ranked by comfort score, refreshing the cache if it expired."""
    try:
        result = weather_service.get_weather()
    except AggregationFailed as exc:
        logger.error("Weather refresh failed", extra={"city_id": exc.city_id, "error": str(exc)})
        return JSONResponse(status_code=500, content={"error": str(exc)})
    logger.info("Served ranked cities", extra={"source": result.source.value, "cities": len(result.data)})
    return result.to_payload()


@router.get("/cache-status", response_model=CacheStatusResponse)
def get_cache_status():
    """Report HIT if the cached ranking is still fresh, MISS otherwise."""
    return CacheStatusResponse(status=weather_service.get_cache_status())
