import os

import uvicorn

from app.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


def check_api_key() -> None:
    """Warn early when no OpenWeatherMap key is configured."""
    if not settings.openweather_api_key:
        logger.warning(
            "OPENWEATHER_API_KEY is not set; /api/weather will fail until a key is configured."
        )


if __name__ == "__main__":
    setup_logging(level=settings.log_level, service_name="comfort_ranker")
    check_api_key()

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 5001)),
        reload=False,
    )
