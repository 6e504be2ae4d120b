"""FastAPI application setup for the city comfort ranker."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import router as api_router
from .config import settings
from .weather_service import get_service


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Build the service eagerly so a bad city list or data source fails at boot.
    get_service()
    yield


app = FastAPI(title="City Comfort Ranker", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    """Liveness probe; never touches the upstream provider."""
    return {"status": "ok"}


# API routes
app.include_router(api_router, prefix="/api")
