"""Health check endpoints."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter
from pydantic import BaseModel, Field

from heroscan import __version__
from heroscan.extraction.options import PRESETS
from heroscan_api.config import get_settings

router = APIRouter(tags=["Health"])

# Track server start time for uptime calculation
_server_start_time = time.time()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Health status")
    timestamp: str = Field(..., description="ISO 8601 timestamp")
    version: str = Field(..., description="API version")
    uptime_seconds: int = Field(..., description="Server uptime in seconds")


class ApiInfoResponse(BaseModel):
    """API information response."""

    name: str
    version: str
    env: str
    presets: list[str]
    docs: str | None


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check endpoint. The service has no external dependencies."""
    uptime = int(time.time() - _server_start_time)
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC).isoformat(),
        version=__version__,
        uptime_seconds=uptime,
    )


@router.get("/", response_model=ApiInfoResponse)
async def root() -> ApiInfoResponse:
    """Root endpoint with API information."""
    settings = get_settings()
    return ApiInfoResponse(
        name="heroscan API",
        version=__version__,
        env=settings.env,
        presets=sorted(PRESETS),
        docs="/docs" if settings.debug else None,
    )
