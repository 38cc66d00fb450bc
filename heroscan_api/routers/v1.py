"""V1 API router - aggregates all versioned endpoints."""

from fastapi import APIRouter

from heroscan_api.routers import extract

router = APIRouter()

# Extraction endpoints
router.include_router(extract.router)


@router.get("/")
async def v1_root() -> dict[str, str]:
    """V1 API root endpoint."""
    return {
        "version": "1",
        "status": "active",
    }
