"""Pydantic schemas for API request/response validation."""

from heroscan_api.schemas.extract import (
    ContentMapRequest,
    DimensionExtractRequest,
    HeroExtractRequest,
)
from heroscan_api.schemas.responses import (
    ErrorDetail,
    ErrorResponse,
    SuccessResponse,
)

__all__ = [
    # Extraction
    "HeroExtractRequest",
    "DimensionExtractRequest",
    "ContentMapRequest",
    # Responses
    "ErrorDetail",
    "ErrorResponse",
    "SuccessResponse",
]
