"""Extraction request schemas."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from heroscan.extraction.options import PRESETS


class HeroExtractRequest(BaseModel):
    """Schema for a hero extraction request."""

    html: str = Field(..., min_length=1, description="Raw HTML of the page")
    preset: str | None = Field(None, description="Named option preset")
    options: dict[str, Any] | None = Field(
        None, description="Option overrides, snake_case or camelCase keys"
    )

    @field_validator("preset")
    @classmethod
    def known_preset(cls, v: str | None) -> str | None:
        if v is not None and v not in PRESETS:
            raise ValueError(f"preset must be one of: {', '.join(sorted(PRESETS))}")
        return v


class DimensionExtractRequest(BaseModel):
    """Schema for a content dimension request."""

    html: str = Field("", description="Raw HTML, needed by content_selector and metadata")
    path: str = Field("", description="Page path or URL for url_pattern and {absoluteurl}")
    dimensions: dict[str, dict[str, Any] | None] = Field(default_factory=dict)
    head: dict[str, str] | None = Field(
        None, description="Already extracted head metadata; read from html when omitted"
    )


class ContentMapRequest(HeroExtractRequest):
    """Schema for hero, head metadata and dimensions in one pass."""

    path: str = ""
    dimensions: dict[str, dict[str, Any] | None] = Field(default_factory=dict)
