"""Extraction endpoints."""

from functools import partial
from typing import Any

import structlog
from fastapi import APIRouter

from heroscan.dimensions.extractor import DimensionExtractor
from heroscan.exceptions import DocumentTooLargeError, InvalidOptionsError
from heroscan.extraction.hero import HeroExtractor
from heroscan.extraction.markup import MarkupTree, parse_html
from heroscan.extraction.metadata import extract_head_metadata
from heroscan.extraction.options import HeroExtractionOptions
from heroscan_api.config import Settings, get_settings
from heroscan_api.schemas.extract import (
    ContentMapRequest,
    DimensionExtractRequest,
    HeroExtractRequest,
)
from heroscan_api.schemas.responses import SuccessResponse

router = APIRouter(prefix="/extract", tags=["Extraction"])
logger = structlog.get_logger(__name__)


def _check_size(html: str, settings: Settings) -> None:
    size = len(html.encode("utf-8"))
    structlog.contextvars.bind_contextvars(html_bytes=size, html_parser=settings.html_parser)
    if size > settings.max_html_bytes:
        raise DocumentTooLargeError(size, settings.max_html_bytes)


def _parse(html: str, settings: Settings) -> MarkupTree:
    _check_size(html, settings)
    return parse_html(html, features=settings.html_parser)


def _resolve_options(
    preset: str | None, overrides: dict[str, Any] | None, settings: Settings
) -> HeroExtractionOptions:
    preset = preset or settings.default_preset
    structlog.contextvars.bind_contextvars(preset=preset)
    base = HeroExtractionOptions.preset(preset)
    try:
        return base.with_overrides(overrides)
    except (TypeError, ValueError) as e:
        raise InvalidOptionsError(str(e)) from e


@router.post("/hero", response_model=SuccessResponse[dict[str, Any]])
def extract_hero_content(request: HeroExtractRequest) -> SuccessResponse[dict[str, Any]]:
    """
    Extract hero content from a page.

    A page without a visible primary heading is not an HTTP error; the
    result carries ``success: false`` and the error kind.
    """
    settings = get_settings()
    options = _resolve_options(request.preset, request.options, settings)
    _check_size(request.html, settings)

    extractor = HeroExtractor(
        parser=partial(parse_html, features=settings.html_parser), options=options
    )
    result = extractor.extract_html(request.html)
    return SuccessResponse(
        data=result.to_dict(),
        meta={"preset": request.preset or settings.default_preset},
    )


@router.post("/dimensions", response_model=SuccessResponse[dict[str, Any]])
def extract_content_dimensions(
    request: DimensionExtractRequest,
) -> SuccessResponse[dict[str, Any]]:
    """Resolve configured content dimensions for a page."""
    settings = get_settings()
    tree = _parse(request.html, settings) if request.html else None

    report = DimensionExtractor().extract(
        request.dimensions, tree=tree, path=request.path, head=request.head
    )
    return SuccessResponse(data=report.to_dict())


@router.post("/content-map", response_model=SuccessResponse[dict[str, Any]])
def extract_content_map(request: ContentMapRequest) -> SuccessResponse[dict[str, Any]]:
    """Hero content, head metadata and dimensions from one parse."""
    settings = get_settings()
    options = _resolve_options(request.preset, request.options, settings)
    tree = _parse(request.html, settings)

    hero = HeroExtractor(options=options).extract(tree)
    head = extract_head_metadata(tree)
    dimensions = DimensionExtractor().extract(
        request.dimensions, tree=tree, path=request.path, head=head
    )

    logger.info(
        "content_map_built",
        path=request.path,
        hero_success=hero.success,
        dimensions=dimensions.total_count,
    )
    return SuccessResponse(
        data={
            "path": request.path,
            "head": head.to_dict(),
            "hero": hero.to_dict(),
            "dimensions": dimensions.to_dict(),
            "properties": dimensions.properties(),
        },
        meta={"preset": request.preset or settings.default_preset},
    )
