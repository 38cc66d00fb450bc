"""heroscan - above-the-fold hero extraction and content dimensions."""

# Lazy imports so the HTTP layer can import submodules without pulling the
# whole pipeline. Use explicit imports when needed:
# from heroscan.extraction.hero import HeroExtractor, extract_hero
# from heroscan.dimensions.extractor import DimensionExtractor, extract_dimensions

from typing import Any

__version__ = "0.1.0"

__all__ = [
    "HeroExtractor",
    "HeroExtractionOptions",
    "HeroExtractionResult",
    "extract_hero",
    "DimensionExtractor",
    "DimensionReport",
    "extract_dimensions",
    "parse_html",
]


def __getattr__(name: str) -> Any:
    """Lazy import for the public entry points."""
    if name in ("HeroExtractor", "HeroExtractionResult", "extract_hero"):
        from heroscan.extraction.hero import HeroExtractionResult, HeroExtractor, extract_hero

        return locals()[name]
    elif name == "HeroExtractionOptions":
        from heroscan.extraction.options import HeroExtractionOptions

        return HeroExtractionOptions
    elif name in ("DimensionExtractor", "DimensionReport", "extract_dimensions"):
        from heroscan.dimensions.extractor import DimensionExtractor, extract_dimensions
        from heroscan.dimensions.models import DimensionReport

        return locals()[name]
    elif name == "parse_html":
        from heroscan.extraction.markup import parse_html

        return parse_html
    raise AttributeError(f"module 'heroscan' has no attribute '{name}'")
