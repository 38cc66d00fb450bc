"""Configuration-driven content dimensions."""

# Lazy imports - use explicit imports when needed:
# from heroscan.dimensions.extractor import DimensionExtractor, extract_dimensions
# from heroscan.dimensions.models import DimensionConfig, DimensionReport, DimensionResult

__all__ = [
    "DimensionExtractor",
    "extract_dimensions",
    "DimensionConfig",
    "DimensionErrorKind",
    "DimensionReport",
    "DimensionResult",
    "ExtractionMethod",
    "DimensionContext",
    "STRATEGIES",
]
