"""Extraction quality scoring."""

# Lazy imports - use explicit imports when needed:
# from heroscan.scoring.validator import validate_extraction, ValidationResult

__all__ = [
    "ValidationResult",
    "QualityTier",
    "validate_extraction",
    "validate_button",
    "validate_content",
    "validate_image",
    "validate_heading",
]
