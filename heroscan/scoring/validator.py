"""Hero extraction completeness scoring.

A fixed weight table turns the extracted collections into a score out of 4.5,
a quality tier and ordered feedback. The per-item validators are reusable on
their own and back the ``prefilter_items`` option.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

import structlog

from heroscan.extraction.blocks import ButtonBlock, ImageBlock

if TYPE_CHECKING:
    from heroscan.extraction.hero import ExtractedContent

logger = structlog.get_logger(__name__)

SCORE_WEIGHTS = {
    "hasH1": 1.0,
    "hasButtons": 1.0,
    "hasContent": 1.0,
    "hasImages": 0.5,
    "hasSubheadings": 0.5,
    "containerFound": 0.5,
}

MAX_SCORE = sum(SCORE_WEIGHTS.values())  # 4.5

# At least a heading plus content or buttons
VALID_THRESHOLD = 2.5


class QualityTier(StrEnum):
    """Quality rating by percentage of the maximum score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    INSUFFICIENT = "insufficient"


# (minimum percentage, tier), checked top down
QUALITY_THRESHOLDS = [
    (90, QualityTier.EXCELLENT),
    (75, QualityTier.GOOD),
    (60, QualityTier.FAIR),
    (40, QualityTier.POOR),
]

# Per-item limits
BUTTON_TEXT_MIN = 2
BUTTON_TEXT_MAX = 50
CONTENT_MIN = 20
CONTENT_MAX = 1000
HEADING_MIN = 3
HEADING_MAX = 200
SHOUTING_MIN_LENGTH = 10
PLACEHOLDER_IMAGE_KEYWORDS = ("placeholder", "dummy", "sample", "temp")
LOREM_IPSUM_PATTERN = re.compile(r"lorem\s+ipsum", re.IGNORECASE)

CORE_ELEMENTS_PRESENT = "✓ Core hero elements present"


@dataclass
class ValidationResult:
    """Completeness score for one extraction."""

    scores: dict[str, float]
    total: float
    percentage: int
    quality: QualityTier
    is_valid: bool
    feedback: list[str] = field(default_factory=list)
    max_score: float = MAX_SCORE

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "score": self.total,
            "maxScore": self.max_score,
            "percentage": self.percentage,
            "scores": dict(self.scores),
            "feedback": list(self.feedback),
            "quality": self.quality.value,
        }

    def show_the_math(self) -> str:
        """Generate human-readable calculation breakdown."""
        lines = [
            "=" * 50,
            "HERO EXTRACTION SCORE",
            "=" * 50,
            "",
            f"Total: {self.total:.1f}/{self.max_score} ({self.percentage}%, {self.quality.upper()})",
            f"Valid: {'yes' if self.is_valid else 'no'} (threshold {VALID_THRESHOLD})",
            "",
            "-" * 50,
        ]
        for name, weight in SCORE_WEIGHTS.items():
            earned = self.scores.get(name, 0.0)
            icon = "+" if earned else "X"
            lines.append(f"[{icon}] {name}: {earned:.1f}/{weight:.1f}")
        if self.feedback:
            lines.extend(["", "-" * 50])
            lines.extend(f"  * {item}" for item in self.feedback)
        return "\n".join(lines)


def quality_tier(percentage: int) -> QualityTier:
    for minimum, tier in QUALITY_THRESHOLDS:
        if percentage >= minimum:
            return tier
    return QualityTier.INSUFFICIENT


def score_percentage(total: float, max_score: float = MAX_SCORE) -> int:
    # Round half up; Python's round() would send 2.5 to 2
    return int(total / max_score * 100 + 0.5)


def category_scores(extracted: ExtractedContent) -> dict[str, float]:
    """Per-category contribution, in weight table order."""
    present = {
        "hasH1": bool(extracted.h1),
        "hasButtons": bool(extracted.buttons),
        "hasContent": bool(extracted.content),
        "hasImages": bool(extracted.images),
        "hasSubheadings": bool(extracted.h2 or extracted.h3),
        "containerFound": extracted.container.identified,
    }
    return {name: weight if present[name] else 0.0 for name, weight in SCORE_WEIGHTS.items()}


def generate_feedback(scores: dict[str, float], extracted: ExtractedContent) -> list[str]:
    """Ordered feedback lines; the same input always gives the same list."""
    feedback: list[str] = []

    if not scores["hasH1"]:
        feedback.append("Missing H1 heading")

    if not scores["hasButtons"]:
        feedback.append("No call-to-action buttons found")
    elif len(extracted.buttons) == 1:
        feedback.append("Only one CTA button found")

    if not scores["hasContent"]:
        feedback.append("No descriptive content found")
    elif len(extracted.content) == 1:
        feedback.append("Limited content (only one paragraph)")

    if not scores["hasImages"]:
        feedback.append("No hero images detected")

    if not scores["containerFound"]:
        feedback.append("No clear hero container identified")

    if scores["hasH1"] and scores["hasButtons"] and scores["hasContent"]:
        feedback.append(CORE_ELEMENTS_PRESENT)

    return feedback


def validate_extraction(extracted: ExtractedContent) -> ValidationResult:
    """
    Score an extraction against the fixed weight table.

    Args:
        extracted: Assembled hero content

    Returns:
        ValidationResult; ``total`` is always within [0, 4.5]
    """
    scores = category_scores(extracted)
    total = sum(scores.values())
    percentage = score_percentage(total)

    result = ValidationResult(
        scores=scores,
        total=total,
        percentage=percentage,
        quality=quality_tier(percentage),
        is_valid=total >= VALID_THRESHOLD,
        feedback=generate_feedback(scores, extracted),
    )
    logger.debug(
        "hero_extraction_scored",
        total=result.total,
        percentage=result.percentage,
        quality=result.quality.value,
        is_valid=result.is_valid,
    )
    return result


def validate_button(button: ButtonBlock) -> bool:
    """Button label between 2 and 50 characters."""
    return BUTTON_TEXT_MIN <= len(button.text) <= BUTTON_TEXT_MAX


def validate_content(text: str) -> bool:
    """Body text between 20 and 1000 characters that is not lorem ipsum."""
    if not text or not CONTENT_MIN <= len(text) <= CONTENT_MAX:
        return False
    return not LOREM_IPSUM_PATTERN.search(text)


def validate_image(image: ImageBlock) -> bool:
    if not image.src:
        return False
    src = image.src.lower()
    return not any(keyword in src for keyword in PLACEHOLDER_IMAGE_KEYWORDS)


def validate_heading(text: str) -> bool:
    """Heading between 3 and 200 characters and not shouted in capitals."""
    if not text or not HEADING_MIN <= len(text) <= HEADING_MAX:
        return False
    # Caseless text such as digits counts as shouting too
    return not (text == text.upper() and len(text) > SHOUTING_MIN_LENGTH)
