"""Hero extraction options and named presets."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from heroscan.exceptions import UnknownPresetError
from heroscan.extraction.headings import HEADING_TAGS
from heroscan.extraction.visibility import HIDING_CLASSES

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


@dataclass(frozen=True)
class HeroExtractionOptions:
    """Configuration for hero extraction."""

    # Container search
    max_depth: int = 5

    # Headings
    preferred_heading_level: str = "h1"
    max_headings: int = 5
    min_heading_length: int = 3
    include_subtext: bool = False

    # Body text
    min_content_length: int = 20
    max_content_length: int = 500
    max_content_blocks: int = 5

    # Buttons
    max_buttons: int = 5
    include_submit: bool = True

    # Images
    max_images: int = 3
    min_width: int = 200
    min_height: int = 150
    exclude_icons: bool = True
    exclude_logos: bool = True

    # Links
    include_links: bool = True
    max_links: int = 10

    hiding_classes: tuple[str, ...] = tuple(sorted(HIDING_CLASSES))

    # Run the per-item validators before capping each list
    prefilter_items: bool = False

    def __post_init__(self):
        if self.preferred_heading_level not in HEADING_TAGS:
            raise ValueError(
                f"preferred_heading_level must be one of {', '.join(HEADING_TAGS)}, "
                f"got '{self.preferred_heading_level}'"
            )
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type is bool and not isinstance(value, bool):
                raise ValueError(f"{f.name} must be a boolean, got {value!r}")
            if f.type is int:
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValueError(f"{f.name} must be an integer, got {value!r}")
                if value < 0:
                    raise ValueError(f"{f.name} must be non-negative, got {value}")
        if self.min_content_length > self.max_content_length:
            raise ValueError("min_content_length cannot exceed max_content_length")
        if isinstance(self.hiding_classes, str) or not all(
            isinstance(name, str) for name in self.hiding_classes
        ):
            raise ValueError(
                f"hiding_classes must be a list of class names, got {self.hiding_classes!r}"
            )
        # Lists arrive from JSON; keep the frozen instance hashable
        object.__setattr__(self, "hiding_classes", tuple(self.hiding_classes))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "HeroExtractionOptions":
        """
        Build options from a mapping using snake_case or camelCase keys.

        Raises:
            ValueError: On keys that are not options
        """
        return cls().with_overrides(data)

    @classmethod
    def preset(cls, name: str, **overrides: Any) -> "HeroExtractionOptions":
        """Named preset with optional field overrides."""
        try:
            base = PRESETS[name]
        except KeyError:
            raise UnknownPresetError(name, sorted(PRESETS)) from None
        return replace(base, **overrides) if overrides else base

    def with_overrides(self, data: Mapping[str, Any] | None) -> "HeroExtractionOptions":
        """Copy with fields from a snake_case or camelCase mapping replaced."""
        if not data:
            return self
        merged = self.to_dict()
        unknown = []
        for key, value in data.items():
            name = _snake_case(key)
            if name in merged:
                merged[name] = value
            else:
                unknown.append(key)
        if unknown:
            raise ValueError(f"Unknown extraction options: {', '.join(sorted(unknown))}")
        return HeroExtractionOptions(**merged)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


PRESETS: dict[str, HeroExtractionOptions] = {
    "standard": HeroExtractionOptions(),
    "strict": HeroExtractionOptions(
        max_depth=4,
        min_content_length=40,
        max_content_length=400,
        max_content_blocks=3,
        max_buttons=3,
        include_submit=False,
        max_images=2,
        min_width=300,
        min_height=200,
        max_headings=3,
        min_heading_length=5,
        max_links=5,
        prefilter_items=True,
    ),
    "lenient": HeroExtractionOptions(
        max_depth=8,
        min_content_length=10,
        max_content_length=1000,
        max_content_blocks=8,
        max_buttons=8,
        max_images=5,
        min_width=100,
        min_height=80,
        exclude_logos=False,
        min_heading_length=2,
        max_links=20,
    ),
}

DEFAULT_PRESET = "standard"
