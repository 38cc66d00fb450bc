"""Content dimension configuration and results."""

from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ExtractionMethod(StrEnum):
    """Pluggable ways of resolving a dimension."""

    URL_PATTERN = "url_pattern"
    CONTENT_SELECTOR = "content_selector"
    STATIC_VALUE = "static_value"
    METADATA = "metadata"


class DimensionErrorKind(StrEnum):
    """Why a single dimension failed. Never fatal to the others."""

    SELECTOR_NOT_FOUND = "SelectorNotFound"
    INVALID_PATTERN = "InvalidPattern"
    INVALID_SOURCE = "InvalidSource"
    NO_DATA_FOUND = "NoDataFound"
    MISSING_CONFIG = "MissingConfig"
    UNKNOWN_METHOD = "UnknownMethod"

    @property
    def message(self) -> str:
        return ERROR_MESSAGES[self]


ERROR_MESSAGES = {
    DimensionErrorKind.SELECTOR_NOT_FOUND: "CSS selector found no elements",
    DimensionErrorKind.INVALID_PATTERN: "Regex pattern failed to match",
    DimensionErrorKind.INVALID_SOURCE: "Invalid metadata source variable",
    DimensionErrorKind.NO_DATA_FOUND: "No data extracted from source",
    DimensionErrorKind.MISSING_CONFIG: "Required config fields missing",
    DimensionErrorKind.UNKNOWN_METHOD: "Unknown extraction method",
}


class DimensionConfig(BaseModel):
    """How to resolve one named dimension.

    Which parameters matter depends on ``extraction_method``:
    ``url_pattern`` uses ``pattern`` and ``extract`` (``"$1"``, ``"$2"``...),
    ``content_selector`` uses ``source`` (one selector or a fallback list),
    reading ``attribute`` instead of text when it is set, plus the text options,
    ``static_value`` uses ``value`` and ``metadata`` uses ``source``
    (a single template variable such as ``{meta-title}``).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    extraction_method: str | None = None
    enabled: bool = True

    pattern: str | None = None
    extract: str | None = None
    source: str | list[str] | None = None
    value: str | None = None
    attribute: str | None = None

    extract_all: bool = Field(default=False, alias="extractAll")
    separator: str = " "
    preserve_spacing: bool = Field(default=False, alias="preserveSpacing")


@dataclass(frozen=True)
class DimensionResult:
    """Either a non-empty normalized value or an error kind, never both."""

    success: bool
    value: str | None = None
    error: DimensionErrorKind | None = None

    @classmethod
    def ok(cls, value: str) -> "DimensionResult":
        return cls(success=True, value=value)

    @classmethod
    def failed(cls, kind: DimensionErrorKind) -> "DimensionResult":
        return cls(success=False, error=kind)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "value": self.value,
            "error": self.error.value if self.error else None,
        }


@dataclass
class DimensionReport:
    """Results for every evaluated dimension, in configuration order."""

    results: dict[str, DimensionResult] = field(default_factory=dict)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results.values() if r.success)

    @property
    def total_count(self) -> int:
        return len(self.results)

    def fetch_property(self, name: str) -> str:
        """Resolved value for ``name``, or an empty string when it failed or is absent."""
        result = self.results.get(name)
        if result is None or not result.success or not result.value:
            return ""
        return result.value

    def properties(self) -> dict[str, str]:
        """Every dimension name mapped through ``fetch_property``."""
        return {name: self.fetch_property(name) for name in self.results}

    def to_dict(self) -> dict:
        return {
            "dimensions": {name: r.to_dict() for name, r in self.results.items()},
            "successCount": self.success_count,
            "totalCount": self.total_count,
        }
