"""Error taxonomy for the extraction core.

Nothing here is raised across the public extraction boundary: the pipeline
returns these kinds inside typed failure results. The exception classes are
for callers (and the HTTP layer) that want to turn a failure into a raise.
"""

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Document-level failure kinds for hero extraction."""

    NO_HEADING_FOUND = "NoHeadingFound"
    PARSER_UNAVAILABLE = "ParserUnavailable"


class HeroscanError(Exception):
    """Base exception for heroscan."""

    def __init__(
        self,
        message: str,
        code: str = "error",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ParserUnavailableError(HeroscanError):
    """The markup parser dependency was not supplied."""

    def __init__(self, message: str = "No HTML parser supplied; pass a tree or inject a parser"):
        super().__init__(
            message=message,
            code="parser_unavailable",
            status_code=500,
        )


class DocumentTooLargeError(HeroscanError):
    """Submitted markup exceeds the configured size limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            message=f"HTML document is {size} bytes, limit is {limit}",
            code="document_too_large",
            status_code=413,
            details={"size": size, "limit": limit},
        )


class InvalidOptionsError(HeroscanError):
    """Extraction options failed validation."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="invalid_options",
            status_code=422,
        )


class UnknownPresetError(HeroscanError):
    """Requested extraction preset does not exist."""

    def __init__(self, name: str, available: list[str]):
        super().__init__(
            message=f"Unknown extraction preset '{name}'",
            code="unknown_preset",
            status_code=422,
            details={"available": available},
        )
