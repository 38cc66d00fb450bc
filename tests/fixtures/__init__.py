"""Shared HTML pages for extraction tests."""

from tests.fixtures.pages import (
    FULL_LANDING_PAGE,
    HERO_SECTION_PAGE,
    HIDDEN_HEADING_PAGE,
    STRUCTURAL_ONLY_PAGE,
    WRAPPED_PAGE,
    large_wrapper_page,
)

__all__ = [
    "FULL_LANDING_PAGE",
    "HERO_SECTION_PAGE",
    "HIDDEN_HEADING_PAGE",
    "STRUCTURAL_ONLY_PAGE",
    "WRAPPED_PAGE",
    "large_wrapper_page",
]
