"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment before any app code runs
os.environ["ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["MAX_HTML_BYTES"] = "200000"

from heroscan.extraction.markup import MarkupTree, parse_html  # noqa: E402
from tests.fixtures.pages import HERO_SECTION_PAGE, STRUCTURAL_ONLY_PAGE  # noqa: E402


@pytest.fixture
def hero_tree() -> MarkupTree:
    """Parsed page with a semantically named hero section."""
    return parse_html(HERO_SECTION_PAGE)


@pytest.fixture
def structural_tree() -> MarkupTree:
    """Parsed page whose hero is only recognisable by its contents."""
    return parse_html(STRUCTURAL_ONLY_PAGE)


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    from heroscan_api.config import get_settings

    get_settings.cache_clear()  # Use test env, not stale or .env values
    from heroscan_api.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
