"""pagetools test configuration — shared fixtures for unit and integration tests."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

FIXTURES_DIR = Path(__file__).parent / "fixtures"
PAGES_DIR = FIXTURES_DIR / "pages"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Clear the settings LRU cache between tests."""
    from pagetools.settings.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def anyio_backend() -> str:
    """Run ``@pytest.mark.anyio`` tests on asyncio only."""
    return "asyncio"


# ---------------------------------------------------------------------------
# Tag configuration
# ---------------------------------------------------------------------------


@pytest.fixture()
def tag_config_data() -> dict:
    """Raw tag configuration as it would appear on disk."""
    return {
        "excludedSelectors": [".sidebar", "d-editor"],
        "iconClassKeywords": ["add", "delete", "edit", "close", "more"],
        "specialTagNames": ["canvas"],
        "directTextMaxLen": 10,
    }


@pytest.fixture()
def tag_config(tag_config_data: dict):
    """A validated ``TagConfig``."""
    from pagetools.models.tagging import TagConfig

    return TagConfig.model_validate(tag_config_data)


@pytest.fixture()
def tag_config_file(tmp_path: Path, tag_config_data: dict) -> Path:
    """Tag configuration written to a temporary JSON file."""
    path = tmp_path / "tag_config.json"
    path.write_text(json.dumps(tag_config_data), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Mock Playwright objects
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_page() -> MagicMock:
    """Return a ``MagicMock`` standing in for a Playwright async ``Page``.

    Async methods are ``AsyncMock``s; ``is_closed`` is synchronous as in
    Playwright.
    """
    page = MagicMock(name="page")
    page.is_closed.return_value = False
    page.evaluate = AsyncMock(return_value="")
    page.content = AsyncMock(return_value="<html><head></head><body></body></html>")
    page.query_selector = AsyncMock(return_value=None)
    page.wait_for_selector = AsyncMock(return_value=None)
    return page


@pytest.fixture()
def mock_browser() -> MagicMock:
    """Return a connected mock browser."""
    browser = MagicMock(name="browser")
    browser.is_connected.return_value = True
    return browser


@pytest.fixture()
def tool_context(mock_browser: MagicMock, mock_page: MagicMock):
    """A ``ToolContext`` wired to the mock browser/page with a mock reset callback."""
    from pagetools.tools.base import ToolContext

    return ToolContext(browser=mock_browser, page=mock_page, on_disconnect=MagicMock(name="on_disconnect"))


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests that require a real browser")
