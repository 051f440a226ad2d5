"""Minimal Playwright session used by the CLI host.

The tools never launch or navigate browsers themselves; they receive a
``ToolContext``.  This module is the host side: launch headless Chromium,
open one page at a URL, and hand out a context whose disconnect callback
drops the session's handles.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from playwright.async_api import async_playwright

from pagetools.tools.base import ToolContext

if TYPE_CHECKING:
    from playwright.async_api import Browser, Page

    from pagetools.settings.config import BrowserSettings

logger = logging.getLogger(__name__)


class BrowserSession:
    """Holds the browser/page pair for one CLI invocation."""

    def __init__(self, browser: Browser, page: Page) -> None:
        self.browser: Browser | None = browser
        self.page: Page | None = page

    def reset(self) -> None:
        """Forget the browser and page so the next call sees them as unavailable."""
        logger.warning("Browser disconnected; resetting session state")
        self.browser = None
        self.page = None

    def context(self) -> ToolContext:
        return ToolContext(browser=self.browser, page=self.page, on_disconnect=self.reset)


@asynccontextmanager
async def open_session(url: str, settings: BrowserSettings) -> AsyncIterator[BrowserSession]:
    """Launch Chromium, open *url* and yield a ``BrowserSession``.

    Requires ``playwright install chromium`` to have been run at least once.
    """
    async with async_playwright() as pw:
        browser = await pw.chromium.launch(headless=settings.headless)
        try:
            context_args = {"user_agent": settings.user_agent} if settings.user_agent else {}
            context = await browser.new_context(**context_args)
            page = await context.new_page()
            logger.info("Opening %s (wait_until=%s)", url, settings.wait_until)
            await page.goto(url, wait_until=settings.wait_until, timeout=settings.timeout_ms)
            yield BrowserSession(browser, page)
        finally:
            if browser.is_connected():
                await browser.close()
