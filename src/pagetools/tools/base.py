"""Base class and context for the browser tools.

Every tool runs through ``BrowserTool.safe_execute``: it checks the
browser is connected and the page is open, runs the tool body, and turns
any failure into an error ``ToolResponse``.  A disconnected browser also
fires the context's ``on_disconnect`` callback so the host can recreate
its browser on the next navigation.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from playwright.async_api import Error as PlaywrightError

from pagetools.exceptions import ConnectivityError, PageToolsError, UnavailablePageError
from pagetools.models.tools import ToolArgs, ToolResponse, create_error_response

if TYPE_CHECKING:
    from playwright.async_api import Page

    from pagetools.settings.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class ToolContext:
    """Browser handles supplied by the caller for one tool invocation."""

    browser: Any = None
    page: Any = None
    on_disconnect: Callable[[], None] | None = None


class BrowserTool(ABC):
    """A single page tool.

    Subclasses set ``name``/``description`` and implement :meth:`run`.
    """

    name: ClassVar[str]
    description: ClassVar[str] = ""

    def __init__(self, settings: Settings | None = None) -> None:
        if settings is None:
            from pagetools.settings import get_settings

            settings = get_settings()
        self.settings = settings

    async def execute(self, args: ToolArgs, context: ToolContext) -> ToolResponse:
        """Run the tool against the context's page."""
        return await self.safe_execute(context, lambda page: self.run(args, page))

    @abstractmethod
    async def run(self, args: ToolArgs, page: Page) -> ToolResponse:
        """Tool body; may raise ``PageToolsError`` or Playwright errors."""

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    @staticmethod
    def ensure_page(context: ToolContext) -> Page:
        """Return the usable page or raise.

        Raises:
            ConnectivityError: If the browser is missing or disconnected.
                ``context.on_disconnect`` is called first.
            UnavailablePageError: If the page is missing or closed.
        """
        if context.browser is None or not context.browser.is_connected():
            if context.on_disconnect is not None:
                context.on_disconnect()
            raise ConnectivityError()
        if context.page is None or context.page.is_closed():
            raise UnavailablePageError()
        return context.page

    async def safe_execute(
        self,
        context: ToolContext,
        operation: Callable[[Page], Awaitable[ToolResponse]],
    ) -> ToolResponse:
        """Run *operation* on the context's page, converting failures to error responses."""
        try:
            page = self.ensure_page(context)
            return await operation(page)
        except PageToolsError as e:
            logger.warning("%s failed: %s", self.name, e)
            return create_error_response(str(e))
        except PlaywrightError as e:
            logger.warning("%s failed (playwright): %s", self.name, e.message)
            return create_error_response(f"Operation failed: {e.message}")
        except Exception as e:
            logger.exception("%s failed unexpectedly", self.name)
            return create_error_response(f"Operation failed: {e}")
