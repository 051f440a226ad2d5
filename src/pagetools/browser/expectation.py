"""Wait for expected text to appear on the page."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeout

from pagetools.exceptions import EvaluationError, MissingArgumentError, SelectorNotFoundError

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)


async def wait_for_text(page: Page, text: str | None, *, timeout_ms: int = 30_000) -> str:
    """Wait until an element containing *text* appears and return its text content.

    Args:
        page: Playwright page instance.
        text: Text to look for (Playwright ``text=`` selector semantics).
        timeout_ms: How long to wait before giving up.

    Returns:
        The matched element's trimmed text content.

    Raises:
        MissingArgumentError: If *text* is empty.
        SelectorNotFoundError: If nothing matches before the timeout.
        EvaluationError: For any other Playwright failure.
    """
    if not text:
        raise MissingArgumentError("text")

    selector = f"text={text}"
    try:
        element = await page.wait_for_selector(selector, timeout=timeout_ms)
    except PlaywrightTimeout as exc:
        raise SelectorNotFoundError(selector, f'Timed out after {timeout_ms}ms waiting for text "{text}"') from exc
    except PlaywrightError as exc:
        raise EvaluationError("wait for text", exc.message) from exc

    if element is None:
        raise SelectorNotFoundError(selector)

    actual = (await element.text_content() or "").strip()
    logger.debug("Located %s -> %r", selector, actual)
    return actual
