"""The page tools: visible text, visible HTML, element tagging, locators, text expectations."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pagetools.browser.expectation import wait_for_text
from pagetools.browser.extraction import (
    HTML_TRUNCATION_MARKER,
    TEXT_TRUNCATION_MARKER,
    HtmlCleaningOptions,
    get_cleaned_html,
    get_visible_text,
    truncate,
)
from pagetools.browser.locator import resolve_locator
from pagetools.exceptions import MissingArgumentError
from pagetools.models.tagging import TagConfig
from pagetools.models.tools import ToolArgs, ToolResponse, create_success_response
from pagetools.settings.tag_config import load_tag_config_from_settings
from pagetools.tagging.tagger import tag_page
from pagetools.tools.base import BrowserTool

if TYPE_CHECKING:
    from playwright.async_api import Page

    from pagetools.settings.config import Settings

logger = logging.getLogger(__name__)


class VisibleTextTool(BrowserTool):
    """Return the visible text content of the current page."""

    name = "get_visible_text"
    description = "Get the visible text content of the current page."

    async def run(self, args: ToolArgs, page: Page) -> ToolResponse:
        text = await get_visible_text(page)
        max_length = args.max_length if args.max_length is not None else self.settings.tools.max_length
        output = truncate(text, max_length, TEXT_TRUNCATION_MARKER)
        return create_success_response(f"Visible text content:\n{output}")


class VisibleHtmlTool(BrowserTool):
    """Return the (optionally cleaned) HTML of the page or one element."""

    name = "get_visible_html"
    description = "Get the HTML of the current page, or of the element matching a selector."

    async def run(self, args: ToolArgs, page: Page) -> ToolResponse:
        options = HtmlCleaningOptions.build(
            remove_scripts=args.remove_scripts,
            remove_comments=args.remove_comments,
            remove_styles=args.remove_styles,
            remove_meta=args.remove_meta,
            minify=args.minify,
            clean_html=args.clean_html,
        )
        html = await get_cleaned_html(page, options, selector=args.selector)
        max_length = args.max_length if args.max_length is not None else self.settings.tools.max_length
        output = truncate(html, max_length, HTML_TRUNCATION_MARKER)
        return create_success_response(f"HTML content:\n{output}")


class VisibleTagTool(BrowserTool):
    """Tag visible, labelled elements with sequential identifiers."""

    name = "tag_visible_elements"
    description = "Tag visible interactive elements with data-tag-id and list them as id:text."

    def __init__(self, settings: Settings | None = None, tag_config: TagConfig | None = None) -> None:
        super().__init__(settings)
        self._tag_config = tag_config

    @property
    def tag_config(self) -> TagConfig:
        """The tag configuration, loaded from settings on first use."""
        if self._tag_config is None:
            self._tag_config = load_tag_config_from_settings(self.settings)
        return self._tag_config

    async def run(self, args: ToolArgs, page: Page) -> ToolResponse:
        attribute = self.settings.tagging.attribute
        result = await tag_page(page, self.tag_config, attribute=attribute)
        if result.write_failures:
            logger.debug("%d identifier writes failed", result.write_failures)
        return create_success_response([f"Tagged {result.count} elements with {attribute}", result.render()])


class LocatorTool(BrowserTool):
    """Resolve a tagged element to a locator."""

    name = "get_locator"
    description = "Get a locator for the element tagged with the given data-tag-id."

    async def run(self, args: ToolArgs, page: Page) -> ToolResponse:
        if not args.id:
            raise MissingArgumentError("id")
        locator = await resolve_locator(
            page,
            args.id,
            attribute=self.settings.tagging.attribute,
            generator=self.settings.tagging.selector_generator,
            multiple=self.settings.tools.locator_multiple,
        )
        return create_success_response(["Tag element locator is:", json.dumps(locator, indent=2, ensure_ascii=False)])


class ExpectTextTool(BrowserTool):
    """Wait for an element containing the expected text."""

    name = "expect_text"
    description = "Wait for an element containing the given text and return its text content."

    async def run(self, args: ToolArgs, page: Page) -> ToolResponse:
        actual = await wait_for_text(page, args.text, timeout_ms=self.settings.tools.expect_timeout_ms)
        return create_success_response(f'Successfully located element containing text: "{actual}"')
