"""Visible text and HTML extraction from a Playwright page.

Text is gathered by an in-page tree walk over text nodes whose parent
element is displayed and not hidden.  HTML is either a single element's
``outerHTML`` or the full page content, optionally cleaned in the page
(scripts, styles, meta tags, comments) and minified.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError
from pydantic import BaseModel

from pagetools.exceptions import EvaluationError, SelectorNotFoundError

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 20_000
TEXT_TRUNCATION_MARKER = "\n[Output truncated due to size limits]"
HTML_TRUNCATION_MARKER = "\n<!-- Output truncated due to size limits -->"

_BETWEEN_TAGS_WS = re.compile(r">\s+<")

# JavaScript to collect visible text, one trimmed text node per line.
_VISIBLE_TEXT_JS = """
() => {
    if (!document.body) return "";
    const walker = document.createTreeWalker(
        document.body,
        NodeFilter.SHOW_TEXT,
        {
            acceptNode: (node) => {
                const parent = node.parentElement;
                if (!parent) return NodeFilter.FILTER_REJECT;
                const style = window.getComputedStyle(parent);
                return (style.display !== "none" && style.visibility !== "hidden")
                    ? NodeFilter.FILTER_ACCEPT
                    : NodeFilter.FILTER_REJECT;
            },
        }
    );
    let text = "";
    let node;
    while ((node = walker.nextNode())) {
        const trimmed = node.textContent ? node.textContent.trim() : "";
        if (trimmed) text += trimmed + "\\n";
    }
    return text.trim();
}
"""

# JavaScript to strip unwanted nodes from an HTML string with DOMParser.
_CLEAN_HTML_JS = """
({ html, removeScripts, removeStyles, removeMeta, removeComments }) => {
    const doc = new DOMParser().parseFromString(html, "text/html");
    const strip = (selector) => doc.querySelectorAll(selector).forEach((el) => el.remove());
    if (removeScripts) strip("script");
    if (removeStyles) strip("style");
    if (removeMeta) strip("meta");
    if (removeComments) {
        const walk = (node) => {
            for (let i = node.childNodes.length - 1; i >= 0; i--) {
                const child = node.childNodes[i];
                if (child.nodeType === Node.COMMENT_NODE) {
                    node.removeChild(child);
                } else if (child.nodeType === Node.ELEMENT_NODE) {
                    walk(child);
                }
            }
        };
        walk(doc.documentElement);
    }
    return doc.documentElement.outerHTML;
}
"""


class HtmlCleaningOptions(BaseModel):
    """Which nodes to strip from extracted HTML, and whether to minify it."""

    remove_scripts: bool = True
    remove_comments: bool = False
    remove_styles: bool = False
    remove_meta: bool = False
    minify: bool = False

    @classmethod
    def build(
        cls,
        *,
        remove_scripts: bool | None = None,
        remove_comments: bool = False,
        remove_styles: bool = False,
        remove_meta: bool = False,
        minify: bool = False,
        clean_html: bool = False,
    ) -> HtmlCleaningOptions:
        """Resolve tool flags into options.

        Scripts are removed unless *remove_scripts* is explicitly ``False``;
        *clean_html* turns on every removal.
        """
        return cls(
            remove_scripts=remove_scripts is not False or clean_html,
            remove_comments=remove_comments or clean_html,
            remove_styles=remove_styles or clean_html,
            remove_meta=remove_meta or clean_html,
            minify=minify,
        )

    @property
    def removes_anything(self) -> bool:
        return self.remove_scripts or self.remove_comments or self.remove_styles or self.remove_meta


def truncate(text: str, max_length: int = DEFAULT_MAX_LENGTH, marker: str = TEXT_TRUNCATION_MARKER) -> str:
    """Cut *text* to *max_length* characters, appending *marker* if anything was cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + marker


def minify_html(html: str) -> str:
    """Collapse whitespace between adjacent tags."""
    return _BETWEEN_TAGS_WS.sub("><", html).strip()


async def get_visible_text(page: Page) -> str:
    """Return the page's visible text, one text node per line.

    Raises:
        EvaluationError: If the in-page walk fails.
    """
    try:
        return await page.evaluate(_VISIBLE_TEXT_JS) or ""
    except PlaywrightError as exc:
        raise EvaluationError("get visible text content", exc.message) from exc


async def get_html(page: Page, selector: str | None = None) -> str:
    """Return the outer HTML of *selector*'s first match, or the whole page.

    Raises:
        SelectorNotFoundError: If *selector* matches nothing.
        EvaluationError: If reading the HTML fails.
    """
    try:
        if not selector:
            return await page.content()
        element = await page.query_selector(selector)
        if element is None:
            raise SelectorNotFoundError(selector)
        return await page.evaluate("(el) => el.outerHTML", element)
    except PlaywrightError as exc:
        raise EvaluationError("get visible HTML content", exc.message) from exc


async def clean_html(page: Page, html: str, options: HtmlCleaningOptions) -> str:
    """Apply *options* to *html*; removals run in the page's DOMParser."""
    if options.removes_anything:
        try:
            html = await page.evaluate(
                _CLEAN_HTML_JS,
                {
                    "html": html,
                    "removeScripts": options.remove_scripts,
                    "removeStyles": options.remove_styles,
                    "removeMeta": options.remove_meta,
                    "removeComments": options.remove_comments,
                },
            )
        except PlaywrightError as exc:
            raise EvaluationError("clean HTML content", exc.message) from exc
    if options.minify:
        html = minify_html(html)
    return html


async def get_cleaned_html(
    page: Page,
    options: HtmlCleaningOptions,
    *,
    selector: str | None = None,
) -> str:
    """Extract HTML (page or element) and clean it according to *options*."""
    html = await get_html(page, selector)
    cleaned = await clean_html(page, html, options)
    logger.debug("Extracted %d chars of HTML (%d after cleaning)", len(html), len(cleaned))
    return cleaned
