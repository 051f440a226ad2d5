"""Unit tests for visible text / HTML extraction."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError

from pagetools.browser.extraction import (
    HTML_TRUNCATION_MARKER,
    TEXT_TRUNCATION_MARKER,
    HtmlCleaningOptions,
    clean_html,
    get_cleaned_html,
    get_html,
    get_visible_text,
    minify_html,
    truncate,
)
from pagetools.exceptions import EvaluationError, SelectorNotFoundError


class TestTruncate:
    """Test output truncation."""

    def test_short_text_unchanged(self) -> None:
        assert truncate("hello", 100) == "hello"

    def test_exact_length_unchanged(self) -> None:
        assert truncate("a" * 50, 50) == "a" * 50

    def test_long_text_truncated_with_marker(self) -> None:
        result = truncate("a" * 200, 50)
        assert result == "a" * 50 + TEXT_TRUNCATION_MARKER
        assert len(result) == 50 + len(TEXT_TRUNCATION_MARKER)

    def test_html_marker(self) -> None:
        result = truncate("<p>" * 10, 6, HTML_TRUNCATION_MARKER)
        assert result == "<p><p>\n<!-- Output truncated due to size limits -->"


class TestMinifyHtml:
    def test_collapses_whitespace_between_tags(self) -> None:
        html = "<div>\n   <p>Hello  world</p>\n\t</div>\n"
        assert minify_html(html) == "<div><p>Hello  world</p></div>"

    def test_text_whitespace_untouched(self) -> None:
        assert minify_html("<b>a   b</b>") == "<b>a   b</b>"


class TestHtmlCleaningOptions:
    def test_scripts_removed_by_default(self) -> None:
        options = HtmlCleaningOptions.build()
        assert options.remove_scripts is True
        assert options.remove_styles is False

    def test_scripts_kept_only_when_explicitly_false(self) -> None:
        assert HtmlCleaningOptions.build(remove_scripts=False).remove_scripts is False
        assert HtmlCleaningOptions.build(remove_scripts=None).remove_scripts is True

    def test_clean_html_enables_all_removals(self) -> None:
        options = HtmlCleaningOptions.build(remove_scripts=False, clean_html=True)
        assert options.remove_scripts
        assert options.remove_comments
        assert options.remove_styles
        assert options.remove_meta
        assert options.minify is False


class TestGetVisibleText:
    @pytest.mark.anyio
    async def test_returns_evaluated_text(self, mock_page: MagicMock) -> None:
        mock_page.evaluate = AsyncMock(return_value="Hello\nWorld")
        assert await get_visible_text(mock_page) == "Hello\nWorld"

    @pytest.mark.anyio
    async def test_wraps_playwright_errors(self, mock_page: MagicMock) -> None:
        mock_page.evaluate = AsyncMock(side_effect=PlaywrightError("Target closed"))
        with pytest.raises(EvaluationError, match="Failed to get visible text content: Target closed"):
            await get_visible_text(mock_page)


class TestGetHtml:
    @pytest.mark.anyio
    async def test_full_page(self, mock_page: MagicMock) -> None:
        mock_page.content = AsyncMock(return_value="<html>page</html>")
        assert await get_html(mock_page) == "<html>page</html>"
        mock_page.query_selector.assert_not_awaited()

    @pytest.mark.anyio
    async def test_selector_outer_html(self, mock_page: MagicMock) -> None:
        element = MagicMock(name="element")
        mock_page.query_selector = AsyncMock(return_value=element)
        mock_page.evaluate = AsyncMock(return_value="<div id='main'></div>")

        assert await get_html(mock_page, "#main") == "<div id='main'></div>"
        mock_page.evaluate.assert_awaited_once_with("(el) => el.outerHTML", element)

    @pytest.mark.anyio
    async def test_selector_not_found(self, mock_page: MagicMock) -> None:
        with pytest.raises(SelectorNotFoundError, match='Element with selector "#missing" not found'):
            await get_html(mock_page, "#missing")


class TestCleanHtml:
    @pytest.mark.anyio
    async def test_removals_run_in_page(self, mock_page: MagicMock) -> None:
        mock_page.evaluate = AsyncMock(return_value="<html><body>x</body></html>")
        options = HtmlCleaningOptions.build(remove_comments=True)

        result = await clean_html(mock_page, "<html><!-- c --><body>x</body></html>", options)

        assert result == "<html><body>x</body></html>"
        flags = mock_page.evaluate.await_args.args[1]
        assert flags["removeScripts"] is True
        assert flags["removeComments"] is True
        assert flags["removeStyles"] is False
        assert flags["removeMeta"] is False

    @pytest.mark.anyio
    async def test_minify_only_skips_page(self, mock_page: MagicMock) -> None:
        options = HtmlCleaningOptions.build(remove_scripts=False, minify=True)
        result = await clean_html(mock_page, "<a>\n  <b></b>\n</a>", options)
        assert result == "<a><b></b></a>"
        mock_page.evaluate.assert_not_awaited()

    @pytest.mark.anyio
    async def test_get_cleaned_html_minifies_after_cleaning(self, mock_page: MagicMock) -> None:
        mock_page.content = AsyncMock(return_value="<html>raw</html>")
        mock_page.evaluate = AsyncMock(return_value="<html>\n  <body></body>\n</html>")
        options = HtmlCleaningOptions.build(minify=True)

        assert await get_cleaned_html(mock_page, options) == "<html><body></body></html>"
