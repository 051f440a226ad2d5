"""Unit tests for locator sanitizing and resolution."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError

from pagetools.browser.locator import (
    candidate_selectors,
    clean_selector,
    has_bad_chars,
    is_valid_selector,
    pick_selector,
    resolve_locator,
    sanitize_selectors,
)
from pagetools.exceptions import ConfigurationError, EvaluationError, SelectorNotFoundError

PRIVATE_USE = "\ue001"


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


class TestPredicates:
    @pytest.mark.parametrize("sel", ["a\x00b", "div\x1f", "x\x85", f"span{PRIVATE_USE}", "p\ufff9"])
    def test_bad_chars_detected(self, sel: str) -> None:
        assert has_bad_chars(sel) is True

    @pytest.mark.parametrize("sel", ["button.ok", "text=\"新建\"", "#main > li:nth-child(2)"])
    def test_clean_selectors(self, sel: str) -> None:
        assert has_bad_chars(sel) is False
        assert clean_selector(sel) == sel

    def test_clean_strips_bad_chars(self) -> None:
        assert clean_selector(f"text=\"Save{PRIVATE_USE}\"\x07") == 'text="Save"'

    @pytest.mark.parametrize("sel", ['div[data-x=""]', 'input[name= ""]', '[title =  ""]'])
    def test_empty_assignment_invalid(self, sel: str) -> None:
        assert is_valid_selector(sel) is False

    def test_non_empty_assignment_valid(self) -> None:
        assert is_valid_selector('input[name="q"]') is True


# ---------------------------------------------------------------------------
# candidate_selectors / sanitize_selectors / pick_selector
# ---------------------------------------------------------------------------


class TestCandidateSelectors:
    def test_selectors_field(self) -> None:
        assert candidate_selectors({"selectors": ["a", "b"]}) == ["a", "b"]

    def test_single_selector_field(self) -> None:
        assert candidate_selectors({"selector": "a"}) == ["a"]

    def test_empty_or_unknown(self) -> None:
        assert candidate_selectors({"selector": ""}) == []
        assert candidate_selectors(None) == []
        assert candidate_selectors(42) == []

    def test_bare_values(self) -> None:
        assert candidate_selectors(["a", 3, "b"]) == ["a", "b"]
        assert candidate_selectors("a") == ["a"]


class TestSanitizeSelectors:
    def test_invalid_first_candidate_skipped(self) -> None:
        result = sanitize_selectors({"selectors": ['div[data-x=""]', "button.ok"]})
        assert result[0] == "button.ok"
        assert result == ["button.ok", 'div[data-x=""]']

    def test_first_good_candidate_kept_in_place(self) -> None:
        result = sanitize_selectors({"selectors": ["#a", "#b", "#c"]})
        assert result == ["#a", "#b", "#c"]

    def test_cleaned_candidate_used_when_all_have_bad_chars(self) -> None:
        result = sanitize_selectors({"selectors": [f"text=\"Save{PRIVATE_USE}\"", f"#x{PRIVATE_USE}"]})
        assert result == ['text="Save"', "#x"]

    def test_cleaned_candidate_must_be_valid(self) -> None:
        result = sanitize_selectors({"selectors": [f'[title=""]{PRIVATE_USE}', f"#ok{PRIVATE_USE}"]})
        assert result[0] == "#ok"

    def test_falls_back_to_first_original(self) -> None:
        first = f'[a=""]{PRIVATE_USE}'
        result = sanitize_selectors({"selectors": [first, '[b=""]']})
        assert result[0] == first

    def test_blank_after_cleaning_dropped_from_rest(self) -> None:
        result = sanitize_selectors({"selectors": ["#ok", PRIVATE_USE]})
        assert result == ["#ok"]

    def test_no_candidates(self) -> None:
        assert sanitize_selectors({}) == []


class TestPickSelector:
    def test_returns_winner_only(self) -> None:
        assert pick_selector({"selectors": ['div[data-x=""]', "button.ok"]}) == "button.ok"

    def test_single_selector_variant(self) -> None:
        assert pick_selector({"selector": "#main"}) == "#main"

    def test_empty(self) -> None:
        assert pick_selector({"selectors": []}) == ""


# ---------------------------------------------------------------------------
# resolve_locator
# ---------------------------------------------------------------------------


class TestResolveLocator:
    @pytest.mark.anyio
    async def test_multiple_candidates(self, mock_page: MagicMock) -> None:
        mock_page.evaluate = AsyncMock(return_value={"selectors": ['div[data-x=""]', "button.ok"]})

        result = await resolve_locator(mock_page, "11")

        assert result == ["button.ok", 'div[data-x=""]']
        script, args = mock_page.evaluate.await_args.args
        assert "ijs.generateSelector(el, {multiple: true})" in script
        assert args == {"attribute": "data-tag-id", "tagId": "11"}

    @pytest.mark.anyio
    async def test_single_variant(self, mock_page: MagicMock) -> None:
        mock_page.evaluate = AsyncMock(return_value={"selector": 'text="新建"'})
        result = await resolve_locator(mock_page, "3", multiple=False, generator="window.finder")
        assert result == 'text="新建"'
        script = mock_page.evaluate.await_args.args[0]
        assert "window.finder(el, {})" in script

    @pytest.mark.anyio
    async def test_untagged_id(self, mock_page: MagicMock) -> None:
        mock_page.evaluate = AsyncMock(return_value=None)
        with pytest.raises(SelectorNotFoundError, match="data-tag-id='99'"):
            await resolve_locator(mock_page, "99")

    @pytest.mark.anyio
    async def test_generator_failure(self, mock_page: MagicMock) -> None:
        mock_page.evaluate = AsyncMock(side_effect=PlaywrightError("ijs is not defined"))
        with pytest.raises(EvaluationError, match="ijs is not defined"):
            await resolve_locator(mock_page, "1")

    @pytest.mark.anyio
    async def test_rejects_unsafe_generator_name(self, mock_page: MagicMock) -> None:
        with pytest.raises(ConfigurationError):
            await resolve_locator(mock_page, "1", generator="alert(1);x")
        mock_page.evaluate.assert_not_awaited()
