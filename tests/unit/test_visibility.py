"""Unit tests for the visibility predicate."""

from __future__ import annotations

import pytest

from pagetools.tagging.visibility import is_visible


class TestIsVisible:
    def test_rendered_element_is_visible(self) -> None:
        assert is_visible(1, "block", "visible", "1") is True

    def test_requires_a_client_rect(self) -> None:
        assert is_visible(0, "block", "visible", "1") is False

    @pytest.mark.parametrize(
        ("display", "visibility", "opacity"),
        [
            ("none", "visible", "1"),
            ("block", "hidden", "1"),
            ("block", "visible", "0"),
            ("inline", "visible", 0.0),
        ],
    )
    def test_hidden_by_computed_style(self, display: str, visibility: str, opacity) -> None:
        assert is_visible(2, display, visibility, opacity) is False

    def test_partial_opacity_is_visible(self) -> None:
        assert is_visible(1, "flex", "visible", "0.01") is True

    def test_unparseable_opacity_treated_as_opaque(self) -> None:
        assert is_visible(1, "block", "visible", "") is True

    def test_collapse_is_not_hidden(self) -> None:
        """Only ``visibility: hidden`` hides; ``collapse`` is left to layout."""
        assert is_visible(1, "table-row", "collapse", "1") is True
