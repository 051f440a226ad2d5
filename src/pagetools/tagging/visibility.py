"""Visibility predicate for tagging candidates."""

from __future__ import annotations


def is_visible(rect_count: int, display: str, visibility: str, opacity: str | float) -> bool:
    """Return True if an element is rendered and not hidden by computed style.

    An element is visible when it has at least one client rect and its
    computed style is neither ``visibility: hidden``, ``display: none`` nor
    ``opacity: 0``.
    """
    if rect_count <= 0:
        return False
    if visibility == "hidden" or display == "none":
        return False
    return not _is_zero_opacity(opacity)


def _is_zero_opacity(opacity: str | float) -> bool:
    try:
        return float(opacity) == 0.0
    except (TypeError, ValueError):
        return False
