"""Locator resolution for tagged elements.

A tagged element (``[data-tag-id='11']``) is handed to the in-page
selector generator, which returns one or more candidate selectors.  The
generator sometimes emits selectors containing control or private-use
characters, or empty attribute assignments (``[title=""]``); the sanitizer
below picks the best usable candidate.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from playwright.async_api import Error as PlaywrightError

from pagetools.exceptions import ConfigurationError, EvaluationError, SelectorNotFoundError

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)

DEFAULT_SELECTOR_GENERATOR = "ijs.generateSelector"

# Control characters, private-use area and the U+FFF0..U+FFFF specials.
_BAD_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f\ue000-\uf8ff\ufff0-\uffff]")
_EMPTY_ASSIGNMENT = re.compile(r'=\s*""')
_GENERATOR_NAME = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")


def has_bad_chars(selector: str) -> bool:
    return bool(_BAD_CHARS.search(selector))


def clean_selector(selector: str) -> str:
    """Strip control, private-use and special characters."""
    return _BAD_CHARS.sub("", selector)


def is_valid_selector(selector: str) -> bool:
    """A selector is invalid if it assigns an empty attribute value."""
    return not _EMPTY_ASSIGNMENT.search(selector)


def candidate_selectors(result: Any) -> list[str]:
    """Normalise a generator result into a list of candidate selectors.

    Accepts ``{"selectors": [...]}``, ``{"selector": "..."}``, a bare list
    or a bare string.
    """
    if isinstance(result, str):
        return [result] if result else []
    if isinstance(result, list):
        return [s for s in result if isinstance(s, str)]
    if isinstance(result, dict):
        selectors = result.get("selectors")
        if isinstance(selectors, list):
            return [s for s in selectors if isinstance(s, str)]
        selector = result.get("selector")
        if isinstance(selector, str) and selector:
            return [selector]
    return []


def _preferred_index(selectors: list[str], cleaned: list[str]) -> tuple[int, str]:
    for i, sel in enumerate(selectors):
        if not has_bad_chars(sel) and is_valid_selector(sel):
            return i, sel
    for i, sel in enumerate(cleaned):
        if is_valid_selector(sel) and sel.strip():
            return i, sel
    return 0, selectors[0]


def sanitize_selectors(result: Any) -> list[str]:
    """Return the candidates with the best one first.

    Preference:

    1. the first candidate with no bad characters that is valid;
    2. otherwise the first candidate that is valid and non-blank once its
       bad characters are stripped;
    3. otherwise the first candidate as-is.

    The remaining candidates follow in their original order, cleaned;
    those that are blank after cleaning are dropped.
    """
    selectors = candidate_selectors(result)
    if not selectors:
        return []

    cleaned = [clean_selector(s) for s in selectors]
    winner_idx, winner = _preferred_index(selectors, cleaned)
    rest = [sel for i, sel in enumerate(cleaned) if i != winner_idx and sel.strip()]
    return [winner, *rest]


def pick_selector(result: Any) -> str:
    """Return only the preferred selector, or ``""`` when there are none."""
    selectors = sanitize_selectors(result)
    return selectors[0] if selectors else ""


def _generator_script(generator: str, multiple: bool) -> str:
    if not _GENERATOR_NAME.match(generator):
        raise ConfigurationError(f"Invalid selector generator name: {generator!r}")
    options = "{multiple: true}" if multiple else "{}"
    return f"""
({{ attribute, tagId }}) => {{
    const el = document.querySelector(`[${{attribute}}='${{CSS.escape(tagId)}}']`);
    if (!el) return null;
    return {generator}(el, {options});
}}
"""


async def resolve_locator(
    page: Page,
    tag_id: str,
    *,
    attribute: str = "data-tag-id",
    generator: str = DEFAULT_SELECTOR_GENERATOR,
    multiple: bool = True,
) -> list[str] | str:
    """Resolve a tag identifier to sanitized locator(s).

    Args:
        page: Playwright page holding the tagged element.
        tag_id: Identifier assigned by the tagging pass.
        attribute: Identifier attribute name.
        generator: Dotted name of the in-page selector generator.
        multiple: Return every candidate (best first) instead of just the best.

    Raises:
        SelectorNotFoundError: If no element carries *tag_id*.
        EvaluationError: If the generator fails in the page.
    """
    selector = f"[{attribute}='{tag_id}']"
    try:
        result = await page.evaluate(
            _generator_script(generator, multiple),
            {"attribute": attribute, "tagId": str(tag_id)},
        )
    except PlaywrightError as exc:
        raise EvaluationError("generate locator", exc.message) from exc

    if result is None:
        raise SelectorNotFoundError(selector, f"No element tagged with {selector}")

    logger.debug("Selector generator returned %r for %s", result, selector)
    return sanitize_selectors(result) if multiple else pick_selector(result)
