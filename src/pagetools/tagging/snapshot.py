"""Playwright-backed document view for the tagging pass.

The page is read once: an in-page tree walk returns one JSON snapshot per
element (tag, the attributes the heuristic reads, classes, direct text,
layout/style facts and which scoped selectors match ancestor-or-self).
The heuristic runs in Python over those snapshots, and the resulting
attribute writes are flushed back into the page in a single evaluation.

The scoped-selector check calls ``closest()`` for every selector on every
element, i.e. O(elements x selectors x depth).  That is fine at page scale.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from playwright.async_api import Error as PlaywrightError
from pydantic import BaseModel, Field, ValidationError

from pagetools.exceptions import ConfigurationError, EvaluationError
from pagetools.models.tagging import TagConfig
from pagetools.tagging.labels import READ_ATTRIBUTES
from pagetools.tagging.visibility import is_visible

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)

# Walks every element under body in document order.  The element handles are
# parked on ``window`` so the stamping script can address them by index.
_SNAPSHOT_JS = """
({ attributeNames, selectors }) => {
    const scratch = document.createDocumentFragment();
    const invalidSelectors = selectors.filter((sel) => {
        try {
            scratch.querySelector(sel);
            return false;
        } catch (e) {
            return true;
        }
    });
    if (invalidSelectors.length) return { invalidSelectors };
    const root = document.body;
    const nodes = [];
    const snapshots = [];
    if (!root) {
        window.__pagetoolsTagNodes = nodes;
        return snapshots;
    }
    const walker = document.createTreeWalker(root, NodeFilter.SHOW_ELEMENT);
    let el;
    while ((el = walker.nextNode())) {
        const style = window.getComputedStyle(el);
        const attributes = {};
        for (const name of attributeNames) {
            const value = el.getAttribute(name);
            if (value !== null) attributes[name] = value;
        }
        const texts = [];
        for (const child of el.childNodes) {
            if (child.nodeType === Node.TEXT_NODE && child.textContent) {
                texts.push(child.textContent);
            }
        }
        snapshots.push({
            index: nodes.length,
            tag: el.tagName,
            attributes,
            classes: Array.from(el.classList),
            texts,
            rect_count: el.getClientRects().length,
            display: style.display,
            visibility: style.visibility,
            opacity: style.opacity,
            matched_selectors: selectors.filter((sel) => el.closest(sel) !== null),
        });
        nodes.push(el);
    }
    window.__pagetoolsTagNodes = nodes;
    return snapshots;
}
"""

# Applies queued writes; per-element failures are counted, never thrown.
_STAMP_JS = """
(stamps) => {
    const nodes = window.__pagetoolsTagNodes || [];
    let failed = 0;
    for (const [index, name, value] of stamps) {
        try {
            nodes[index].setAttribute(name, value);
        } catch (e) {
            failed++;
        }
    }
    delete window.__pagetoolsTagNodes;
    return failed;
}
"""


class ElementSnapshot(BaseModel):
    """One element as captured by ``_SNAPSHOT_JS``."""

    index: int
    tag: str
    attributes: dict[str, str] = Field(default_factory=dict)
    classes: list[str] = Field(default_factory=list)
    texts: list[str] = Field(default_factory=list)
    rect_count: int = 0
    display: str = ""
    visibility: str = ""
    opacity: str = "1"
    matched_selectors: list[str] = Field(default_factory=list)

    @property
    def tag_name(self) -> str:
        return self.tag.upper()

    @property
    def class_list(self) -> list[str]:
        return self.classes

    @property
    def direct_texts(self) -> list[str]:
        return self.texts

    def attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def closest(self, selector: str) -> bool:
        # Only selectors passed to the snapshot script are known; anything
        # else is reported as not matching.
        return selector in self.matched_selectors


class SnapshotDocument:
    """``DocumentView`` over captured element snapshots.

    Attribute writes are queued in ``pending_writes`` as
    ``(index, name, value)`` tuples until :func:`flush_writes` runs.
    """

    def __init__(self, snapshots: list[ElementSnapshot]) -> None:
        self._snapshots = snapshots
        self.pending_writes: list[tuple[int, str, str]] = []

    @classmethod
    def from_raw(cls, raw: Any) -> SnapshotDocument:
        """Build a document from the raw ``_SNAPSHOT_JS`` payload.

        Raises:
            EvaluationError: If the payload is not a list of snapshots.
        """
        if not isinstance(raw, list):
            raise EvaluationError("tag visible elements", f"unexpected snapshot payload {type(raw).__name__}")
        try:
            return cls([ElementSnapshot.model_validate(item) for item in raw])
        except ValidationError as exc:
            raise EvaluationError("tag visible elements", str(exc)) from exc

    def __len__(self) -> int:
        return len(self._snapshots)

    def elements(self) -> Iterator[ElementSnapshot]:
        return iter(self._snapshots)

    def is_visible(self, element: ElementSnapshot) -> bool:
        return is_visible(element.rect_count, element.display, element.visibility, element.opacity)

    def write_attribute(self, element: ElementSnapshot, name: str, value: str) -> None:
        self.pending_writes.append((element.index, name, value))


async def capture_document(page: Page, config: TagConfig) -> SnapshotDocument:
    """Snapshot every element under the page body.

    Raises:
        ConfigurationError: If a scoped selector is not valid CSS.
        EvaluationError: If the in-page walk fails or returns garbage.
    """
    try:
        raw = await page.evaluate(
            _SNAPSHOT_JS,
            {"attributeNames": list(READ_ATTRIBUTES), "selectors": config.scoped_selectors},
        )
    except PlaywrightError as exc:
        raise EvaluationError("tag visible elements", exc.message) from exc

    if isinstance(raw, dict) and raw.get("invalidSelectors"):
        invalid = ", ".join(str(sel) for sel in raw["invalidSelectors"])
        raise ConfigurationError(f"Invalid selectors in tag config: {invalid}")

    document = SnapshotDocument.from_raw(raw)
    logger.debug("Captured %d element snapshots", len(document))
    return document


async def flush_writes(page: Page, document: SnapshotDocument) -> int:
    """Apply queued attribute writes in the page.

    Returns the number of writes that failed in the page; failures are
    logged and counted, never raised.
    """
    if not document.pending_writes:
        return 0

    stamps = [[index, name, value] for index, name, value in document.pending_writes]
    document.pending_writes.clear()
    try:
        failed = int(await page.evaluate(_STAMP_JS, stamps) or 0)
    except PlaywrightError as exc:
        logger.debug("Stamping %d elements failed: %s", len(stamps), exc.message)
        return len(stamps)

    if failed:
        logger.debug("%d of %d attribute writes failed", failed, len(stamps))
    return failed
