"""Tagging pass — stamp visible, labelled elements with sequential identifiers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pagetools.models.tagging import TagConfig, TaggingResult, TagRecord
from pagetools.tagging.document import DocumentView
from pagetools.tagging.labels import resolve_label
from pagetools.tagging.snapshot import capture_document, flush_writes

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)

DEFAULT_TAG_ATTRIBUTE = "data-tag-id"


def tag_document(
    document: DocumentView,
    config: TagConfig,
    *,
    attribute: str = DEFAULT_TAG_ATTRIBUTE,
) -> TaggingResult:
    """Run one tagging pass over *document*.

    Visible elements are visited in document order; each one that resolves
    a label gets the next identifier (``"1"``, ``"2"``, …) written to
    *attribute* and a ``TagRecord`` in the result.  Invisible elements are
    skipped, but their descendants are still visited.

    A failed attribute write is logged and counted; the record is kept.

    Args:
        document: The document to walk.
        config: Heuristic configuration for this pass.
        attribute: Name of the identifier attribute.

    Returns:
        The ordered ``TaggingResult``.
    """
    result = TaggingResult()
    counter = 1

    for element in document.elements():
        if not document.is_visible(element):
            continue

        label = resolve_label(element, config)
        if not label:
            continue

        tag_id = str(counter)
        counter += 1
        try:
            document.write_attribute(element, attribute, tag_id)
        except Exception as e:
            logger.debug("Could not write %s=%s on <%s>: %s", attribute, tag_id, element.tag_name, e)
            result.write_failures += 1

        result.records.append(TagRecord(id=tag_id, text=label))

    return result


async def tag_page(
    page: Page,
    config: TagConfig,
    *,
    attribute: str = DEFAULT_TAG_ATTRIBUTE,
) -> TaggingResult:
    """Tag the visible elements of a live Playwright page.

    Raises:
        EvaluationError: If the in-page snapshot fails.
    """
    document = await capture_document(page, config)
    result = tag_document(document, config, attribute=attribute)
    result.write_failures += await flush_writes(page, document)
    logger.info("Tagged %d elements with %s", result.count, attribute)
    return result
