"""Element tagging — stamp visible, labelled elements with sequential identifiers.

The heuristic (``labels``) and the pass (``tagger``) only see the
``DocumentView`` / ``ElementView`` protocols from ``document``.  The
Playwright-backed view lives in ``snapshot``.
"""

from __future__ import annotations

from pagetools.tagging.tagger import tag_document, tag_page

__all__ = ["tag_document", "tag_page"]
