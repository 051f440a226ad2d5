"""Minimal document/element views the tagging heuristic runs against."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable


@runtime_checkable
class ElementView(Protocol):
    """Read-only view of a single element."""

    @property
    def tag_name(self) -> str:
        """Upper-cased tag name (``INPUT``, ``DIV`` …)."""
        ...

    @property
    def class_list(self) -> list[str]: ...

    @property
    def direct_texts(self) -> list[str]:
        """Raw contents of the element's immediate text-node children."""
        ...

    def attribute(self, name: str) -> str | None: ...

    def closest(self, selector: str) -> bool:
        """Return True if the element or one of its ancestors matches *selector*."""
        ...


@runtime_checkable
class DocumentView(Protocol):
    """Document traversal plus the one attribute write the tagger needs."""

    def elements(self) -> Iterable[ElementView]:
        """Yield every element under body in document (pre-)order."""
        ...

    def is_visible(self, element: ElementView) -> bool: ...

    def write_attribute(self, element: ElementView, name: str, value: str) -> None: ...
