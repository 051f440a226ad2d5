"""Label resolution heuristic for the tagging pass.

Each strategy takes an element and the tag configuration and returns a
label or ``None``.  ``resolve_label`` tries them in ``LABEL_STRATEGIES``
order and stops at the first non-empty label:

1. special tag name        → ``"BUTTON"``
2. placeholder/aria/name   → ``"INPUT:Search"``
3. form-control title/id   → ``"SELECT:country"``
4. icon class keyword      → ``"delete"``
5. direct text fallback    → first direct text child, truncated
"""

from __future__ import annotations

from collections.abc import Callable

from pagetools.models.tagging import TagConfig
from pagetools.tagging.document import ElementView

LabelStrategy = Callable[[ElementView, TagConfig], str | None]

LABEL_ATTRIBUTES: tuple[str, ...] = ("placeholder", "data-placeholder", "aria-label", "name")
FORM_IDENTITY_ATTRIBUTES: tuple[str, ...] = ("title", "id")
FORM_CONTROL_TAGS: frozenset[str] = frozenset({"INPUT", "TEXTAREA", "SELECT"})
ICON_CLASS_PREFIX = "icon-"

# Every attribute any strategy reads; the page snapshot collects exactly these.
READ_ATTRIBUTES: tuple[str, ...] = (*LABEL_ATTRIBUTES, *FORM_IDENTITY_ATTRIBUTES)


def _first_attribute(element: ElementView, names: tuple[str, ...]) -> str | None:
    for name in names:
        value = (element.attribute(name) or "").strip()
        if value:
            return value
    return None


def special_tag_label(element: ElementView, config: TagConfig) -> str | None:
    """Label special tags with their own upper-cased name."""
    tag = element.tag_name.upper()
    if any(tag == name.upper() for name in config.special_tag_names):
        return tag
    return None


def attribute_label(element: ElementView, config: TagConfig) -> str | None:
    """Label from placeholder, data-placeholder, aria-label or name."""
    value = _first_attribute(element, LABEL_ATTRIBUTES)
    return f"{element.tag_name.upper()}:{value}" if value else None


def form_control_label(element: ElementView, config: TagConfig) -> str | None:
    """Label input/textarea/select controls from title, then id."""
    tag = element.tag_name.upper()
    if tag not in FORM_CONTROL_TAGS:
        return None
    value = _first_attribute(element, FORM_IDENTITY_ATTRIBUTES)
    return f"{tag}:{value}" if value else None


def icon_label(element: ElementView, config: TagConfig) -> str | None:
    """Label icon elements with the first keyword found in an ``icon-*`` class."""
    for cls in element.class_list:
        if not cls.startswith(ICON_CLASS_PREFIX):
            continue
        for keyword in config.icon_class_keywords:
            if keyword and keyword in cls:
                return keyword
    return None


def direct_text_label(element: ElementView, config: TagConfig) -> str | None:
    """Fallback label from the element's own text nodes.

    Elements whose tag is text-ignored, that sit inside an excluded
    selector, or that fall outside every included selector (when any are
    configured) get no label.
    """
    tag = element.tag_name.upper()
    if any(tag == name.upper() for name in config.text_ignore_tag_names):
        return None
    if any(element.closest(selector) for selector in config.excluded_selectors):
        return None
    if config.included_selectors and not any(element.closest(s) for s in config.included_selectors):
        return None

    for text in element.direct_texts:
        trimmed = text.strip()
        if trimmed:
            return trimmed[: config.direct_text_max_len]
    return None


LABEL_STRATEGIES: tuple[LabelStrategy, ...] = (
    special_tag_label,
    attribute_label,
    form_control_label,
    icon_label,
    direct_text_label,
)


def resolve_label(element: ElementView, config: TagConfig) -> str | None:
    """Return the first non-empty label produced by ``LABEL_STRATEGIES``."""
    for strategy in LABEL_STRATEGIES:
        label = strategy(element, config)
        if label:
            return label
    return None
