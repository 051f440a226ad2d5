"""Models for the element tagging pass.

``TagConfig`` is the JSON tag configuration (camelCase on disk).
``TagRecord`` and ``TaggingResult`` describe the outcome of a single pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field


class TagConfig(BaseModel):
    """Heuristic configuration for a tagging pass.

    Loaded once per invocation and never mutated while a pass runs.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, strict=True, extra="ignore")

    excluded_selectors: list[str] = Field(
        ...,
        alias="excludedSelectors",
        description="Elements inside (or matching) these selectors never get a direct-text label.",
    )
    icon_class_keywords: list[str] = Field(
        ...,
        alias="iconClassKeywords",
        description="Keywords looked up inside ``icon-*`` class names.",
    )
    special_tag_names: list[str] = Field(
        ...,
        alias="specialTagNames",
        description="Tag names labelled with their own upper-cased name.",
    )
    direct_text_max_len: int = Field(default=10, gt=0, alias="directTextMaxLen")
    included_selectors: list[str] = Field(
        default_factory=list,
        alias="includedSelectors",
        description="When non-empty, direct-text labels only apply inside these selectors.",
    )
    text_ignore_tag_names: list[str] = Field(
        default_factory=list,
        alias="textIgnoreTagNames",
        description="Tag names whose direct text is never used as a label.",
    )

    @property
    def scoped_selectors(self) -> list[str]:
        """Every selector the ancestor-or-self check needs, excluded first."""
        return [*self.excluded_selectors, *self.included_selectors]


@dataclass(frozen=True)
class TagRecord:
    """A single tagged element: its identifier and resolved label."""

    id: str
    text: str

    def render(self) -> str:
        return f"{self.id}:{self.text}"


@dataclass
class TaggingResult:
    """Ordered records produced by one tagging pass."""

    records: list[TagRecord] = field(default_factory=list)
    write_failures: int = 0

    @property
    def count(self) -> int:
        return len(self.records)

    def render(self) -> str:
        """Render records as ``id:text`` lines."""
        return "\n".join(record.render() for record in self.records)

    def to_dict(self) -> dict[str, object]:
        return {
            "count": self.count,
            "records": [{"id": r.id, "text": r.text} for r in self.records],
        }
