"""Models for the tool call surface: arguments in, text blocks out."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ToolArgs(BaseModel):
    """Arguments accepted by the browser tools (camelCase on the wire).

    Each tool reads only the fields it needs; unknown keys are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    max_length: int | None = Field(default=None, alias="maxLength")
    selector: str | None = None
    remove_scripts: bool | None = Field(default=None, alias="removeScripts")
    remove_comments: bool = Field(default=False, alias="removeComments")
    remove_styles: bool = Field(default=False, alias="removeStyles")
    remove_meta: bool = Field(default=False, alias="removeMeta")
    minify: bool = False
    clean_html: bool = Field(default=False, alias="cleanHtml")
    id: str | None = None
    text: str | None = None

    @field_validator("max_length", mode="before")
    @classmethod
    def _numeric_max_length(cls, v: Any) -> Any:
        """Non-numeric or non-finite values fall back to the default limit."""
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        if isinstance(v, float) and not math.isfinite(v):
            return None
        return max(int(v), 0)

    @field_validator("id", "text", mode="before")
    @classmethod
    def _stringify_numbers(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


@dataclass
class ToolResponse:
    """Uniform tool result: one or more text blocks, flagged as error or not."""

    content: list[str] = field(default_factory=list)
    is_error: bool = False

    @property
    def text(self) -> str:
        return "\n".join(self.content)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the ``{"content": [...], "isError": ...}`` wire shape."""
        return {
            "content": [{"type": "text", "text": block} for block in self.content],
            "isError": self.is_error,
        }


def create_success_response(content: str | list[str]) -> ToolResponse:
    blocks = [content] if isinstance(content, str) else list(content)
    return ToolResponse(content=blocks, is_error=False)


def create_error_response(message: str) -> ToolResponse:
    return ToolResponse(content=[message], is_error=True)
