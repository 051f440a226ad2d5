"""Tool registry — name → tool lookup and dispatch."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from pagetools.models.tools import ToolArgs, ToolResponse, create_error_response
from pagetools.tools.base import BrowserTool, ToolContext
from pagetools.tools.page_tools import (
    ExpectTextTool,
    LocatorTool,
    VisibleHtmlTool,
    VisibleTagTool,
    VisibleTextTool,
)

if TYPE_CHECKING:
    from pagetools.models.tagging import TagConfig
    from pagetools.settings.config import Settings

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Registry of page tools keyed by name."""

    def __init__(self) -> None:
        self._tools: dict[str, BrowserTool] = {}

    def register(self, tool: BrowserTool) -> None:
        if tool.name in self._tools:
            logger.warning("Replacing registered tool %s", tool.name)
        self._tools[tool.name] = tool

    def get(self, name: str) -> BrowserTool | None:
        return self._tools.get(name)

    def has(self, name: str) -> bool:
        return name in self._tools

    @property
    def tool_names(self) -> list[str]:
        return sorted(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    async def dispatch(self, name: str, args: dict[str, Any] | None, context: ToolContext) -> ToolResponse:
        """Validate *args* and run the named tool.

        Unknown tools and malformed arguments produce error responses.
        """
        tool = self._tools.get(name)
        if tool is None:
            return create_error_response(f"Unknown tool: {name}")
        try:
            tool_args = ToolArgs.model_validate(args or {})
        except ValidationError as exc:
            return create_error_response(f"Invalid arguments for {name}: {exc}")

        logger.debug("Dispatching %s", name)
        return await tool.execute(tool_args, context)


def create_default_registry(
    settings: Settings | None = None,
    tag_config: TagConfig | None = None,
) -> ToolRegistry:
    """Build a registry holding every page tool."""
    registry = ToolRegistry()
    registry.register(VisibleTextTool(settings))
    registry.register(VisibleHtmlTool(settings))
    registry.register(VisibleTagTool(settings, tag_config=tag_config))
    registry.register(LocatorTool(settings))
    registry.register(ExpectTextTool(settings))
    return registry
