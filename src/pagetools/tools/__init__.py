"""Page tools: the call surface over the browser and tagging modules."""

from __future__ import annotations

from pagetools.tools.base import BrowserTool, ToolContext
from pagetools.tools.registry import ToolRegistry, create_default_registry

__all__ = ["BrowserTool", "ToolContext", "ToolRegistry", "create_default_registry"]
