"""pagetools settings package."""

from __future__ import annotations

from pagetools.settings.config import Settings, get_settings
from pagetools.settings.tag_config import load_tag_config, load_tag_config_from_settings

__all__ = ["Settings", "get_settings", "load_tag_config", "load_tag_config_from_settings"]
