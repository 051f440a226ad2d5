"""Configuration loader for pagetools using Pydantic settings.

Config precedence (highest wins):
  1. CLI flags (where applicable)
  2. Environment variables (PAGETOOLS_* with __ for nesting)
  3. settings.local.toml
  4. settings.<env>.toml
  5. settings.default.toml
"""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

_THIS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = Path(os.getenv("PAGETOOLS_PROJECT_ROOT", _THIS_DIR.parents[2]))
CONFIG_DIR = PROJECT_ROOT / "config"

ENV_VAR_NAME = "PAGETOOLS_ENV"
DEFAULT_ENV = "local"


def _resolve_env() -> str:
    return (os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()


def _load_toml(path: Path) -> dict[str, Any]:
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class ToolSettings(BaseSettings):
    """Defaults applied by the browser tools when a call omits them."""

    model_config = SettingsConfigDict(env_prefix="PAGETOOLS_TOOLS__")

    max_length: int = Field(default=20_000, gt=0)
    expect_timeout_ms: int = 30_000
    locator_multiple: bool = True


class TaggingSettings(BaseSettings):
    """Element tagging configuration.

    ``config_path`` points at the JSON tag configuration file (excluded
    selectors, icon keywords, special tag names).  It is normally supplied
    through ``PAGETOOLS_TAGGING__CONFIG_PATH``.
    """

    model_config = SettingsConfigDict(env_prefix="PAGETOOLS_TAGGING__")

    config_path: str = ""
    attribute: str = "data-tag-id"
    selector_generator: str = "ijs.generateSelector"


class BrowserSettings(BaseSettings):
    """Playwright browser settings used by the CLI host."""

    model_config = SettingsConfigDict(env_prefix="PAGETOOLS_BROWSER__")

    headless: bool = True
    timeout_ms: int = 30_000
    wait_until: Literal["commit", "domcontentloaded", "load", "networkidle"] = "load"
    user_agent: str = ""


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Root pagetools settings with nested sections."""

    model_config = SettingsConfigDict(
        env_prefix="PAGETOOLS_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    env: str = Field(default_factory=_resolve_env)
    project_root: Path = Field(default=PROJECT_ROOT)

    tools: ToolSettings = Field(default_factory=ToolSettings)
    tagging: TaggingSettings = Field(default_factory=TaggingSettings)
    browser: BrowserSettings = Field(default_factory=BrowserSettings)

    @model_validator(mode="before")
    @classmethod
    def _merge_toml_files(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Layer TOML config files before env var overrides."""
        defaults = _load_toml(CONFIG_DIR / "settings.default.toml")
        env_name = (values.get("env") or os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()
        env_overrides = _load_toml(CONFIG_DIR / f"settings.{env_name}.toml")
        local_overrides = _load_toml(CONFIG_DIR / "settings.local.toml")

        # Merge: defaults < env-specific < local < explicit values
        merged: dict[str, Any] = {}
        for layer in (defaults, env_overrides, local_overrides, values):
            for key, val in layer.items():
                if isinstance(val, dict) and isinstance(merged.get(key), dict):
                    merged[key] = {**merged[key], **val}
                else:
                    merged[key] = val
        return merged

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        """Normalize a relative tag config path against project_root."""
        path = self.tagging.config_path
        if path and not Path(path).is_absolute():
            self.tagging.config_path = str(self.project_root / path)
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton settings instance (cached)."""
    return Settings()
