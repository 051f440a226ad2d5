"""pagetools — Playwright page tools for visible content extraction and element tagging."""

from __future__ import annotations

try:
    from importlib.metadata import version

    __version__ = version("pagetools")
except Exception:
    __version__ = "0.0.0"
