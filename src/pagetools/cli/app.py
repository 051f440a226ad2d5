"""Unified CLI entry point for pagetools.

Config precedence: settings.default.toml -> settings.local.toml -> env vars (PAGETOOLS_* with double underscores) -> CLI flags.
"""

from __future__ import annotations

import logging
import sys

import typer

from pagetools.cli.page_cmd import page_app
from pagetools.cli.settings_cmd import settings_app

try:
    from importlib.metadata import version

    VERSION = version("pagetools")
except Exception:
    VERSION = "unknown"

APP_HELP = (
    "pagetools — Playwright page tools. "
    "Visible text/HTML extraction, element tagging and locator resolution. "
    "Config precedence: settings.default.toml -> settings.local.toml -> env vars (PAGETOOLS_* with __) -> CLI flags."
)

app = typer.Typer(add_completion=True, help=APP_HELP)

app.add_typer(page_app, name="page")
app.add_typer(settings_app, name="settings")


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for CLI runs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stderr,
    )
    # Quieten noisy libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Show help when no subcommand is provided."""
    if version:
        typer.echo(f"pagetools {VERSION}")
        raise typer.Exit()
    configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


if __name__ == "__main__":
    app()
