"""CLI commands for inspecting and validating pagetools settings."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

settings_app = typer.Typer(help="Inspect and validate pagetools configuration.")
console = Console()


@settings_app.command("show")
def show_settings() -> None:
    """Display the currently resolved settings."""
    from pagetools.settings import get_settings

    settings = get_settings()
    console.print_json(json.dumps(settings.model_dump(mode="json"), indent=2, default=str))


@settings_app.command("validate")
def validate_settings() -> None:
    """Validate settings and report any issues."""
    from pagetools.settings import get_settings

    try:
        settings = get_settings()
        console.print("[green]✓[/green] Settings are valid.")
        console.print(f"  Environment: {settings.env}")
        console.print(f"  Max output length: {settings.tools.max_length}")
        console.print(f"  Tag config: {settings.tagging.config_path or '(not set)'}")
    except Exception as e:
        console.print(f"[red]✗[/red] Settings validation failed: {e}")
        raise typer.Exit(code=1)


@settings_app.command("tag-config")
def check_tag_config(
    path: Optional[Path] = typer.Argument(None, help="Tag config JSON file. Defaults to the configured path."),
) -> None:
    """Load and summarize a tag configuration file."""
    from pagetools.exceptions import ConfigurationError
    from pagetools.settings import get_settings, load_tag_config, load_tag_config_from_settings

    try:
        config = load_tag_config(path) if path else load_tag_config_from_settings(get_settings())
    except ConfigurationError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1)

    table = Table(title="Tag configuration")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("excludedSelectors", ", ".join(config.excluded_selectors) or "-")
    table.add_row("includedSelectors", ", ".join(config.included_selectors) or "-")
    table.add_row("iconClassKeywords", ", ".join(config.icon_class_keywords) or "-")
    table.add_row("specialTagNames", ", ".join(config.special_tag_names) or "-")
    table.add_row("textIgnoreTagNames", ", ".join(config.text_ignore_tag_names) or "-")
    table.add_row("directTextMaxLen", str(config.direct_text_max_len))
    console.print(table)
    console.print("[green]✓[/green] Tag config is valid.")
