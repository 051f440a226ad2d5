"""CLI commands that open a URL and run page tools against it."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional

import typer
from rich.console import Console

from pagetools.models.tools import ToolResponse

page_app = typer.Typer(help="Open a URL in headless Chromium and run a page tool.")
console = Console()


async def _run_tools(url: str, steps: list[tuple[str, dict[str, Any]]]) -> list[ToolResponse]:
    """Open *url* once and dispatch each ``(tool, args)`` step in order.

    Stops at the first error response.
    """
    from pagetools.browser.session import open_session
    from pagetools.settings import get_settings
    from pagetools.tools import create_default_registry

    settings = get_settings()
    registry = create_default_registry(settings)
    responses: list[ToolResponse] = []
    async with open_session(url, settings.browser) as session:
        for name, args in steps:
            response = await registry.dispatch(name, args, session.context())
            responses.append(response)
            if response.is_error:
                break
    return responses


def _emit(response: ToolResponse, as_json: bool) -> None:
    if as_json:
        console.print_json(json.dumps(response.to_dict()))
    elif response.is_error:
        console.print(f"[red]✗[/red] {response.text}")
    else:
        console.print(response.text, markup=False, highlight=False)
    if response.is_error:
        raise typer.Exit(code=1)


def _run(url: str, steps: list[tuple[str, dict[str, Any]]], as_json: bool) -> None:
    from playwright.async_api import Error as PlaywrightError

    try:
        responses = asyncio.run(_run_tools(url, steps))
    except PlaywrightError as e:
        console.print(f"[red]✗[/red] Could not open {url}: {e.message}")
        raise typer.Exit(code=1)
    for response in responses:
        _emit(response, as_json)


@page_app.command("text")
def page_text(
    url: str = typer.Argument(..., help="Page URL."),
    max_length: Optional[int] = typer.Option(None, "--max-length", "-n", help="Truncate output to N characters."),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output the raw tool response as JSON."),
) -> None:
    """Print the page's visible text."""
    args: dict[str, Any] = {} if max_length is None else {"maxLength": max_length}
    _run(url, [("get_visible_text", args)], json_output)


@page_app.command("html")
def page_html(
    url: str = typer.Argument(..., help="Page URL."),
    selector: Optional[str] = typer.Option(None, "--selector", "-s", help="Only this element's outer HTML."),
    keep_scripts: bool = typer.Option(False, "--keep-scripts", help="Do not strip <script> elements."),
    remove_comments: bool = typer.Option(False, "--remove-comments", help="Strip HTML comments."),
    remove_styles: bool = typer.Option(False, "--remove-styles", help="Strip <style> elements."),
    remove_meta: bool = typer.Option(False, "--remove-meta", help="Strip <meta> elements."),
    clean: bool = typer.Option(False, "--clean", help="Strip scripts, styles, meta and comments."),
    minify: bool = typer.Option(False, "--minify", help="Collapse whitespace between tags."),
    max_length: Optional[int] = typer.Option(None, "--max-length", "-n", help="Truncate output to N characters."),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output the raw tool response as JSON."),
) -> None:
    """Print the page (or element) HTML, optionally cleaned."""
    args: dict[str, Any] = {
        "selector": selector,
        "removeScripts": not keep_scripts,
        "removeComments": remove_comments,
        "removeStyles": remove_styles,
        "removeMeta": remove_meta,
        "cleanHtml": clean,
        "minify": minify,
    }
    if max_length is not None:
        args["maxLength"] = max_length
    _run(url, [("get_visible_html", args)], json_output)


@page_app.command("tag")
def page_tag(
    url: str = typer.Argument(..., help="Page URL."),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output the raw tool response as JSON."),
) -> None:
    """Tag visible elements and print ``id:text`` lines."""
    _run(url, [("tag_visible_elements", {})], json_output)


@page_app.command("locator")
def page_locator(
    url: str = typer.Argument(..., help="Page URL."),
    tag_id: str = typer.Option(..., "--id", help="Identifier assigned by the tagging pass."),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output the raw tool responses as JSON."),
) -> None:
    """Tag the page, then print the locator for one tagged element."""
    _run(url, [("tag_visible_elements", {}), ("get_locator", {"id": tag_id})], json_output)


@page_app.command("expect")
def page_expect(
    url: str = typer.Argument(..., help="Page URL."),
    text: str = typer.Argument(..., help="Text expected on the page."),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output the raw tool response as JSON."),
) -> None:
    """Wait for an element containing TEXT."""
    _run(url, [("expect_text", {"text": text})], json_output)
