"""
Web Automation MCP - CLI Entry Point.

Configuration Priority:
    1. CLI arguments (--headless, --browser, etc.)
    2. Environment variables (WEB_AUTOMATION_MCP__BROWSER__HEADLESS, etc.)
    3. Config file (config.yaml)

Usage:
    web-automation-mcp serve
    web-automation-mcp serve --headless --browser firefox
    web-automation-mcp tools
    web-automation-mcp generate session.json --output-dir tests/e2e
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.table import Table

from web_automation_mcp import __version__
from web_automation_mcp.config import load_config
from web_automation_mcp.exceptions import WebAutomationError
from web_automation_mcp.tools.catalog import classify_tool, get_tool_definitions
from web_automation_mcp.tools.codegen import CodegenSession, PlaywrightTestGenerator
from web_automation_mcp.utils.logging import setup_logging

# Create the CLI app
app = typer.Typer(
    name="web-automation-mcp",
    help="Browser and HTTP automation tools over MCP, with pytest code generation",
    add_completion=False,
)

# stdout belongs to the protocol when serving
console = Console(stderr=True)


@app.command()
def serve(
    headless: Optional[bool] = typer.Option(None, "--headless/--visible", help="Browser visibility (default: from config)"),
    browser: Optional[str] = typer.Option(None, "--browser", "-b", help="Browser: chromium, firefox, webkit"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
):
    """
    Run the MCP server on stdin/stdout.
    """
    overrides: Dict[str, Any] = {}
    browser_overrides: Dict[str, Any] = {}
    if headless is not None:
        browser_overrides["headless"] = headless
    if browser:
        browser_overrides["browser_type"] = browser
    if browser_overrides:
        overrides["browser"] = browser_overrides

    try:
        settings = load_config(config_path=config, **overrides)
    except WebAutomationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    level = "DEBUG" if verbose or settings.debug else settings.logging.level
    setup_logging(level, settings.logging.file, settings.logging.json_format)

    from web_automation_mcp.server import WebAutomationServer

    try:
        asyncio.run(WebAutomationServer(settings).run_stdio())
    except KeyboardInterrupt:
        console.print("[yellow]Interrupted[/yellow]")


@app.command()
def tools():
    """
    List the available tools.
    """
    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Description")

    for definition in get_tool_definitions():
        table.add_row(
            definition.name,
            classify_tool(definition.name).value,
            definition.description,
        )

    Console().print(table)


@app.command()
def generate(
    session_file: str = typer.Argument(..., help="Path to a session JSON (as returned by get_codegen_session)"),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", "-o", help="Directory for the generated test"),
    prefix: Optional[str] = typer.Option(None, "--prefix", "-p", help="Test name prefix"),
    no_comments: bool = typer.Option(False, "--no-comments", help="Omit step comments"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
):
    """
    Generate a pytest file from a saved codegen session.
    """
    path = Path(session_file)
    if not path.exists():
        console.print(f"[red]Error: Session file not found: {session_file}[/red]")
        raise typer.Exit(1)

    try:
        settings = load_config(config_path=config)
        session = CodegenSession.from_dict(json.loads(path.read_text(encoding="utf-8")))

        options = session.options.to_dict() if session.options else settings.codegen.model_dump()
        if output_dir:
            options["outputPath"] = output_dir
        if prefix:
            options["testNamePrefix"] = prefix
        if no_comments:
            options["includeComments"] = False

        result = PlaywrightTestGenerator(options).generate(session)
    except (WebAutomationError, ValueError, KeyError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    target = Path(result.file_path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(result.source_text, encoding="utf-8")
    console.print(f"[green]Generated {len(session.actions)} step(s) -> {target}[/green]")


@app.command()
def version():
    """Show version information."""
    Console().print(f"web-automation-mcp v{__version__}")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
