"""
uicov CLI - Inspect the interactive surface of a page.

Provides commands for scanning a page for interactive elements and for
creating a configuration file.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
import typer
from playwright.sync_api import Error as PlaywrightError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from uicov.config import CoverageConfig, CoverageConfigLoader
from uicov.errors import ConfigurationError, NavigationError
from uicov.reporting.console import print_elements
from uicov.session import CoverageSession

if TYPE_CHECKING:
    from playwright.sync_api import Page

app = typer.Typer(
    name="uicov",
    help="UI interaction coverage for browser-driven tests",
    add_completion=False,
)

console = Console()


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure structlog for CLI output."""
    log_level = "DEBUG" if debug else "INFO" if verbose else "WARNING"

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        from uicov import __version__

        console.print(f"[bold blue]uicov[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """uicov - UI interaction coverage for browser-driven tests."""
    pass


@contextmanager
def open_page(headless: bool, config: CoverageConfig) -> Iterator[Page]:
    """Launch Chromium and yield a fresh page; everything is closed on exit."""
    from playwright.sync_api import sync_playwright

    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(headless=headless)
        try:
            context = browser.new_context()
            context.set_default_navigation_timeout(config.navigation_timeout_ms)
            context.set_default_timeout(config.action_timeout_ms)
            yield context.new_page()
        finally:
            browser.close()


@app.command()
def scan(
    url: str = typer.Argument(..., help="URL of the page to scan"),
    headless: bool = typer.Option(True, "--headless/--headed", help="Run the browser headless"),
    output: str = typer.Option(None, "--output", "-o", help="Write the HTML report to this path"),
    config_path: str = typer.Option(None, "--config", "-c", help="YAML configuration file"),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Verbose output"),
) -> None:
    """
    Scan a page and list its interactive elements.

    Every element found is reported as uncovered: nothing is exercised by a
    scan alone. Use this to check what the scanner sees before writing tests.
    """
    configure_logging(verbose=verbose)

    try:
        config = CoverageConfigLoader.from_yaml(config_path) if config_path else CoverageConfig()
    except (FileNotFoundError, ConfigurationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    config = config.model_copy(
        update={
            "console_report": False,
            "html_report": output is not None,
            "report_path": output or config.report_path,
            "settle_after_navigation_ms": 0,
        }
    )

    console.print(
        Panel(
            f"[bold]Scanning:[/bold] {url}",
            title="uicov scan",
            border_style="blue",
        )
    )

    session = CoverageSession(config, console=console)
    try:
        with open_page(headless, config) as page:
            result = session.track(page).navigate(url, url)
    except (NavigationError, PlaywrightError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    if not result.ok:
        console.print(f"[red]Error:[/red] Scan failed: {result.error}")
        raise typer.Exit(1)

    print_elements(session.report(), console)
    console.print(f"\n[bold]Found {result.count} interactive element(s)[/bold]")

    if output:
        written = session.finish()
        if written is None:
            console.print(f"[red]Error:[/red] Could not write report to {output}")
            raise typer.Exit(1)
        console.print(f"[green]✓[/green] HTML report written to: {written}")


@app.command()
def init(
    path: str = typer.Argument(".", help="Directory to create uicov.yaml in"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Create a uicov.yaml with default settings."""
    target_path = Path(path)
    config_file = target_path / "uicov.yaml"

    if config_file.exists() and not force:
        console.print(f"[yellow]Config file already exists:[/yellow] {config_file}")
        console.print("[dim]Use --force to overwrite[/dim]")
        raise typer.Exit(1)

    target_path.mkdir(parents=True, exist_ok=True)
    config_file.write_text(CoverageConfigLoader.generate_sample_config(), encoding="utf-8")

    console.print(f"[green]✓[/green] Created configuration: {config_file}")
    console.print("\n[bold]Next steps:[/bold]")
    console.print("  1. Run [cyan]uicov scan <url>[/cyan] to see what gets discovered")
    console.print("  2. Run [cyan]pytest --uicov-config uicov.yaml[/cyan] with the tracked_page fixture")


if __name__ == "__main__":
    app()
