"""webscraper CLI: fetch one page and print the elements matching a CSS selector.

Usage:
    python cli/main.py --url https://example.com --selector h1
    webscraper -u https://httpbin.org/html -s h1 -f json

Stages, in order:
    validate  → URL and selector syntax, before any network call
    robots    → robots.txt check (skipped with --ignore-robots)
    wait      → courtesy delay (--delay milliseconds)
    fetch     → one HTTP GET
    extract   → CSS selector over the parsed document
    render    → text or JSON on stdout
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from webscraper.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from cli.rendering import render
from webscraper.config import __version__, settings
from webscraper.scraper.errors import ScraperError
from webscraper.scraper.models import OutputFormat
from webscraper.scraper.pipeline import build_request, scrape

app = typer.Typer(
    name="webscraper",
    help="A flexible web scraper with CSS selector support.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"webscraper {__version__}")
        raise typer.Exit()


@app.command()
def main(
    url: str = typer.Option(..., "--url", "-u", metavar="URL", help="The URL to scrape."),
    selector: str = typer.Option(
        ...,
        "--selector",
        "-s",
        metavar="CSS_SELECTOR",
        help="CSS selector to extract elements (e.g. 'h1', '.price', 'a.link').",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format.",
    ),
    delay: int = typer.Option(
        settings.default_delay_ms,
        "--delay",
        "-d",
        min=0,
        metavar="MILLISECONDS",
        help="Delay before the request in milliseconds.",
    ),
    user_agent: str = typer.Option(
        settings.default_user_agent, "--user-agent", help="Custom User-Agent header."
    ),
    ignore_robots: bool = typer.Option(
        False, "--ignore-robots", help="Ignore robots.txt rules."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only print results, warnings and errors."
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Scrape URL and print every element matching CSS_SELECTOR."""

    def notify(message: str) -> None:
        if not quiet:
            typer.echo(f"[scrape] {message}", err=True)

    def warn(message: str) -> None:
        typer.echo(f"Warning: {message}", err=True)

    try:
        request = build_request(
            url,
            selector,
            output_format=output_format,
            delay_ms=delay,
            user_agent=user_agent,
            ignore_robots=ignore_robots,
        )
        result = scrape(request, notify=notify, warn=warn)
    except ScraperError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=exc.exit_code)

    typer.echo(render(result, request.output_format))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
