"""linkscout CLI — entry-point for all scraper operations.

Usage:
    python cli/main.py --help

Commands:
    scrape    → fetch a listing page, classify links, fetch whitepaper text
    links     → classify the links of a local HTML file
    document  → fetch one document URL and print its normalised text
    serve     → run the HTTP API with uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from linkscout.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import Optional

import typer

from linkscout.config import settings
from linkscout.log import configure_logging

app = typer.Typer(
    name="linkscout",
    help="Classify the outbound links of a cryptocurrency listing page.",
    no_args_is_help=True,
)

EXIT_FETCH_FAILED = 1
EXIT_MISSING_FIELDS = 2


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="DEBUG | INFO | WARNING | ERROR."),
    json_logs: bool = typer.Option(settings.log_json, "--json-logs/--console-logs", help="Log format."),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(log_level, json_logs)


def _echo_json(data: dict) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Scrape commands
# ---------------------------------------------------------------------------
@app.command("scrape")
def scrape(
    url: str = typer.Option(..., help="Listing page URL."),
    text: Optional[bool] = typer.Option(None, "--text/--no-text", help="Fetch the whitepaper text."),
) -> None:
    """Scrape a listing page and print the classified links as JSON."""
    from linkscout.errors import PageFetchError
    from linkscout.pipeline import scrape_listing

    try:
        report = scrape_listing(url, include_text=text)
    except PageFetchError as exc:
        typer.echo(f"[scrape] {exc}", err=True)
        raise typer.Exit(code=EXIT_FETCH_FAILED)

    if report.missing:
        typer.echo(f"[scrape] Missing required links: {', '.join(report.missing)}", err=True)
        _echo_json({"missing": report.missing, "data": report.links_dict()})
        raise typer.Exit(code=EXIT_MISSING_FIELDS)

    _echo_json(report.to_dict())


@app.command("links")
def links(
    file: Path = typer.Option(..., "--file", exists=True, dir_okay=False, help="Local HTML file."),
    page_url: str = typer.Option(..., "--page-url", help="URL the HTML was served from."),
) -> None:
    """Classify the links of a saved HTML page without any network access."""
    from linkscout.scraper.extractor import extract_links
    from linkscout.scraper.rules import rules_from_settings

    html = file.read_text(encoding="utf-8", errors="replace")
    result = extract_links(html, page_url, rules_from_settings(settings.excluded_domains))
    _echo_json(result.to_dict())


@app.command("document")
def document(
    url: str = typer.Option(..., help="Whitepaper / document URL (HTML or PDF)."),
) -> None:
    """Fetch a document and print its normalised plain text."""
    from linkscout.scraper.document import fetch_document_text

    text = fetch_document_text(url)
    if text is None:
        typer.echo(f"[document] No text could be extracted from {url!r}.", err=True)
        raise typer.Exit(code=1)
    typer.echo(text)


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address."),
    port: int = typer.Option(3000, help="Bind port."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("linkscout.api.app:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
