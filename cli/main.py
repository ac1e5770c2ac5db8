"""Blog Insights CLI — run the extraction pipeline from a terminal.

Usage:
    python cli/main.py --help

Commands:
    extract       → fetch a URL and print its article text
    extract-file  → run the same pipeline on a saved HTML file
    prepare       → resolve pasted text or a URL into summariser input
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from insights.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import Optional

import typer

from insights.config import settings
from insights.content import ContentError, prepare_content
from insights.logging_config import configure_logging
from insights.scraper import ExtractedText, ExtractionPipeline, ExtractionPipelineError, is_valid_http_url

app = typer.Typer(
    name="insights",
    help="Blog Insights CLI.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    """Configure logging before any command runs."""
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)


def _echo_result(result: ExtractedText, as_json: bool, label: str) -> None:
    if as_json:
        typer.echo(json.dumps({"title": result.title, "textContent": result.text}))
        return
    typer.echo(f"[{label}] Title  : {result.title or '(none)'}")
    typer.echo(f"[{label}] Chars  : {len(result.text)}")
    typer.echo("")
    typer.echo(result.text)


# ---------------------------------------------------------------------------
# Extraction commands
# ---------------------------------------------------------------------------
@app.command("extract")
def extract(
    url: str = typer.Argument(..., help="Absolute http(s) URL of the page."),
    as_json: bool = typer.Option(False, "--json", help="Print {title, textContent} JSON."),
    max_length: Optional[int] = typer.Option(None, "--max-length", help="Character cap for the text."),
) -> None:
    """Fetch a URL and print the readable article text."""
    if not is_valid_http_url(url):
        typer.echo(f"[extract] Invalid URL {url!r}. Please include http:// or https://", err=True)
        raise typer.Exit(code=1)

    pipeline = ExtractionPipeline(max_length=max_length)
    try:
        result = pipeline.run(url)
    except ExtractionPipelineError as exc:
        typer.echo(f"[extract] Failed ({exc.kind}): {exc}", err=True)
        raise typer.Exit(code=1)
    _echo_result(result, as_json, "extract")


@app.command("extract-file")
def extract_file(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Saved HTML file."),
    base_url: str = typer.Option(..., "--base-url", help="URL the page was saved from."),
    as_json: bool = typer.Option(False, "--json", help="Print {title, textContent} JSON."),
) -> None:
    """Run parse → extract → flatten → normalize on a local HTML file."""
    pipeline = ExtractionPipeline()
    try:
        result = pipeline.extract_html(path.read_bytes(), base_url)
    except ExtractionPipelineError as exc:
        typer.echo(f"[extract-file] Failed ({exc.kind}): {exc}", err=True)
        raise typer.Exit(code=1)
    _echo_result(result, as_json, "extract-file")


@app.command("prepare")
def prepare(
    text: Optional[str] = typer.Option(None, "--text", help="Pasted blog text."),
    url: Optional[str] = typer.Option(None, "--url", help="Blog URL to extract."),
) -> None:
    """Print the text that would be sent to the insight service."""
    try:
        content = prepare_content(text=text, url=url)
    except ContentError as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(code=1)
    except ExtractionPipelineError as exc:
        typer.echo(f"❌ Failed to extract blog: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(content)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
