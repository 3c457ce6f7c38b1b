"""CLI entrypoint for tocmap."""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError

from tocmap.config import Settings, load_settings
from tocmap.errors import OutlineWriteError, TocMapError
from tocmap.logging import configure_logging, get_logger, lookup_context
from tocmap.outline import write_mindmap
from tocmap.sources import HttpxTransport, JsonTransport, build_fetcher

app = typer.Typer(add_completion=False, help="Save a book's table of contents as a .mm mind map")
logger = get_logger(__name__)


def open_transport(settings: Settings) -> HttpxTransport:
    """Create the HTTP transport; replaced in tests."""

    return HttpxTransport(settings)


def output_path(settings: Settings, identifier: str) -> Path:
    """Mind map path for ``identifier`` under the configured output directory."""

    return settings.output_dir / f"{identifier}{settings.output_extension}"


def lookup_and_write(identifier: str, settings: Settings, transport: JsonTransport) -> Path | None:
    """Fetch the book, then write the mind map.

    Every outcome is reported on stdout; ``None`` means nothing was written.
    """

    fetcher = build_fetcher(settings, transport, notify=typer.echo)
    try:
        lookup = fetcher.fetch(identifier)
    except TocMapError as e:
        typer.echo(f"Error: {e}")
        return None

    if not lookup.record.has_chapters:
        logger.warning("No chapters from any source", extra={"source": lookup.source})
        typer.echo("No Table of Contents found.")
        return None

    path = output_path(settings, identifier)
    try:
        write_mindmap(lookup.record, path)
    except OutlineWriteError as e:
        typer.echo(f"Error writing mindmap: {e}")
        return None

    typer.echo(f"✅ Mindmap saved to {path}")
    return path


@app.command()
def run(
    identifier: str | None = typer.Argument(
        None,
        help="ISBN without hyphens. Prompted for on stdin if omitted.",
        show_default=False,
    ),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for the .mm file (overrides TOCMAP_OUTPUT_DIR)",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (overrides TOCMAP_LOG_LEVEL)",
    ),
) -> None:
    """Look up a book by ISBN and write <ISBN>.mm."""

    try:
        settings = load_settings()
        if output_dir is not None:
            settings.output_dir = output_dir
        if log_level is not None:
            settings.log_level = log_level
    except ValidationError as e:
        typer.echo(f"Error: invalid configuration: {e}")
        return

    configure_logging(settings.log_level)

    if identifier is None:
        try:
            identifier = typer.prompt("Enter ISBN (no hyphens)", default="", show_default=False)
        except typer.Abort:
            # stdin closed before a line was read
            typer.echo("\nError: no ISBN entered")
            return

    with lookup_context(identifier=identifier), open_transport(settings) as transport:
        logger.info("Lookup requested")
        lookup_and_write(identifier, settings, transport)


if __name__ == "__main__":
    app()
