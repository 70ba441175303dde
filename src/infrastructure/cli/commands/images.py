"""Batch and single-file image conversion commands."""

from __future__ import annotations

import asyncio

import typer
from rich.markup import escape

from src.domain.errors import ToolboxError
from src.infrastructure.adapters.rich_progress_reporter import RichProgressReporterAdapter
from src.infrastructure.bootstrap import build_service
from src.infrastructure.cli.common import CONFIG_OPTION_HELP, console, fail, start_command

app = typer.Typer(help="Convert and clean up images")


@app.command()
def convert(
    directory: str = typer.Argument(..., help="Directory holding the images to convert"),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """
    Convert every source image in a directory (WebP → PNG by default).

    Failed files are listed in the summary; they do not stop the batch.

    Examples:
        toolbox images convert ~/Downloads/stickers
    """
    settings = start_command(config_path, verbose)
    service = build_service(settings)
    reporter = RichProgressReporterAdapter(console=console)

    try:
        report = asyncio.run(service.convert_all(directory, progress_reporter=reporter))
    except ToolboxError as e:
        fail(str(e))

    if report.examined_count == 0:
        console.print(f"[yellow]No .{settings.images.source_extension} files found in {escape(directory)}[/yellow]")
        return

    reporter.display_summary(report)
    if report.failed_count:
        raise typer.Exit(1)


@app.command("convert-file")
def convert_file(
    file_path: str = typer.Argument(..., help="Image file to convert"),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Convert a single image and print the path of the new file."""
    settings = start_command(config_path, verbose)
    service = build_service(settings)

    try:
        target = asyncio.run(service.convert_one(file_path))
    except ToolboxError as e:
        fail(str(e))

    console.print(f"[green]✓[/green] {escape(str(target))}")


@app.command()
def clean(
    directory: str = typer.Argument(..., help="Directory to clean"),
    extension: str | None = typer.Option(None, "--extension", "-e", help="Extension to delete (defaults to the source format, webp)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """
    Delete every file with the given extension in a directory.

    Stops at the first file that cannot be deleted; files removed before it stay removed.
    """
    settings = start_command(config_path, verbose)
    service = build_service(settings)
    ext = extension or settings.images.source_extension

    if not yes:
        typer.confirm(f"Delete all .{ext.lstrip('.')} files in {directory}?", abort=True)

    try:
        deleted = asyncio.run(service.delete_all_matching(directory, ext))
    except ToolboxError as e:
        fail(str(e))

    console.print(f"[green]✓ Deleted {deleted} file(s)[/green]")
