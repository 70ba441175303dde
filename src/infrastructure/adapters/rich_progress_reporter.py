"""Rich-based progress reporter adapter for batch conversion."""

from __future__ import annotations

import logging
import sys
import time

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from ...application.ports.progress_reporter import ProgressContext, ProgressReporterPort
from ...domain.models.conversion_report import ConversionReport

logger = logging.getLogger(__name__)

# Error panels show at most this many entries
MAX_LISTED_ERRORS = 10


class RichProgressContext:
    """Progress bar for one batch; owns the Rich Progress it renders into."""

    def __init__(self, progress: Progress, task_id: TaskID) -> None:
        self.progress = progress
        self.task_id = task_id
        self.failed = 0

    def advance(self, item_name: str, succeeded: bool) -> None:
        if not succeeded:
            self.failed += 1
        label = f"[cyan]{item_name}[/cyan]" if succeeded else f"[red]{item_name}[/red]"
        self.progress.update(self.task_id, advance=1, description=label)

    def finish(self) -> None:
        status = "[green]Done[/green]" if not self.failed else f"[yellow]Done, {self.failed} failed[/yellow]"
        self.progress.update(self.task_id, description=status)
        self.progress.stop()


class LoggingProgressContext:
    """Fallback progress context for non-interactive mode using logging."""

    def __init__(self, total_items: int, description: str) -> None:
        self.total_items = total_items
        self.description = description
        self.completed = 0
        self.start_time = time.time()
        logger.info(f"Starting: {description} ({total_items} files)")

    def advance(self, item_name: str, succeeded: bool) -> None:
        self.completed += 1
        percentage = (self.completed / self.total_items * 100) if self.total_items else 100.0
        outcome = "ok" if succeeded else "failed"
        logger.info(f"Progress: {self.completed}/{self.total_items} ({percentage:.0f}%) {item_name} {outcome}")

    def finish(self) -> None:
        elapsed = time.time() - self.start_time
        logger.info(f"Completed: {self.description} - {self.completed} files in {elapsed:.1f}s")


class RichProgressReporterAdapter(ProgressReporterPort):
    """Draws a progress bar on a TTY and falls back to log lines otherwise."""

    def __init__(self, console: Console | None = None) -> None:
        self.is_interactive = sys.stdout.isatty()
        self.console = console or Console(file=sys.stdout if self.is_interactive else sys.stderr)

    def start_batch(
        self,
        total_items: int,
        description: str = "Converting files",
    ) -> ProgressContext:
        if not self.is_interactive:
            return LoggingProgressContext(total_items=total_items, description=description)

        progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.console,
            transient=False,
        )
        progress.start()
        task_id = progress.add_task(description, total=total_items)
        return RichProgressContext(progress=progress, task_id=task_id)

    def display_summary(self, report: ConversionReport, title: str = "Conversion Summary") -> None:
        """Print counts as a table and up to MAX_LISTED_ERRORS failures in a panel."""
        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green")
        table.add_row("Converted", str(report.converted_count))
        table.add_row("Failed", str(report.failed_count))
        self.console.print(table)

        if report.errors:
            error_text = "\n".join(f"❌ {e}" for e in report.errors[:MAX_LISTED_ERRORS])
            if len(report.errors) > MAX_LISTED_ERRORS:
                error_text += f"\n... and {len(report.errors) - MAX_LISTED_ERRORS} more errors"
            self.console.print(Panel(error_text, title="Errors", border_style="red"))
