"""Helpers shared by CLI commands."""

from __future__ import annotations

import logging
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from ..config.settings import ConfigError, Settings
from ..logging import configure_logging, set_correlation_id

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

CONFIG_OPTION_HELP = "Path to toolbox.toml configuration file (defaults to $TOOLBOX_CONFIG or toolbox.toml)"


def fail(message: str) -> NoReturn:
    """Print a one-line error and exit with code 1."""
    err_console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(1)


def start_command(config_path: str | None, verbose: bool = False) -> Settings:
    """
    Configure logging, open a correlation scope and load configuration.

    Logs stay at WARNING unless verbose, so command output remains readable.
    """
    configure_logging(logging.DEBUG if verbose else logging.WARNING, verbose=verbose)
    set_correlation_id()
    try:
        return Settings.from_toml(config_path)
    except ConfigError as e:
        fail(str(e))
