"""Validate environment and configuration for the toolbox."""

from __future__ import annotations

import logging
from typing import Any

import typer
from rich.markup import escape
from rich.table import Table

from src.application.dto.settings import UserSettings
from src.application.use_cases.manage_settings import resolve_replicate_credential
from src.domain.errors import ToolboxError
from src.infrastructure.adapters.json_settings_store import JsonSettingsStore
from src.infrastructure.adapters.subprocess_launcher import SubprocessLauncherAdapter
from src.infrastructure.cli.common import CONFIG_OPTION_HELP, console, start_command
from src.infrastructure.config.environment import get_optional_api_key
from src.infrastructure.config.settings import Settings

app = typer.Typer(help="Validate environment and configuration")
logger = logging.getLogger(__name__)


def _check_ffmpeg(settings: Settings) -> dict[str, Any]:
    launcher = SubprocessLauncherAdapter(binary=settings.ffmpeg.binary)
    try:
        version = launcher.version()
    except ToolboxError as e:
        return {"check": "ffmpeg", "status": "FAIL", "message": str(e)}
    return {"check": "ffmpeg", "status": "PASS", "message": version}


def _check_settings_file(settings: Settings) -> tuple[dict[str, Any], UserSettings | None]:
    path = settings.paths.settings_file
    store = JsonSettingsStore(path)
    try:
        user_settings = store.load()
    except ToolboxError as e:
        return {"check": "Settings file", "status": "FAIL", "message": str(e)}, None

    if not path.exists():
        message = f"{path} not created yet (defaults in use)"
    else:
        message = str(path)
    return {"check": "Settings file", "status": "PASS", "message": message}, user_settings


def _check_replicate_key(user_settings: UserSettings | None) -> dict[str, Any]:
    credential = resolve_replicate_credential(
        user_settings or UserSettings(),
        environment_token=get_optional_api_key("REPLICATE_API_TOKEN"),
    )
    if credential is None:
        return {
            "check": "Replicate key",
            "status": "WARN",
            "message": "not set; `predict run` needs --api-key",
        }
    return {"check": "Replicate key", "status": "PASS", "message": "configured"}


@app.command()
def run(
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """
    Validate system configuration.

    Checks:
    - ffmpeg can be found and started
    - The settings file is readable
    - A Replicate API key is available (warning only)

    Examples:
        toolbox validate run
    """
    settings = start_command(config_path, verbose)

    results: list[dict[str, Any]] = [_check_ffmpeg(settings)]
    settings_result, user_settings = _check_settings_file(settings)
    results.append(settings_result)
    results.append(_check_replicate_key(user_settings))

    for result in results:
        logger.debug(
            "Validation check finished",
            extra={"check": result["check"], "status": result["status"]},
        )

    _display_results_table(results)

    if any(r["status"] in ("FAIL", "ERROR") for r in results):
        console.print("\n[red]✗ Some validation checks failed. See details above.[/red]")
        raise typer.Exit(1)
    console.print("\n[green]✓ All validation checks passed![/green]")


def _display_results_table(results: list[dict[str, Any]]) -> None:
    """Display validation results in a formatted table."""
    table = Table(title="Validation Results", show_header=True, header_style="bold magenta")
    table.add_column("Check", style="cyan", no_wrap=True)
    table.add_column("Status", justify="center")
    table.add_column("Message", style="white")

    for result in results:
        status_style = {
            "PASS": "[green]\\[PASS][/green]",
            "FAIL": "[red]\\[FAIL][/red]",
            "WARN": "[yellow]\\[WARN][/yellow]",
            "ERROR": "[red]\\[ERROR][/red]",
        }.get(result["status"], result["status"])

        table.add_row(result["check"], status_style, escape(result["message"]))

    console.print()
    console.print(table)
