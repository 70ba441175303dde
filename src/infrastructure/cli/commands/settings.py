"""Manage stored API keys."""

from __future__ import annotations

import asyncio

import typer
from rich.markup import escape
from rich.table import Table

from src.application.dto.settings import ApiKeys
from src.domain.errors import ToolboxError
from src.infrastructure.bootstrap import build_service
from src.infrastructure.cli.common import CONFIG_OPTION_HELP, console, fail, start_command

app = typer.Typer(help="Show, edit, export and import API keys")


def mask_secret(value: str) -> str:
    """Keep the first and last four characters of long keys, hide the rest."""
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}…{value[-4:]}"


@app.command()
def show(
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """List every provider and whether a key is stored (values masked)."""
    settings = start_command(config_path, verbose)
    service = build_service(settings)
    try:
        user_settings = asyncio.run(service.load_settings())
    except ToolboxError as e:
        fail(str(e))

    keys = user_settings.api_keys or ApiKeys()
    table = Table(title=f"API keys ({settings.paths.settings_file})", show_header=True, header_style="bold")
    table.add_column("Provider", style="cyan")
    table.add_column("Key")
    for provider in ApiKeys.provider_names():
        value = keys.get(provider)
        table.add_row(provider, escape(mask_secret(value)) if value else "[dim]not set[/dim]")
    console.print(table)


@app.command("set-key")
def set_key(
    provider: str = typer.Argument(..., help=f"One of: {', '.join(ApiKeys.provider_names())}"),
    value: str = typer.Argument("", help="Key value; empty removes the key"),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Store or remove one provider key."""
    settings = start_command(config_path, verbose)
    service = build_service(settings)
    try:
        asyncio.run(service.set_api_key(provider, value))
    except ToolboxError as e:
        fail(str(e))

    action = "saved" if value.strip() else "removed"
    console.print(f"[green]✓ {escape(provider)} key {action}[/green]")


@app.command("export")
def export_keys(
    path: str = typer.Argument(..., help="JSON file to write"),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Write stored keys to a JSON file, e.g. toolbox-api-keys.json."""
    settings = start_command(config_path, verbose)
    service = build_service(settings)
    try:
        count = asyncio.run(service.export_api_keys(path))
    except ToolboxError as e:
        fail(str(e))
    console.print(f"[green]✓ Exported {count} key(s) to {escape(path)}[/green]")


@app.command("import")
def import_keys(
    path: str = typer.Argument(..., help="JSON file produced by export"),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Replace stored keys with the ones in a JSON file."""
    settings = start_command(config_path, verbose)
    service = build_service(settings)
    try:
        imported = asyncio.run(service.import_api_keys(path))
    except ToolboxError as e:
        fail(str(e))
    count = len(imported.api_keys.to_json_dict()) if imported.api_keys else 0
    console.print(f"[green]✓ Imported {count} key(s)[/green]")
