"""Run a prediction job on the remote inference API."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer

from src.application.use_cases.manage_settings import resolve_replicate_credential
from src.domain.errors import ToolboxError
from src.domain.models.job import JobRequest, JobResult
from src.infrastructure.bootstrap import build_predictions_client, build_service
from src.infrastructure.cli.common import CONFIG_OPTION_HELP, console, fail, start_command
from src.infrastructure.config.environment import get_optional_api_key
from src.infrastructure.config.settings import Settings

app = typer.Typer(help="Run predictions on the Replicate API")


def _parse_input(raw: str) -> object:
    """Accept inline JSON or @path/to/file.json."""
    if raw.startswith("@"):
        path = Path(raw[1:])
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            fail(f"cannot read input file {path}: {e}")
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        fail(f"--input is not valid JSON: {e}")


async def _run_prediction(settings: Settings, request: JobRequest) -> JobResult:
    async with build_predictions_client(settings) as client:
        service = build_service(settings, job_api=client)
        return await service.run_job(request)


@app.command()
def run(
    model: str = typer.Option(..., "--model", "-m", help="Model version identifier"),
    input_json: str = typer.Option("{}", "--input", "-i", help="Input as JSON, or @file.json"),
    api_key: str | None = typer.Option(None, "--api-key", help="Token (default: stored Replicate key, then $REPLICATE_API_TOKEN)"),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """
    Submit a prediction, wait for it to finish and print its output as JSON.

    Polls once per second with no overall timeout; press Ctrl+C to give up.

    Examples:
        toolbox predict run -m 5c7d5dc6dd8b... -i '{"image": "https://..."}'
    """
    settings = start_command(config_path, verbose)
    payload = _parse_input(input_json)

    service = build_service(settings)
    try:
        user_settings = asyncio.run(service.load_settings())
    except ToolboxError as e:
        fail(str(e))

    credential = resolve_replicate_credential(
        user_settings,
        explicit=api_key,
        environment_token=get_optional_api_key("REPLICATE_API_TOKEN"),
    )
    if credential is None:
        fail("no Replicate API key; run `toolbox settings set-key Replicate <key>` or pass --api-key")

    request = JobRequest(target_identifier=model, payload=payload, credential=credential)
    try:
        with console.status("Waiting for prediction…"):
            result = asyncio.run(_run_prediction(settings, request))
    except ToolboxError as e:
        fail(str(e))

    console.print_json(json.dumps(result.output, ensure_ascii=False))
