"""Video commands delegated to the external encoder."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.markup import escape

from src.domain.errors import ProcessExitError, ToolboxError
from src.domain.models.transcode import LoopMode, TranscodeOperation, TranscodeParams
from src.domain.services.output_paths import default_output_path
from src.infrastructure.bootstrap import build_service
from src.infrastructure.cli.common import CONFIG_OPTION_HELP, console, err_console, fail, start_command
from src.infrastructure.config.settings import Settings

app = typer.Typer(help="Loop, reverse and re-mix videos with ffmpeg")

# Lines of encoder output shown when a run fails
OUTPUT_TAIL_LINES = 15


def _run(settings: Settings, operation: TranscodeOperation, params: TranscodeParams) -> None:
    service = build_service(settings)
    try:
        asyncio.run(service.run_transcode(operation, params))
    except ProcessExitError as e:
        tail = "\n".join(e.output.strip().splitlines()[-OUTPUT_TAIL_LINES:])
        if tail:
            err_console.print(tail, markup=False, highlight=False)
        fail(str(e))
    except ToolboxError as e:
        fail(str(e))
    console.print(f"[green]✓ Saved {escape(str(params.output_path))}[/green]")


def _output_for(operation: TranscodeOperation, input_path: str, output: str | None) -> str:
    return output or str(default_output_path(operation, input_path))


@app.command()
def loop(
    input_path: str = typer.Argument(..., help="Video to loop"),
    duration: str | None = typer.Option(None, "--duration", "-d", help="Target length, e.g. 03:00:00 or 1:30"),
    loops: int | None = typer.Option(None, "--loops", "-n", help="Number of times to play the video"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output file (default: <name>_loop.<ext>)"),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """
    Loop a video to a target duration or a number of plays.

    Examples:
        toolbox video loop clip.mp4 --duration 03:00:00
        toolbox video loop clip.mp4 --loops 3
    """
    settings = start_command(config_path, verbose)
    if (duration is None) == (loops is None):
        fail("pass exactly one of --duration or --loops")

    mode = LoopMode.DURATION if duration is not None else LoopMode.LOOPS
    params = TranscodeParams(
        input_path=input_path,
        output_path=_output_for(TranscodeOperation.LOOP, input_path, output),
        mode=mode,
        duration=duration,
        loop_count=loops,
    )
    _run(settings, TranscodeOperation.LOOP, params)


@app.command()
def reverse(
    input_path: str = typer.Argument(..., help="Video to play backwards"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output file (default: <name>_reversed.<ext>)"),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Reverse video and audio."""
    settings = start_command(config_path, verbose)
    params = TranscodeParams(
        input_path=input_path,
        output_path=_output_for(TranscodeOperation.REVERSE, input_path, output),
    )
    _run(settings, TranscodeOperation.REVERSE, params)


@app.command("extract-audio")
def extract_audio(
    input_path: str = typer.Argument(..., help="Video to take the sound from"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output WAV file (default: <name>.wav)"),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Save a video's audio track as WAV."""
    settings = start_command(config_path, verbose)
    params = TranscodeParams(
        input_path=input_path,
        output_path=_output_for(TranscodeOperation.EXTRACT_AUDIO, input_path, output),
    )
    _run(settings, TranscodeOperation.EXTRACT_AUDIO, params)


@app.command("overlay-audio")
def overlay_audio(
    video_path: str = typer.Argument(..., help="Video whose picture is kept"),
    audio_path: str = typer.Argument(..., help="Audio file to lay over it"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output file (default: <name>_with_audio.mp4)"),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Replace a video's sound with another audio file, trimmed to the shorter stream."""
    settings = start_command(config_path, verbose)
    if not Path(audio_path).exists():
        fail(f"audio file not found: {audio_path}")
    params = TranscodeParams(
        input_path=video_path,
        output_path=_output_for(TranscodeOperation.OVERLAY_AUDIO, video_path, output),
        audio_path=audio_path,
    )
    _run(settings, TranscodeOperation.OVERLAY_AUDIO, params)
