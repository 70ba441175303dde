"""Argument lists for the encoder, one builder per video operation."""

from __future__ import annotations

from pathlib import Path

from ...domain.errors import InvalidParams
from ...domain.models.transcode import LoopMode, TranscodeOperation, TranscodeParams

# Common leading flags: quiet banner, overwrite the output without prompting
BASE_ARGS = ["-hide_banner", "-y"]


def validate_params(operation: TranscodeOperation, params: TranscodeParams) -> None:
    """
    Check operation-specific parameters.

    Raises:
        InvalidParams: If a required parameter is missing or out of range
    """
    name = operation.value
    if not params.input_path or not params.input_path.strip():
        raise InvalidParams(name, "input path is required")
    if not params.output_path or not params.output_path.strip():
        raise InvalidParams(name, "output path is required")
    if Path(params.output_path).resolve() == Path(params.input_path).resolve():
        raise InvalidParams(name, "output path must differ from the input path")

    if operation is TranscodeOperation.LOOP:
        if params.mode is None:
            raise InvalidParams(name, "loop mode is required (duration or loops)")
        if params.mode is LoopMode.DURATION:
            if not params.duration or not params.duration.strip():
                raise InvalidParams(name, "duration is required, e.g. 03:00:00 or 1:30")
        elif params.loop_count is None or params.loop_count < 1:
            raise InvalidParams(name, "loop count must be at least 1")
    elif operation is TranscodeOperation.OVERLAY_AUDIO:
        if not params.audio_path or not params.audio_path.strip():
            raise InvalidParams(name, "audio path is required")


def build_args(operation: TranscodeOperation, params: TranscodeParams) -> list[str]:
    """Validate params and return the encoder arguments, binary excluded."""
    validate_params(operation, params)

    if operation is TranscodeOperation.LOOP:
        if params.mode is LoopMode.DURATION:
            return [
                *BASE_ARGS,
                "-stream_loop", "-1",
                "-i", params.input_path,
                "-t", params.duration.strip(),  # type: ignore[union-attr]
                "-c", "copy",
                params.output_path,
            ]
        # -stream_loop counts extra repetitions on top of the first play
        return [
            *BASE_ARGS,
            "-stream_loop", str(params.loop_count - 1),  # type: ignore[operator]
            "-i", params.input_path,
            "-c", "copy",
            params.output_path,
        ]

    if operation is TranscodeOperation.REVERSE:
        return [
            *BASE_ARGS,
            "-i", params.input_path,
            "-vf", "reverse",
            "-af", "areverse",
            params.output_path,
        ]

    if operation is TranscodeOperation.EXTRACT_AUDIO:
        return [
            *BASE_ARGS,
            "-i", params.input_path,
            "-vn",
            "-acodec", "pcm_s16le",
            params.output_path,
        ]

    if operation is TranscodeOperation.OVERLAY_AUDIO:
        return [
            *BASE_ARGS,
            "-i", params.input_path,
            "-i", params.audio_path,  # type: ignore[list-item]
            "-map", "0:v:0",
            "-map", "1:a:0",
            "-c:v", "copy",
            "-c:a", "aac",
            "-shortest",
            params.output_path,
        ]

    raise InvalidParams(str(operation), "unsupported operation")
