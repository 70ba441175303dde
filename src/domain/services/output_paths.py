"""Default output locations for video operations, next to the input file."""

from __future__ import annotations

from pathlib import Path

from src.domain.models.transcode import TranscodeOperation

DEFAULT_VIDEO_SUFFIX = ".mp4"


def default_output_path(operation: TranscodeOperation, input_path: str | Path) -> Path:
    """
    Derive the output path the desktop shell proposes for an operation.

    - loop: <stem>_loop<ext> (".mp4" when the input has no extension)
    - reverse: <stem>_reversed<ext>
    - extract-audio: <stem>.wav (<stem>_audio.wav when the input is already WAV)
    - overlay-audio: <stem>_with_audio.mp4
    """
    source = Path(input_path)
    ext = source.suffix or DEFAULT_VIDEO_SUFFIX
    stem = source.with_suffix("")

    if operation is TranscodeOperation.LOOP:
        return stem.with_name(f"{stem.name}_loop{ext}")
    if operation is TranscodeOperation.REVERSE:
        return stem.with_name(f"{stem.name}_reversed{ext}")
    if operation is TranscodeOperation.EXTRACT_AUDIO:
        if source.suffix.lower() == ".wav":
            return stem.with_name(f"{stem.name}_audio.wav")
        return stem.with_name(f"{stem.name}.wav")
    if operation is TranscodeOperation.OVERLAY_AUDIO:
        return stem.with_name(f"{stem.name}_with_audio.mp4")
    raise ValueError(f"Unsupported operation: {operation}")
