"""Domain models for encoder-backed video operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TranscodeOperation(str, Enum):
    LOOP = "loop"
    REVERSE = "reverse"
    EXTRACT_AUDIO = "extract-audio"
    OVERLAY_AUDIO = "overlay-audio"


class LoopMode(str, Enum):
    """How a looped video's length is determined."""

    DURATION = "duration"  # repeat until a target duration such as 03:00:00
    LOOPS = "loops"  # play the input a fixed number of times


@dataclass(frozen=True)
class TranscodeParams:
    """
    Parameters for a single transcode operation.

    Fields:
        input_path: Source video
        output_path: File the encoder writes
        mode: Loop mode (loop operation only)
        duration: Target duration string, e.g. "03:00:00" or "1:30" (duration mode)
        loop_count: Number of plays, at least 1 (loops mode)
        audio_path: Audio track to lay over the video (overlay operation only)
    """

    input_path: str
    output_path: str
    mode: LoopMode | None = None
    duration: str | None = None
    loop_count: int | None = None
    audio_path: str | None = None


@dataclass(frozen=True)
class LaunchResult:
    """Exit code and merged stdout/stderr of one encoder run."""

    exit_code: int
    output: str = ""

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0
