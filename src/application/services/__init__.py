"""Application services for orchestrating domain logic."""

from .ffmpeg_commands import build_args, validate_params

__all__ = ["build_args", "validate_params"]
