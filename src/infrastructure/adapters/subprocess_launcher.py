"""Encoder launcher adapter backed by subprocess."""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Sequence

from ...domain.errors import ProcessLaunchError
from ...domain.models.transcode import LaunchResult

logger = logging.getLogger(__name__)

DEFAULT_BINARY = "ffmpeg"
# Keep Windows from flashing a console window for each run
_CREATION_FLAGS = getattr(subprocess, "CREATE_NO_WINDOW", 0)


class SubprocessLauncherAdapter:
    """Run the encoder binary to completion, capturing stdout and stderr together."""

    def __init__(self, binary: str | None = None) -> None:
        """
        Args:
            binary: Executable name or path; defaults to "ffmpeg" looked up on PATH
        """
        self._binary = binary

    def resolve_binary(self) -> str:
        """
        Return the full path of the encoder executable.

        Raises:
            ProcessLaunchError: If the executable cannot be found
        """
        name = self._binary or DEFAULT_BINARY
        resolved = shutil.which(name)
        if resolved is None:
            raise ProcessLaunchError(name, "executable not found; install ffmpeg or set FFMPEG_BINARY")
        return resolved

    def launch(self, args: Sequence[str]) -> LaunchResult:
        binary = self.resolve_binary()
        cmd = [binary, *args]
        logger.debug(f"Running: {subprocess.list2cmdline(cmd)}")
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                creationflags=_CREATION_FLAGS,
            )
        except OSError as e:
            raise ProcessLaunchError(binary, str(e)) from e
        return LaunchResult(exit_code=proc.returncode, output=proc.stdout or "")

    def version(self) -> str:
        """
        First line of `<encoder> -version`, used by the validate command.

        Raises:
            ProcessLaunchError: If the encoder cannot be started or reports an error
        """
        result = self.launch(["-version"])
        if not result.succeeded:
            raise ProcessLaunchError(self._binary or DEFAULT_BINARY, f"-version exited with code {result.exit_code}")
        lines = result.output.strip().splitlines()
        return lines[0] if lines else "unknown version"
