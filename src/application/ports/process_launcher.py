from typing import Protocol, Sequence, runtime_checkable

from ...domain.models.transcode import LaunchResult


@runtime_checkable
class ProcessLauncherPort(Protocol):
    """Protocol for running the external encoder to completion."""

    def launch(self, args: Sequence[str]) -> LaunchResult:
        """
        Run the encoder with args (binary name excluded) and wait for it to exit.

        Returns:
            LaunchResult with exit code and captured output; a non-zero exit is
            reported, not raised

        Raises:
            ProcessLaunchError: If the binary is missing or cannot be started
        """
        ...
