"""Domain errors for file conversion, transcoding and remote jobs."""

from __future__ import annotations

from pathlib import Path


class ToolboxError(Exception):
    """Base class for every error surfaced to the caller as a message."""


class InvalidPath(ToolboxError):
    """
    Raised when a path does not exist or is not the expected kind of entry.

    Attributes:
        path: Offending path
        reason: Why the path was rejected
    """

    def __init__(self, path: str | Path, reason: str = "path does not exist") -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Invalid path '{self.path}': {reason}")


class NotAFile(ToolboxError):
    """Raised when a single-file operation is given a directory or special entry."""

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        super().__init__(f"Not a regular file: {self.path}")


class WrongExtension(ToolboxError):
    """
    Raised when a file lacks the extension an operation expects.

    Attributes:
        path: Offending file
        expected: Expected extension without the leading dot
    """

    def __init__(self, path: str | Path, expected: str) -> None:
        self.path = str(path)
        self.expected = expected
        suffix = Path(path).suffix
        if suffix:
            msg = f"File '{Path(path).name}' has extension '{suffix}', expected '.{expected}'"
        else:
            msg = f"File '{Path(path).name}' has no extension, expected '.{expected}'"
        super().__init__(msg)


class DecodeError(ToolboxError):
    """
    Raised when a source image cannot be opened or decoded.

    Attributes:
        path: Source image path
        cause: Short description of the failure, without the file name
    """

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.cause = f"decode failed: {reason}"
        super().__init__(f"{Path(path).name}: {self.cause}")


class EncodeError(ToolboxError):
    """
    Raised when a target image cannot be encoded or written.

    Attributes:
        path: Target image path
        cause: Short description of the failure, without the file name
    """

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.cause = f"encode failed: {reason}"
        super().__init__(f"{Path(path).name}: {self.cause}")


class FileIOError(ToolboxError):
    """Raised when reading, writing or deleting a file fails outside a batch."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"I/O error on '{self.path}': {reason}")


class SubmissionError(ToolboxError):
    """
    Raised when a job cannot be created on the remote API.

    Attributes:
        reason: Transport error or response text
        status_code: HTTP status when a response was received
    """

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        self.reason = reason
        self.status_code = status_code
        prefix = f"Job submission failed (HTTP {status_code})" if status_code else "Job submission failed"
        super().__init__(f"{prefix}: {reason}")


class PollError(ToolboxError):
    """Raised when a single status poll fails; polling is not retried."""

    def __init__(self, job_id: str, reason: str, status_code: int | None = None) -> None:
        self.job_id = job_id
        self.reason = reason
        self.status_code = status_code
        prefix = f"Status check for job {job_id} failed"
        if status_code:
            prefix += f" (HTTP {status_code})"
        super().__init__(f"{prefix}: {reason}")


class JobFailed(ToolboxError):
    """Raised when the remote job reports a failed or canceled status."""

    def __init__(self, job_id: str, reason: str) -> None:
        self.job_id = job_id
        self.reason = reason
        super().__init__(f"Job {job_id} failed: {reason}")


class UnknownStatus(ToolboxError):
    """Raised when the remote job reports a status this client does not know."""

    def __init__(self, job_id: str, value: str) -> None:
        self.job_id = job_id
        self.value = value
        super().__init__(f"Job {job_id} returned unknown status: {value}")


class JobApiNotConfigured(ToolboxError):
    """Raised when a job is run on a service that was built without a job API client."""

    def __init__(self) -> None:
        super().__init__("No job API client configured; jobs cannot be submitted")


class InvalidParams(ToolboxError):
    """
    Raised when operation parameters are missing or out of range.

    Always raised before any external process is started.
    """

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Invalid parameters for {operation}: {reason}")


class ProcessLaunchError(ToolboxError):
    """Raised when the encoder binary cannot be found or started."""

    def __init__(self, binary: str, reason: str) -> None:
        self.binary = binary
        self.reason = reason
        super().__init__(f"Could not start '{binary}': {reason}")


class ProcessExitError(ToolboxError):
    """
    Raised when the encoder exits with a non-zero code.

    Attributes:
        exit_code: Process exit code
        output: Captured stdout/stderr text
    """

    def __init__(self, exit_code: int, output: str) -> None:
        self.exit_code = exit_code
        self.output = output
        tail = output.strip().splitlines()[-1] if output.strip() else "no output"
        super().__init__(f"Encoder exited with code {exit_code}: {tail}")
