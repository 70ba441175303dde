from typing import Any, Protocol, runtime_checkable

from ...domain.models.job import JobRequest


@runtime_checkable
class JobApiPort(Protocol):
    """Protocol for a remote API that accepts jobs and reports their status."""

    async def submit(self, request: JobRequest) -> str:
        """
        Create a job and return its identifier.

        Raises:
            SubmissionError: On transport failure, non-success status, or a body without an id
        """
        ...

    async def fetch_status(self, job_id: str, credential: str) -> dict[str, Any]:
        """
        Fetch the current status document of a job.

        Returns:
            Parsed JSON body with at least "status", and "output"/"error" when terminal

        Raises:
            PollError: On transport failure, non-success status, or an unparseable body
        """
        ...
