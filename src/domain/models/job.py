"""Domain models for remote inference jobs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..types import JsonValue


class JobStatus(str, Enum):
    """Status values reported by the predictions API."""

    STARTING = "starting"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"
    UNKNOWN = "unknown"

    @classmethod
    def from_raw(cls, raw: str) -> JobStatus:
        """Map a raw status string; anything unrecognised becomes UNKNOWN."""
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_pending(self) -> bool:
        return self in (JobStatus.STARTING, JobStatus.PROCESSING)

    @property
    def is_failure(self) -> bool:
        return self in (JobStatus.FAILED, JobStatus.CANCELED)


@dataclass(frozen=True)
class JobRequest:
    """
    One job to submit.

    Fields:
        target_identifier: Model version the job runs against
        payload: JSON input passed through untouched
        credential: API token, sent as a bearer token and never logged
    """

    target_identifier: str
    payload: JsonValue
    credential: str

    def __repr__(self) -> str:
        return f"JobRequest(target_identifier={self.target_identifier!r}, credential='***')"


@dataclass(frozen=True)
class JobResult:
    """Output of a job that reached the succeeded state."""

    output: JsonValue
    job_id: str | None = None
