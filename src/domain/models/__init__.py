"""Domain models for conversion, transcoding and remote jobs."""

from .conversion_report import ConversionReport
from .file_candidate import FileCandidate
from .job import JobRequest, JobResult, JobStatus
from .transcode import LaunchResult, LoopMode, TranscodeOperation, TranscodeParams

__all__ = [
    "ConversionReport",
    "FileCandidate",
    "JobRequest",
    "JobResult",
    "JobStatus",
    "LaunchResult",
    "LoopMode",
    "TranscodeOperation",
    "TranscodeParams",
]
