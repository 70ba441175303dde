from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from ...domain.errors import JobFailed, PollError, UnknownStatus
from ...domain.models.job import JobRequest, JobResult, JobStatus
from ..ports.job_api import JobApiPort

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 1.0
UNKNOWN_FAILURE_REASON = "Unknown error"


def _failure_reason(body: dict[str, Any]) -> str:
    error = body.get("error")
    if isinstance(error, str):
        return error
    return UNKNOWN_FAILURE_REASON


async def run_job(
    request: JobRequest,
    api: JobApiPort,
    poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    max_attempts: int | None = None,
) -> JobResult:
    """
    Submit a job and poll until it reaches a terminal state.

    Polling has no deadline: the loop only ends on a terminal status or an
    error. Each iteration waits poll_interval before fetching the status, and a
    single failed fetch ends the job (no retries).

    Args:
        request: JobRequest with model version, input payload and credential
        api: JobApiPort used to submit and fetch status
        poll_interval: Seconds to wait before each status fetch (default: 1.0)
        sleep: Awaitable sleep, replaceable in tests
        max_attempts: Optional cap on status fetches (default: unbounded)

    Returns:
        JobResult carrying the output of the succeeded job

    Raises:
        SubmissionError: If the job cannot be created
        PollError: If a status fetch fails or max_attempts is exhausted
        JobFailed: If the job reports failed or canceled
        UnknownStatus: If the job reports a status outside the known set
    """
    job_id = await api.submit(request)
    logger.info(
        f"Job {job_id} submitted",
        extra={"job_id": job_id, "target": request.target_identifier},
    )

    attempts = 0
    while True:
        if max_attempts is not None and attempts >= max_attempts:
            raise PollError(job_id, f"no terminal status after {attempts} status checks")
        await sleep(poll_interval)
        attempts += 1

        body = await api.fetch_status(job_id, request.credential)
        raw_status = body.get("status")
        if not isinstance(raw_status, str):
            raise PollError(job_id, "response carries no status")

        status = JobStatus.from_raw(raw_status)
        logger.debug(f"Job {job_id} status: {raw_status}", extra={"job_id": job_id, "attempt": attempts})

        if status is JobStatus.SUCCEEDED:
            logger.info(f"Job {job_id} succeeded after {attempts} status check(s)", extra={"job_id": job_id})
            return JobResult(output=body.get("output"), job_id=job_id)
        if status.is_failure:
            reason = _failure_reason(body)
            logger.warning(f"Job {job_id} ended with status {raw_status}: {reason}", extra={"job_id": job_id})
            raise JobFailed(job_id, reason)
        if status.is_pending:
            continue
        raise UnknownStatus(job_id, raw_status)
