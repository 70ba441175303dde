"""httpx adapter for a Replicate-style predictions API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ...domain.errors import PollError, SubmissionError
from ...domain.models.job import JobRequest
from ..config.settings import DEFAULT_REPLICATE_BASE_URL

logger = logging.getLogger(__name__)

# Response bodies quoted in error messages are cut to this many characters
MAX_ERROR_TEXT = 500


def _auth_headers(credential: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {credential}"}


def _error_text(response: httpx.Response) -> str:
    text = response.text.strip() or response.reason_phrase or "empty response"
    return text[:MAX_ERROR_TEXT]


class ReplicatePredictionsClient:
    """
    Submit predictions and fetch their status over HTTP.

    POST {base_url}/predictions with {"version", "input"} creates a job;
    GET {base_url}/predictions/{id} returns its status document. The
    credential travels as a bearer token on both calls.

    Use as an async context manager, or call aclose(), to release the
    underlying connection pool when the client created it.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_REPLICATE_BASE_URL,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> ReplicatePredictionsClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def submit(self, request: JobRequest) -> str:
        url = f"{self.base_url}/predictions"
        try:
            response = await self._client.post(
                url,
                headers=_auth_headers(request.credential),
                json={"version": request.target_identifier, "input": request.payload},
            )
        except httpx.HTTPError as e:
            raise SubmissionError(f"request to {url} failed: {e}") from e

        if not response.is_success:
            raise SubmissionError(_error_text(response), status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            raise SubmissionError(f"response is not JSON: {e}", status_code=response.status_code) from e

        job_id = body.get("id") if isinstance(body, dict) else None
        if not isinstance(job_id, str) or not job_id:
            raise SubmissionError("response carries no prediction id", status_code=response.status_code)
        return job_id

    async def fetch_status(self, job_id: str, credential: str) -> dict[str, Any]:
        url = f"{self.base_url}/predictions/{job_id}"
        try:
            response = await self._client.get(url, headers=_auth_headers(credential))
        except httpx.HTTPError as e:
            raise PollError(job_id, f"request to {url} failed: {e}") from e

        if not response.is_success:
            raise PollError(job_id, _error_text(response), status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            raise PollError(job_id, f"response is not JSON: {e}", status_code=response.status_code) from e

        if not isinstance(body, dict):
            raise PollError(job_id, "response is not a JSON object", status_code=response.status_code)
        return body
