"""AssessmentApiClient — async HTTP client for the assessment backend.

Thin httpx wrapper around the three endpoints the engine depends on:

    POST /api/submit-assessment   {details, answers} -> {submissionId}
    GET  /api/report?id=...       scored report, 404 when unknown
    POST /api/generate-insights   scored report -> {insights: [...]}

Every failure is translated into the SDK error taxonomy.  User-facing
messages come from the server's ``{"error": ...}`` payload when present,
otherwise from a per-endpoint fallback.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from wellness_engine.constants import (
    API_BASE_URL,
    HTTP_TIMEOUT_SECONDS,
    INSIGHTS_PATH,
    REPORT_ENDPOINT_PATH,
    SUBMIT_PATH,
)
from wellness_engine.errors import InsightsError, NotFoundError, TransportError
from wellness_engine.models.report import (
    InsightsResponse,
    ScoredReport,
    SubmissionReceipt,
    SubmissionRequest,
)

logger = logging.getLogger(__name__)

# --- Fallback messages when the server gives no usable error payload ---
SUBMIT_FALLBACK = "An unexpected error occurred during submission."
REPORT_FALLBACK = "Failed to fetch the report from the server."
INSIGHTS_FALLBACK = "Failed to generate AI insights."
TIMEOUT_MESSAGE = "The server took too long to respond. Please try again."
UNREACHABLE_MESSAGE = "Could not reach the server. Please check your connection and try again."
BAD_RESPONSE_MESSAGE = "The server returned an unexpected response."


def error_message(response: httpx.Response, fallback: str) -> str:
    """Pull ``error`` out of a JSON error body, or return ``fallback``."""
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict):
        message = payload.get("error")
        if isinstance(message, str) and message:
            return message
    return fallback


class AssessmentApiClient:
    """Async client for submission, report and insights endpoints.

    Args:
        base_url: server root, e.g. ``http://localhost:8080``
        timeout: per-request timeout in seconds
        transport: optional httpx transport (``httpx.MockTransport`` in tests)
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        *,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> AssessmentApiClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def submit_assessment(self, request: SubmissionRequest) -> SubmissionReceipt:
        """Persist a completed assessment and return its submission id."""
        response = await self._send(
            "POST", SUBMIT_PATH, error_cls=TransportError, json=request.to_wire(),
        )
        if not response.is_success:
            message = error_message(response, SUBMIT_FALLBACK)
            logger.warning("Submission failed [%d]: %s", response.status_code, message)
            raise TransportError(message, status=response.status_code)
        receipt = self._parse(response, SubmissionReceipt, TransportError)
        logger.info("Submission accepted: %s", receipt.submission_id)
        return receipt

    async def fetch_report(self, submission_id: str) -> ScoredReport:
        """Fetch the scored report for a submission.

        Raises:
            NotFoundError: the server does not know ``submission_id``.
            TransportError: any other failure.
        """
        logger.info("Fetching report for submission %s", submission_id)
        response = await self._send(
            "GET", REPORT_ENDPOINT_PATH, error_cls=TransportError,
            params={"id": submission_id},
        )
        if response.status_code == 404:
            raise NotFoundError(submission_id)
        if not response.is_success:
            raise TransportError(
                error_message(response, REPORT_FALLBACK), status=response.status_code,
            )
        return self._parse(response, ScoredReport, TransportError)

    async def fetch_insights(self, report: ScoredReport) -> list[str | None]:
        """Request narrative insights for a report's domains.

        The returned list is aligned positionally with ``report.domains``
        and may be shorter than it.

        Raises:
            InsightsError: on any failure, including network errors.
        """
        response = await self._send(
            "POST", INSIGHTS_PATH, error_cls=InsightsError, json=report.to_wire(),
        )
        if not response.is_success:
            message = error_message(response, INSIGHTS_FALLBACK)
            logger.error("Error fetching insights [%d]: %s", response.status_code, message)
            raise InsightsError(message, status=response.status_code)
        body = self._parse(response, InsightsResponse, InsightsError)
        logger.info("Received %d insight(s) for %d domain(s)", len(body.insights), len(report.domains))
        return body.insights

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _send(
        self,
        method: str,
        path: str,
        *,
        error_cls: type[TransportError],
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out: %s", method, path, exc)
            raise error_cls(TIMEOUT_MESSAGE) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise error_cls(UNREACHABLE_MESSAGE) from exc

    @staticmethod
    def _parse(response: httpx.Response, model, error_cls: type[TransportError]):
        # pydantic.ValidationError and JSONDecodeError are both ValueErrors
        try:
            return model.model_validate(response.json())
        except ValueError as exc:
            logger.warning("Unexpected response body from %s: %s", response.url, exc)
            raise error_cls(BAD_RESPONSE_MESSAGE, status=response.status_code) from exc
