"""AssessmentFlow — one user's session driven through the engine.

The engine is stateless; the flow is the small mutable holder a
presentation layer keeps per session.  It applies the same guards a form
UI would (no "next" until the step is complete, "submit" only from a
fully answered questionnaire) and owns the single-flight submission.

Single-flight works because the ``idle -> in_flight`` transition happens
synchronously before the first ``await``: a second ``submit()`` scheduled
on the same event loop always observes ``in_flight`` and is rejected
without touching the network.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from wellness_engine.client import SUBMIT_FALLBACK, AssessmentApiClient
from wellness_engine.engine import AssessmentEngine, report_location
from wellness_engine.errors import AssessmentError, SubmissionInFlightError
from wellness_engine.models.session import (
    SessionState,
    StepView,
    SubmissionAccepted,
    SubmissionFailed,
    SubmissionRejected,
    SubmissionResult,
)

logger = logging.getLogger(__name__)

INCOMPLETE_MESSAGE = "Please complete your details and answer every question before submitting."


class AssessmentFlow:
    """Holds one session's state and applies UI-level guards.

    Args:
        engine: shared :class:`AssessmentEngine`
        client: API client used for submission
        state: optional starting state (defaults to a fresh session)
    """

    def __init__(
        self,
        engine: AssessmentEngine,
        client: AssessmentApiClient,
        state: SessionState | None = None,
    ) -> None:
        self._engine = engine
        self._client = client
        self._state = state or SessionState()

    @property
    def state(self) -> SessionState:
        return self._state

    def current_step(self) -> StepView:
        return self._engine.current_step(self._state)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def set_details(self, **fields: Any) -> StepView:
        self._state = self._engine.update_details(self._state, **fields)
        return self.current_step()

    def answer(self, qid: str, value: str) -> StepView:
        self._state = self._engine.answer(self._state, qid, value)
        return self.current_step()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def next(self) -> StepView:
        """Advance if the current step is complete and not the last one.

        On the last visible section the caller submits instead.
        """
        view = self.current_step()
        if not view.can_advance:
            return view
        if view.type == "section" and view.is_last:
            return view
        self._state = self._engine.advance(self._state)
        return self.current_step()

    def back(self) -> StepView:
        self._state = self._engine.retreat(self._state)
        return self.current_step()

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def submit(self) -> SubmissionResult:
        """Submit details and answers once.

        Duplicate calls while pending (or after success) are rejected.
        Failures leave the session in ``failed`` with all answers intact,
        so calling ``submit()`` again is a retry.
        """
        try:
            self._state = self._engine.begin_submission(self._state)
        except SubmissionInFlightError as exc:
            logger.info("Ignoring duplicate submit: %s", exc.message)
            return SubmissionRejected(message=exc.message)

        issues = self._engine.missing_for_submission(self._state)
        if issues:
            self._state = self._engine.fail_submission(self._state, INCOMPLETE_MESSAGE)
            return SubmissionFailed(message=INCOMPLETE_MESSAGE, issues=issues)

        request = self._engine.build_request(self._state)
        try:
            receipt = await self._client.submit_assessment(request)
        except AssessmentError as exc:
            logger.error("Submission failed: %s", exc.message)
            self._state = self._engine.fail_submission(self._state, exc.message)
            return SubmissionFailed(message=exc.message)
        except asyncio.CancelledError:
            self._state = self._engine.fail_submission(self._state, SUBMIT_FALLBACK)
            raise
        except Exception:
            logger.exception("Unexpected error during submission")
            self._state = self._engine.fail_submission(self._state, SUBMIT_FALLBACK)
            return SubmissionFailed(message=SUBMIT_FALLBACK)

        self._state = self._engine.complete_submission(self._state, receipt.submission_id)
        return SubmissionAccepted(
            submission_id=receipt.submission_id,
            report_location=report_location(receipt.submission_id),
        )
