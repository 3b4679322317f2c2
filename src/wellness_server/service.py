"""ReportService — submission intake and report lookup.

Sits between the routes and the persistence layer:

    submit:     validate -> assign submission id -> score -> store
    get_report: look up by submission id -> ScoredReport

Like the repository it wraps, the service flushes but never commits; the
``get_db`` dependency owns the transaction.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from wellness_db.repository import ReportRepository
from wellness_engine.engine import AssessmentEngine
from wellness_engine.errors import NotFoundError
from wellness_engine.models.report import ScoredReport, SubmissionReceipt, SubmissionRequest
from wellness_engine.scoring import score_submission

logger = logging.getLogger(__name__)


def new_submission_id() -> str:
    """Opaque, URL-safe submission identifier."""
    return uuid.uuid4().hex


class ReportService:
    """Scores and persists submissions; serves stored reports.

    Args:
        engine: the shared :class:`AssessmentEngine` (validation rules and
            the questionnaire store used for scoring)
    """

    def __init__(self, engine: AssessmentEngine) -> None:
        self._engine = engine
        self._repo = ReportRepository()

    async def submit(self, db: AsyncSession, request: SubmissionRequest) -> SubmissionReceipt:
        """Validate, score and store a submission.

        Raises:
            InvalidSubmissionError: details or answers are unacceptable.
        """
        self._engine.validate_submission(request)

        submission_id = new_submission_id()
        report = score_submission(
            self._engine.store,
            submission_id=submission_id,
            details=request.details,
            answers=request.answers,
        )
        await self._repo.create_report(
            db,
            submission_id=submission_id,
            first_name=report.first_name,
            last_name=report.last_name,
            email=report.email,
            answers=request.answers,
            data=report.to_wire(),
        )
        logger.info(
            "Stored submission %s (%d domains, %d answers)",
            submission_id, len(report.domains), len(request.answers),
        )
        return SubmissionReceipt(submission_id=submission_id)

    async def get_report(self, db: AsyncSession, submission_id: str) -> ScoredReport:
        """Return the stored report.

        Raises:
            NotFoundError: no report exists for ``submission_id``.
        """
        row = await self._repo.get_by_submission_id(db, submission_id)
        if row is None:
            logger.warning("No report found for submission ID: %s", submission_id)
            raise NotFoundError(
                submission_id,
                f'Report with Submission ID "{submission_id}" not found.',
            )
        return ScoredReport.model_validate(row.data)
