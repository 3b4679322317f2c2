"""Submission intake — store a completed assessment and return its id."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wellness_engine.models.report import SubmissionReceipt, SubmissionRequest

from wellness_server.dependencies import get_db, get_report_service
from wellness_server.service import ReportService

router = APIRouter(tags=["submissions"])


@router.post("/submit-assessment", status_code=201)
async def submit_assessment(
    body: SubmissionRequest,
    db: AsyncSession = Depends(get_db),
    service: ReportService = Depends(get_report_service),
) -> SubmissionReceipt:
    """Validate, score and persist a submission.

    Returns 201 ``{submissionId}``.  Raises 400 ``{error}`` when a required
    detail is empty, an answer is not a known option, or a visible
    mandatory question is unanswered.
    """
    return await service.submit(db, body)
