"""Report lookup — idempotent GET by submission id."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from wellness_engine.models.report import ScoredReport

from wellness_server.dependencies import get_db, get_report_service
from wellness_server.errors import BadRequestError
from wellness_server.service import ReportService

router = APIRouter(tags=["reports"])


@router.get("/report")
async def get_report(
    submission_id: str | None = Query(None, alias="id"),
    db: AsyncSession = Depends(get_db),
    service: ReportService = Depends(get_report_service),
) -> ScoredReport:
    """Return the scored report for ``?id=<submissionId>``.

    400 when the id is missing, 404 when it is unknown.
    """
    if not submission_id:
        raise BadRequestError("Submission ID is required.")
    return await service.get_report(db, submission_id)
