"""Async repository for AssessmentReport.

All public methods accept an ``AsyncSession`` so the caller controls
transaction boundaries: methods ``flush()`` but never ``commit()``.

The repository does no business validation; submissions are validated
and scored in ``wellness_engine`` before they reach it.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wellness_db.models.report import AssessmentReport


class ReportRepository:
    """Async read/write operations on the ``assessment_reports`` table."""

    async def create_report(
        self,
        db: AsyncSession,
        *,
        submission_id: str,
        first_name: str,
        last_name: str,
        email: str,
        answers: dict[str, str],
        data: dict[str, Any],
    ) -> AssessmentReport:
        """Insert a scored report and return the row.

        The caller must ``await db.commit()`` to persist.
        """
        row = AssessmentReport(
            submission_id=submission_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            answers=dict(answers),
            data=data,
        )
        db.add(row)
        await db.flush()
        return row

    async def get_by_submission_id(
        self, db: AsyncSession, submission_id: str
    ) -> AssessmentReport | None:
        """Fetch a report by its submission id, or ``None``."""
        stmt = select(AssessmentReport).where(
            AssessmentReport.submission_id == submission_id,
        ).limit(1)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()
