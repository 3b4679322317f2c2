"""Report assembly — fetch a scored report, then enrich it with insights.

The two fetches are strictly ordered: insights are requested with the
report body, so they cannot start before the report has arrived.

Degradation rules:
  - a missing or empty insight for a domain keeps that domain's existing
    ``insights_and_support`` text (a short list is not an error)
  - a *rejected* insights request fails the whole attempt
"""

from __future__ import annotations

import logging

from wellness_engine.client import AssessmentApiClient
from wellness_engine.errors import AssessmentError, NotFoundError
from wellness_engine.models.report import (
    ReportFailed,
    ReportOutcome,
    ReportReady,
    ScoredReport,
)

logger = logging.getLogger(__name__)


def merge_insights(report: ScoredReport, insights: list[str | None]) -> ScoredReport:
    """Return a copy of ``report`` with per-domain insights substituted."""
    domains = []
    for index, domain in enumerate(report.domains):
        text = insights[index] if index < len(insights) else None
        if text:
            domain = domain.model_copy(update={"insights_and_support": text})
        domains.append(domain)
    return report.model_copy(update={"domains": domains})


class ReportAssembler:
    """Generates the final report for a submission identifier."""

    def __init__(self, client: AssessmentApiClient) -> None:
        self._client = client

    async def generate(self, submission_id: str) -> ScoredReport:
        """Fetch, enrich and return the report.

        Raises:
            NotFoundError: unknown or empty submission id.
            TransportError: report fetch failed.
            InsightsError: insights fetch failed.
        """
        if not submission_id:
            raise NotFoundError(submission_id, "Submission ID is required.")

        report = await self._client.fetch_report(submission_id)
        insights = await self._client.fetch_insights(report)
        if len(insights) < len(report.domains):
            logger.info(
                "Insights cover %d of %d domains; keeping defaults for the rest",
                len(insights), len(report.domains),
            )
        return merge_insights(report, insights)

    async def load(self, submission_id: str) -> ReportOutcome:
        """Like :meth:`generate` but resolves every SDK error to an outcome."""
        try:
            report = await self.generate(submission_id)
        except NotFoundError as exc:
            logger.warning("Report not found: %s", submission_id)
            return ReportFailed(kind="not_found", message=exc.message)
        except AssessmentError as exc:
            logger.error("Failed to generate report %s: %s", submission_id, exc.message)
            return ReportFailed(kind="transport", message=exc.message)
        return ReportReady(report=report)
