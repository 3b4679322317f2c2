"""Insights endpoint — narrative text per scored domain.

Delegates to the configured :class:`InsightGenerator`.  With no generator
the endpoint answers with an empty list, which clients treat as "keep the
default text for every domain".
"""

import logging

from fastapi import APIRouter, Depends

from wellness_engine.errors import InsightsError
from wellness_engine.interfaces import InsightGenerator
from wellness_engine.models.report import InsightsResponse, ScoredReport

from wellness_server.dependencies import get_insight_generator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["insights"])

GENERATION_FAILED_MESSAGE = "Failed to generate AI insights."


@router.post("/generate-insights")
async def generate_insights(
    report: ScoredReport,
    generator: InsightGenerator | None = Depends(get_insight_generator),
) -> InsightsResponse:
    """Return ``{insights: [...]}`` aligned with ``report.domains``.

    A generator failure answers 502 ``{error}``.
    """
    if generator is None:
        logger.info("No insight generator configured; returning no insights")
        return InsightsResponse(insights=[])

    try:
        insights = await generator.generate(report)
        # Extra entries have no domain to attach to
        return InsightsResponse(insights=list(insights)[: len(report.domains)])
    except Exception as exc:
        logger.exception("Insight generation failed for %s", report.individual_id)
        raise InsightsError(GENERATION_FAILED_MESSAGE) from exc
