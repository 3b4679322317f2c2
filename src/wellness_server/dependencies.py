"""FastAPI dependency injection — DB sessions and the shared singletons.

Each request that touches the database gets a fresh ``AsyncSession`` via
``get_db()``.  The session is committed on success and rolled back on
error; the service and repository only ever ``flush()``.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from wellness_db.engine import get_session_factory
from wellness_engine.interfaces import InsightGenerator
from wellness_engine.questionnaire import QuestionnaireStore

from wellness_server.service import ReportService


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session; commit on success, rollback on error."""
    factory = get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ------------------------------------------------------------------
# Singletons — stashed on app.state during lifespan
# ------------------------------------------------------------------

def get_store(request: Request) -> QuestionnaireStore:
    return request.app.state.store


def get_report_service(request: Request) -> ReportService:
    return request.app.state.report_service


def get_insight_generator(request: Request) -> InsightGenerator | None:
    """The configured generator, or ``None`` when insights are disabled."""
    return request.app.state.insight_generator
