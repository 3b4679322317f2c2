"""wellness_db — PostgreSQL persistence for scored assessment reports.

Provides the ORM model, the async engine factory and the repository used
by the FastAPI server to store submissions and serve reports.
"""

from wellness_db.engine import dispose_engine, get_engine, get_session_factory
from wellness_db.models.report import AssessmentReport
from wellness_db.repository import ReportRepository

__all__ = [
    "AssessmentReport",
    "ReportRepository",
    "dispose_engine",
    "get_engine",
    "get_session_factory",
]
