"""Route registration — mounts all routers under ``/api``."""

from fastapi import FastAPI

from wellness_server.routes.insights import router as insights_router
from wellness_server.routes.questionnaire import router as questionnaire_router
from wellness_server.routes.reports import router as reports_router
from wellness_server.routes.submissions import router as submissions_router

API_PREFIX = "/api"


def register_routes(app: FastAPI) -> None:
    """Include all sub-routers under the API prefix."""
    app.include_router(submissions_router, prefix=API_PREFIX)
    app.include_router(reports_router, prefix=API_PREFIX)
    app.include_router(insights_router, prefix=API_PREFIX)
    app.include_router(questionnaire_router, prefix=API_PREFIX)
