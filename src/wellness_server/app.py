"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that loads the questionnaire and builds the services once
  - CORS middleware
  - Global exception handlers (SDK errors → ``{"error": ...}`` responses)
  - All API routes mounted under ``/api``
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``wellness-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from wellness_db.engine import dispose_engine, get_engine
from wellness_engine.engine import AssessmentEngine
from wellness_engine.errors import AssessmentError
from wellness_engine.interfaces import InsightGenerator
from wellness_engine.questionnaire import QuestionnaireStore

from wellness_server.config import ServerSettings, load_settings
from wellness_server.errors import (
    assessment_error_handler,
    generic_error_handler,
    request_validation_handler,
)
from wellness_server.routes import register_routes
from wellness_server.service import ReportService

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan — runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialise shared resources at startup, tear down on shutdown.

    Startup:
      1. Load the questionnaire YAML into a ``QuestionnaireStore``
      2. Build the ``AssessmentEngine`` and ``ReportService``
      3. Stash them on ``app.state`` for dependency injection

    Shutdown:
      1. Dispose the database engine's connection pool
    """
    settings: ServerSettings = app.state.settings

    store = QuestionnaireStore(definition_path=settings.definition_path)
    store.load()

    engine = AssessmentEngine(store)
    app.state.store = store
    app.state.report_service = ReportService(engine)

    yield

    await dispose_engine()
    logger.info("Database engine disposed")


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(
    settings: ServerSettings | None = None,
    insight_generator: InsightGenerator | None = None,
) -> FastAPI:
    """Build and return the configured FastAPI application.

    Args:
        settings: server settings (defaults to :func:`load_settings`)
        insight_generator: optional narrative generator for
            ``/api/generate-insights``; without one the endpoint returns
            no insights and clients keep the default domain text
    """
    if settings is None:
        settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Wellness Assessment API",
        description="Submission intake, scored reports and insights for the wellness assessment",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.insight_generator = insight_generator

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Exception handlers ---
    app.add_exception_handler(AssessmentError, assessment_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # --- Health check (outside the /api prefix) ---
    @app.get("/health")
    async def health() -> dict:
        """Readiness probe — verifies DB connectivity."""
        try:
            async with get_engine().connect() as conn:
                await conn.execute(text("SELECT 1"))
            return {"status": "ok"}
        except Exception as exc:
            logger.error("Health check failed: %s", exc)
            return {"status": "error", "detail": str(exc)}

    register_routes(app)

    return app


# ------------------------------------------------------------------
# Module-level ASGI export (for uvicorn wellness_server.app:app)
# ------------------------------------------------------------------
app = create_app()


def cli() -> None:
    """Console-script entry point: ``wellness-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "wellness_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
