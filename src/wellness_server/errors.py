"""Global exception handlers — map SDK exceptions to ``{"error": ...}`` responses.

The browser client reads the ``error`` key of any non-2xx body and shows
it to the user, so every handler answers in that shape.  SDK errors carry
their own user-safe message and status code; anything unexpected is
logged with its traceback and answered with a generic 500.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from wellness_engine.errors import AssessmentError

logger = logging.getLogger(__name__)

INVALID_PAYLOAD_MESSAGE = "The request payload is invalid."
INTERNAL_ERROR_MESSAGE = "An internal server error occurred."


class BadRequestError(AssessmentError):
    """A required request parameter is missing or malformed."""

    status_code = 400


async def assessment_error_handler(request: Request, exc: AssessmentError) -> JSONResponse:
    """Answer with the error's own status and user-facing message."""
    if exc.status_code >= 500:
        logger.error("%s [%d] at %s: %s", type(exc).__name__, exc.status_code, request.url, exc.message)
    else:
        logger.warning("%s [%d] at %s: %s", type(exc).__name__, exc.status_code, request.url, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies or query params → 400 (details stay in the log)."""
    logger.warning("Invalid request at %s: %s", request.url, exc.errors())
    return JSONResponse(status_code=400, content={"error": INVALID_PAYLOAD_MESSAGE})


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — log full traceback, return 500."""
    logger.exception("Unhandled exception at %s", request.url)
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})
