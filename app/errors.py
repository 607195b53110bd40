"""
Error taxonomy for the RAG pipeline.

Every error raised on purpose by the pipeline derives from ``RagError`` and
carries the HTTP status it maps to plus a machine-readable code. Handlers in
``app.main`` turn them into JSON responses.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class RagError(Exception):
    """Base class for expected pipeline failures."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "internal_error"


class ValidationError(RagError):
    """Missing or malformed request fields."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_request"


class ConfigError(RagError):
    """Required configuration (the API credential) is missing."""

    code = "config_error"


class UpstreamError(RagError):
    """The embedding or chat-completion API call failed."""

    code = "upstream_error"


def error_payload(error: str, exc: Exception) -> Dict[str, Any]:
    return {
        "error": error,
        "detail": str(exc),
        "error_type": type(exc).__name__,
    }


# ---------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------

async def rag_error_handler(request: Request, exc: RagError) -> JSONResponse:
    """
    Render a ``RagError`` that escaped a route.
    """
    logger.warning(
        "rag_error",
        extra={
            "request_id": getattr(request.state, "request_id", "unknown"),
            "path": request.url.path,
            "error": str(exc),
            "error_type": type(exc).__name__,
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_payload(exc.code, exc),
    )


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Body validation failures are reported as 400, not FastAPI's default 422.
    """
    messages = []

    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))

    detail = "; ".join(messages) or "Invalid request"

    logger.info(
        "request_rejected",
        extra={
            "request_id": getattr(request.state, "request_id", "unknown"),
            "path": request.url.path,
            "detail": detail,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": ValidationError.code,
            "detail": detail,
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all handler for anything not mapped above.
    """
    request_id = getattr(request.state, "request_id", "unknown")

    logger.error(
        "unhandled_exception",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "error": str(exc),
            "error_type": type(exc).__name__,
        },
        exc_info=exc,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "An internal error occurred. Please try again.",
            "request_id": request_id,
            "error_type": type(exc).__name__,
        },
    )
