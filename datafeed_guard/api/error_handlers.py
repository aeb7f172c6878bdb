"""Error Handlers — global exception handlers for the datafeed guard API.

Invariants:
    - DatafeedGuardError → its own envelope and http_status (400 for config errors)
    - RequestValidationError → 400 with field-level details, plus the submitted
      datafeed_id and job_id when the body carries them
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (DatafeedGuardError), validation (Pydantic), catch-all
    - Incompatible configs and malformed bodies are expected traffic: logged at INFO
"""

import logging
from collections.abc import Mapping
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from datafeed_guard.core.errors import DatafeedGuardError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_guard_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_guard_error_handler(app: FastAPI) -> None:
    """Register datafeed guard domain error handler."""

    @app.exception_handler(DatafeedGuardError)
    async def guard_error_handler(request: Request, exc: DatafeedGuardError):
        """Handle configuration errors raised by core/."""
        logger.info(
            f"Rejected configuration: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "datafeed_id": exc.context.datafeed_id,
                "job_id": exc.context.job_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle malformed request bodies, naming the datafeed and job when known."""
        details = _field_errors(exc)
        datafeed_id, job_id = _submitted_ids(exc.body)
        logger.info(
            "Rejected request: invalid fields "
            f"{[detail['field'] for detail in details]}",
            extra={
                "error_code": "VALIDATION_ERROR",
                "path": request.url.path,
                "datafeed_id": datafeed_id,
                "job_id": job_id,
            },
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Invalid request data",
                    "category": ErrorCategory.VALIDATION.value,
                    "severity": ErrorSeverity.ERROR.value,
                    "context": {"datafeed_id": datafeed_id, "job_id": job_id},
                    "details": details,
                },
            },
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception while validating: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _field_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]


def _submitted_ids(body: Any) -> tuple[str | None, str | None]:
    """Best-effort datafeed_id and job_id from a body that failed validation."""
    if not isinstance(body, Mapping):
        return None, None
    datafeed = body.get("datafeed_config")
    job = body.get("job_config")
    datafeed_id = datafeed.get("datafeed_id") if isinstance(datafeed, Mapping) else None
    job_id = job.get("job_id") if isinstance(job, Mapping) else None
    if job_id is None and isinstance(datafeed, Mapping):
        job_id = datafeed.get("job_id")
    return (
        datafeed_id if isinstance(datafeed_id, str) else None,
        job_id if isinstance(job_id, str) else None,
    )
