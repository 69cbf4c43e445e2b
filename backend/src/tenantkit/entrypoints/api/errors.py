"""Exception handlers mapping domain errors onto HTTP responses."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tenantkit.core.errors import ErrorKind, ServiceError, ValidationError
from tenantkit.entrypoints.api.middleware.correlation import CORRELATION_HEADER
from tenantkit.entrypoints.api.responses import correlation_id

logger = structlog.get_logger()

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def _body(request: Request, payload: dict[str, Any]) -> dict[str, Any]:
    payload["correlationId"] = correlation_id(request)
    payload["timestamp"] = datetime.now(UTC).isoformat()
    return payload


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render a ServiceError with its taxonomy status code."""
    if exc.kind in (ErrorKind.FORBIDDEN, ErrorKind.UNAUTHORIZED, ErrorKind.NOT_FOUND):
        logger.warning("request_denied", error_code=exc.error_code, message=exc.message)
    else:
        logger.info("request_rejected", error_code=exc.error_code, message=exc.message)

    headers = {"WWW-Authenticate": "Bearer"} if exc.kind == ErrorKind.UNAUTHORIZED else None
    return JSONResponse(
        status_code=exc.status_code,
        content=_body(request, exc.to_dict()),
        headers=headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request body and parameter validation failures as 400."""
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))

    error = ValidationError("One or more validation errors occurred", errors=errors)
    return JSONResponse(status_code=error.status_code, content=_body(request, error.to_dict()))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render anything else as 500, hiding details in production."""
    logger.exception("unhandled_error", error_type=type(exc).__name__)

    settings = getattr(request.app.state, "settings", None)
    production = settings is None or settings.is_production
    error = ServiceError(
        ErrorKind.INTERNAL,
        GENERIC_ERROR_MESSAGE if production else str(exc),
        details=None if production else {"type": type(exc).__name__},
    )
    # Rendered outside the correlation middleware, so the header is added here
    request_id = correlation_id(request)
    headers = {CORRELATION_HEADER: request_id} if request_id else None
    return JSONResponse(
        status_code=error.status_code,
        content=_body(request, error.to_dict()),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
