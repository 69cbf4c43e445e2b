"""Correlation id and request logging middleware."""

import asyncio
import uuid

import structlog
from starlette.datastructures import Headers, MutableHeaders
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from tenantkit.core.errors import ErrorKind, ServiceError

logger = structlog.get_logger()

CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware:
    """Tags each request with a correlation id and logs its outcome.

    The id is taken from the incoming header when present, stored in the
    request state, bound into the structlog context for the request and
    echoed on every response this middleware sends.

    Runs as plain ASGI so the endpoint executes in the same task, which lets
    a cancelled inner operation be answered with 499.
    """

    def __init__(self, app: ASGIApp) -> None:
        """Initialize correlation middleware.

        Args:
            app: The ASGI application.
        """
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Process a request."""
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        correlation_id = Headers(scope=scope).get(CORRELATION_HEADER) or str(uuid.uuid4())
        scope.setdefault("state", {})["correlation_id"] = correlation_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=correlation_id,
            method=scope["method"],
            path=scope["path"],
        )

        status_code: int | None = None

        async def send_with_id(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                MutableHeaders(scope=message)[CORRELATION_HEADER] = correlation_id
            await send(message)

        try:
            await self.app(scope, receive, send_with_id)
        except asyncio.CancelledError:
            task = asyncio.current_task()
            if status_code is not None or (task is not None and task.cancelling()):
                logger.info("request_aborted")
                raise
            # An inner operation was cancelled while this request is still live
            logger.warning("request_cancelled")
            error = ServiceError(ErrorKind.CANCELLED, "The request was cancelled")
            body = error.to_dict()
            body["correlationId"] = correlation_id
            response = JSONResponse(status_code=error.status_code, content=body)
            await response(scope, receive, send_with_id)

        logger.debug("request_completed", status_code=status_code)
