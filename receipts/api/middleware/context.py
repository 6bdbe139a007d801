"""Request context middleware for observability."""

import uuid
from collections.abc import Awaitable, Callable
from contextvars import ContextVar

import structlog
from fastapi import Request, Response
from opentelemetry import trace
from starlette.middleware.base import BaseHTTPMiddleware

from receipts.api.models.context import RequestContext
from receipts.observability.logging import get_logger

logger = get_logger(__name__)

# Context variable for request context - accessible throughout request lifecycle
_request_context: ContextVar[RequestContext | None] = ContextVar("request_context", default=None)


def get_request_context() -> RequestContext | None:
    """Get the current request context, or None outside a request."""
    return _request_context.get()


def set_request_context(context: RequestContext) -> None:
    """Set the request context for the current request."""
    _request_context.set(context)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware that binds request identifiers for logging.

    Creates a RequestContext at the start of each request, binds its ids to
    structlog contextvars so every log line carries them, and echoes them in
    response headers. An incoming X-Request-ID header is reused.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request and bind context."""
        span_context = trace.get_current_span().get_span_context()
        trace_id = format(span_context.trace_id, "032x") if span_context.is_valid else ""
        span_id = format(span_context.span_id, "016x") if span_context.is_valid else ""

        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        context = RequestContext(
            request_id=request_id,
            trace_id=trace_id or request_id,
            span_id=span_id,
        )
        set_request_context(context)
        request.state.context = context

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=context.request_id,
            trace_id=context.trace_id,
        )

        logger.debug("request_started", method=request.method, path=request.url.path)

        response = await call_next(request)

        logger.debug(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )

        response.headers["X-Request-ID"] = context.request_id
        if context.trace_id:
            response.headers["X-Trace-ID"] = context.trace_id

        return response
