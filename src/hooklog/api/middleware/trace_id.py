"""Trace ID middleware: per-request id and structured logging context."""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from hooklog.logging_config import bind_request_context, clear_request_context


class TraceIdMiddleware(BaseHTTPMiddleware):
    """Attach a trace id to the request, its log lines and its response.

    Delivery id and event type headers, when present, are bound as well so
    every log line of an ingestion carries them.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        trace_id = request.headers.get("x-trace-id") or f"trc_{uuid.uuid4().hex[:16]}"
        request.state.trace_id = trace_id
        bind_request_context(
            trace_id,
            delivery_id=request.headers.get("x-github-delivery"),
            event_type=request.headers.get("x-github-event"),
        )
        try:
            response = await call_next(request)
        finally:
            clear_request_context()
        response.headers["X-Trace-Id"] = trace_id
        return response
