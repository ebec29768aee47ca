"""
mfe_registry.observability.middleware

HTTP middleware for request-scoped correlation context.

Responsibilities:
- Derive/generate correlation, request and session ids for each request.
- Attach them to the request (`request.state.context`) for handlers.
- Bind them into structlog contextvars for log enrichment, and clear them afterwards.
- Echo the ids on the response and log one line per request.
"""

from __future__ import annotations

from time import perf_counter

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from mfe_registry.observability.context import (
    CORRELATION_ID_HEADER,
    REQUEST_ID_HEADER,
    RequestContext,
)
from mfe_registry.observability.logging import get_logger

log = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    - Ensures every request has correlation/request/session ids
    - Binds them as contextvars for structured logs
    - Clears the contextvars on every exit path
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        context = RequestContext.from_headers(request.headers)
        request.state.context = context

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(**context.as_log_fields())
        started = perf_counter()
        status_code = HTTP_500_INTERNAL_SERVER_ERROR
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
        except Exception:
            # Rendered here rather than by ServerErrorMiddleware so the ids are still echoed.
            log.exception("unhandled_error", method=request.method, path=request.url.path)
            response = JSONResponse(
                {"detail": "Internal Server Error"}, status_code=HTTP_500_INTERNAL_SERVER_ERROR
            )
        finally:
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status=status_code,
                duration_ms=round((perf_counter() - started) * 1000.0, 2),
            )
            # Avoid leaking ids into the next request handled by this worker.
            structlog.contextvars.clear_contextvars()

        response.headers[CORRELATION_ID_HEADER] = context.correlation_id
        response.headers[REQUEST_ID_HEADER] = context.request_id
        return response


# --- Module Notes -----------------------------------------------------------
# Handlers read the explicit `RequestContext` through `api.deps.request_context`;
# contextvars are only used to decorate log lines.
