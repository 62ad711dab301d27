"""ASGI middleware for cross-origin access and per-request log context.

``CORSHeadersMiddleware`` stamps the permissive CORS headers on every
response and answers every ``OPTIONS`` request itself, whatever the path.
``RequestContextMiddleware`` tags every log line of a request with an
``X-Request-ID`` and writes one access line per request.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

REQUEST_ID_HEADER = "X-Request-ID"

logger = structlog.get_logger()


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Applies CORS headers to all responses and short-circuits preflight."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            response = await call_next(request)

        response.headers.update(CORS_HEADERS)
        return response


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds request ID, method and path for the duration of a request.

    Takes the place of uvicorn's access log, which ``setup_logging`` silences.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        client = request.client.host if request.client else None

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        response: Response = await call_next(request)
        logger.info(
            "http_request",
            status_code=response.status_code,
            client=client,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
