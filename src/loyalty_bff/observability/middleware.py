"""
loyalty_bff.observability.middleware

Request correlation for mobile traffic.

Responsibilities:
- Keep the app-supplied request id (or mint one) and return it in the response.
- Scope structlog contextvars to a single request.
- Log one completion line per request with status and latency.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from loyalty_bff.observability.logging import get_logger

REQUEST_ID_HEADER = "x-request-id"

# Probes hit these every few seconds; a completion line each would drown real traffic.
_QUIET_PATHS = frozenset({"/healthz", "/readyz"})


def current_request_id() -> str | None:
    return structlog.contextvars.get_contextvars().get("request_id")


class RequestContextMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)
        self._log = get_logger(__name__)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        )
        started = time.perf_counter()
        try:
            response = await call_next(request)
            if request.url.path not in _QUIET_PATHS:
                self._log.info(
                    "request_completed",
                    status_code=response.status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 1),
                )
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


# --- Module Notes -----------------------------------------------------------
# `clients.transport` reads the bound request id to forward it downstream. Failed
# requests are not logged here; Starlette's error middleware logs the traceback.
