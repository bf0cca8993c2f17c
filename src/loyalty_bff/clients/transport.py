"""
loyalty_bff.clients.transport

Shared httpx client construction for downstream services.

Responsibilities:
- Apply base url and timeout per downstream service.
- Forward the inbound request id on every outbound call.
"""

from __future__ import annotations

import httpx

from loyalty_bff.observability.middleware import REQUEST_ID_HEADER, current_request_id


async def _forward_request_id(request: httpx.Request) -> None:
    request_id = current_request_id()
    if request_id and REQUEST_ID_HEADER not in request.headers:
        request.headers[REQUEST_ID_HEADER] = request_id


def build_http_client(
    *,
    base_url: str,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        timeout=httpx.Timeout(timeout),
        transport=transport,
        event_hooks={"request": [_forward_request_id]},
    )


# --- Module Notes -----------------------------------------------------------
# One AsyncClient per downstream service lives for the lifetime of the app so
# connection pools are reused across requests (see `api.app`).
