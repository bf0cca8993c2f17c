"""
loyalty_bff.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`): downstream clients are open and not yet closed.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

router = APIRouter()

_DOWNSTREAM_CLIENTS = (
    "partner_management_http",
    "smart_vouchers_http",
    "payment_management_http",
)


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(request: Request):
    unavailable = []
    for name in _DOWNSTREAM_CLIENTS:
        client = getattr(request.app.state, name, None)
        if client is None or client.is_closed:
            unavailable.append(name)
    if unavailable:
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "unavailable": unavailable},
        )
    return {"status": "ready"}


# --- Module Notes -----------------------------------------------------------
# Readiness does not call downstream services; their own probes cover them.
