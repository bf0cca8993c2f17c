"""
loyalty_bff.auth.deps

FastAPI dependency functions for customer authentication.

Responsibilities:
- Build the token verification config from settings.
- Resolve the bearer token into a `Customer` and tag the request's log context with it.
"""

from __future__ import annotations

from datetime import timedelta

import structlog
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED

from loyalty_bff.api.deps import settings_dep
from loyalty_bff.auth.jwt import JwtConfig, JwtValidationError, decode_customer_id
from loyalty_bff.auth.models import Customer
from loyalty_bff.settings import Settings

_bearer = HTTPBearer(auto_error=False)


def jwt_config(settings: Settings) -> JwtConfig:
    return JwtConfig(
        alg=settings.jwt_alg,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        secret=settings.jwt_secret,
        leeway=timedelta(seconds=settings.jwt_leeway_seconds),
    )


async def get_customer(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
) -> Customer:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    try:
        customer_id = decode_customer_id(cfg=jwt_config(settings), token=creds.credentials)
    except JwtValidationError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    structlog.contextvars.bind_contextvars(customer_id=str(customer_id))
    return Customer(customer_id=customer_id)


# --- Module Notes -----------------------------------------------------------
# Every smart voucher endpoint depends on `get_customer`, so an anonymous caller
# never reaches a downstream service. The dependency is async so the bound
# customer id lands in the handler's context rather than a worker thread's.
