"""
loyalty_bff.api.routers.dev_auth

Customer token minting for local runs against the BFF without the auth service.
"""

from __future__ import annotations

import uuid
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field
from starlette.status import HTTP_404_NOT_FOUND

from loyalty_bff.api.deps import settings_dep
from loyalty_bff.auth.deps import jwt_config
from loyalty_bff.auth.jwt import issue_token
from loyalty_bff.schemas.base import ApiModel
from loyalty_bff.settings import Settings

router = APIRouter(prefix="/v1/dev", tags=["dev"])


class DevTokenRequest(ApiModel):
    customer_id: uuid.UUID
    ttl_minutes: int = Field(default=60, ge=1, le=24 * 60)


class DevTokenResponse(ApiModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


@router.post("/token", response_model=DevTokenResponse)
async def mint_customer_token(
    body: DevTokenRequest,
    settings: Settings = Depends(settings_dep),
) -> DevTokenResponse:
    if settings.env == "prod":
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Not found")

    ttl = timedelta(minutes=body.ttl_minutes)
    return DevTokenResponse(
        access_token=issue_token(
            cfg=jwt_config(settings), subject=str(body.customer_id), ttl=ttl
        ),
        expires_in=int(ttl.total_seconds()),
    )
