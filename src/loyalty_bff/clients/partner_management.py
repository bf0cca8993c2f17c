"""
loyalty_bff.clients.partner_management

HTTP client for the partner management service.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence

import httpx
from starlette.status import HTTP_404_NOT_FOUND

from loyalty_bff.clients.models import NearPartners, NearPartnersQuery, Partner


class PartnerManagementClient:
    def __init__(self, *, http: httpx.AsyncClient) -> None:
        self._http = http

    async def get_by_id(self, partner_id: uuid.UUID) -> Partner | None:
        r = await self._http.get(f"/api/partners/{partner_id}")
        if r.status_code == HTTP_404_NOT_FOUND:
            return None
        r.raise_for_status()
        return Partner.model_validate(r.json())

    async def get_by_ids(self, partner_ids: Sequence[uuid.UUID]) -> list[Partner]:
        if not partner_ids:
            return []
        r = await self._http.post(
            "/api/partners/byIds",
            json=[str(partner_id) for partner_id in partner_ids],
        )
        r.raise_for_status()
        return [Partner.model_validate(item) for item in r.json()]

    async def get_near(self, query: NearPartnersQuery) -> NearPartners:
        r = await self._http.get(
            "/api/partners/near",
            params=query.model_dump(by_alias=True, exclude_none=True, mode="json"),
        )
        r.raise_for_status()
        return NearPartners.model_validate(r.json())
