"""
loyalty_bff.clients.smart_vouchers

HTTP clients for the smart vouchers service.

Responsibilities:
- Campaign catalog queries (list, single, batch by ids).
- Voucher operations (reserve, cancel, list per customer, lookup, redeem).

Both clients share one httpx client since they talk to the same service.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from urllib.parse import quote

import httpx
from starlette.status import HTTP_404_NOT_FOUND

from loyalty_bff.clients.models import (
    CampaignsBatch,
    CampaignsFilter,
    CampaignsPage,
    ProcessingResult,
    ProcessingVoucherErrorCode,
    RedeemVoucherErrorCode,
    RedemptionResult,
    ReservationResult,
    Voucher,
    VoucherCampaign,
    VoucherRedemption,
    VouchersPage,
)


class CampaignsClient:
    def __init__(self, *, http: httpx.AsyncClient) -> None:
        self._http = http

    async def list_campaigns(self, campaign_filter: CampaignsFilter) -> CampaignsPage:
        r = await self._http.get(
            "/api/campaigns",
            params=campaign_filter.model_dump(by_alias=True, exclude_none=True, mode="json"),
        )
        r.raise_for_status()
        return CampaignsPage.model_validate(r.json())

    async def get_by_id(self, campaign_id: uuid.UUID) -> VoucherCampaign | None:
        r = await self._http.get(f"/api/campaigns/{campaign_id}")
        if r.status_code == HTTP_404_NOT_FOUND:
            return None
        r.raise_for_status()
        return VoucherCampaign.model_validate(r.json())

    async def get_by_ids(self, campaign_ids: Sequence[uuid.UUID]) -> list[VoucherCampaign]:
        if not campaign_ids:
            return []
        r = await self._http.post(
            "/api/campaigns/byIds",
            json=[str(campaign_id) for campaign_id in campaign_ids],
        )
        r.raise_for_status()
        return CampaignsBatch.model_validate(r.json()).campaigns


class VouchersClient:
    def __init__(self, *, http: httpx.AsyncClient) -> None:
        self._http = http

    async def reserve(
        self, *, customer_id: uuid.UUID, campaign_id: uuid.UUID
    ) -> ReservationResult:
        r = await self._http.post(
            "/api/vouchers/reserve",
            json={"customerId": str(customer_id), "voucherCampaignId": str(campaign_id)},
        )
        r.raise_for_status()
        return ReservationResult.model_validate(r.json())

    async def cancel_reservation(self, short_code: str) -> ProcessingVoucherErrorCode:
        r = await self._http.post(
            "/api/vouchers/cancelReservation",
            json={"shortCode": short_code},
        )
        r.raise_for_status()
        return ProcessingResult.model_validate(r.json()).error_code

    async def list_for_customer(
        self, customer_id: uuid.UUID, *, current_page: int, page_size: int
    ) -> VouchersPage:
        r = await self._http.get(
            f"/api/vouchers/customer/{customer_id}",
            params={"currentPage": current_page, "pageSize": page_size},
        )
        r.raise_for_status()
        return VouchersPage.model_validate(r.json())

    async def get_by_short_code(self, short_code: str) -> Voucher | None:
        r = await self._http.get(f"/api/vouchers/{quote(short_code, safe='')}")
        if r.status_code == HTTP_404_NOT_FOUND:
            return None
        r.raise_for_status()
        return Voucher.model_validate(r.json())

    async def redeem(self, redemption: VoucherRedemption) -> RedeemVoucherErrorCode:
        r = await self._http.post(
            "/api/vouchers/usage",
            json=redemption.model_dump(by_alias=True, mode="json"),
        )
        r.raise_for_status()
        return RedemptionResult.model_validate(r.json()).error_code


# --- Module Notes -----------------------------------------------------------
# A 404 on a single-entity lookup means "absent" and is returned as None; every
# other non-2xx status raises httpx.HTTPStatusError and propagates.
