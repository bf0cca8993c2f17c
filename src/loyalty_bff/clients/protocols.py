"""
loyalty_bff.clients.protocols

Interfaces for the downstream collaborators consumed by the orchestrator.

Responsibilities:
- Define one narrow capability set per downstream service.
- Let tests substitute in-memory fakes for the HTTP implementations.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from typing import Protocol

from loyalty_bff.clients.models import (
    CampaignsFilter,
    CampaignsPage,
    NearPartners,
    NearPartnersQuery,
    Partner,
    PaymentInfo,
    ProcessingVoucherErrorCode,
    RedeemVoucherErrorCode,
    ReservationResult,
    Voucher,
    VoucherCampaign,
    VoucherRedemption,
    VouchersPage,
)


class PartnerDirectoryProtocol(Protocol):
    """Partner management service"""

    async def get_by_id(self, partner_id: uuid.UUID) -> Partner | None:
        """Get a partner, None when it does not exist"""
        ...

    async def get_by_ids(self, partner_ids: Sequence[uuid.UUID]) -> list[Partner]:
        """Get the partners that exist among the given ids"""
        ...

    async def get_near(self, query: NearPartnersQuery) -> NearPartners:
        """Resolve partner ids near coordinates or within a country"""
        ...


class CampaignCatalogProtocol(Protocol):
    """Smart voucher campaigns"""

    async def list_campaigns(self, campaign_filter: CampaignsFilter) -> CampaignsPage:
        ...

    async def get_by_id(self, campaign_id: uuid.UUID) -> VoucherCampaign | None:
        ...

    async def get_by_ids(self, campaign_ids: Sequence[uuid.UUID]) -> list[VoucherCampaign]:
        ...


class VoucherOperationsProtocol(Protocol):
    """Smart voucher instances owned by customers"""

    async def reserve(
        self, *, customer_id: uuid.UUID, campaign_id: uuid.UUID
    ) -> ReservationResult:
        ...

    async def cancel_reservation(self, short_code: str) -> ProcessingVoucherErrorCode:
        ...

    async def list_for_customer(
        self, customer_id: uuid.UUID, *, current_page: int, page_size: int
    ) -> VouchersPage:
        ...

    async def get_by_short_code(self, short_code: str) -> Voucher | None:
        ...

    async def redeem(self, redemption: VoucherRedemption) -> RedeemVoucherErrorCode:
        ...


class PaymentInfoProtocol(Protocol):
    """Payment management service"""

    async def get_payment_info(self, external_payment_entity_id: str) -> PaymentInfo:
        ...


# --- Module Notes -----------------------------------------------------------
# Timeouts and retries are a transport concern; implementations configure them on
# the underlying httpx client, never in the orchestrator.
