"""
loyalty_bff.api.routers.smart_vouchers

Customer-facing smart voucher endpoints.

Responsibilities:
- Bind query/body parameters (camelCase on the wire) to request models.
- Resolve the calling customer and delegate to `SmartVouchersService`.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, Response
from starlette.status import HTTP_204_NO_CONTENT

from loyalty_bff.api.deps import smart_vouchers_service_dep
from loyalty_bff.auth.deps import get_customer
from loyalty_bff.auth.models import Customer
from loyalty_bff.schemas.base import PaginationRequest
from loyalty_bff.schemas.smart_vouchers import (
    CampaignQuery,
    CancelSmartVoucherReservationRequest,
    RedeemVoucherResultCode,
    ReserveSmartVoucherRequest,
    ReserveSmartVoucherResponse,
    SmartVoucherCampaignDetailsResponse,
    SmartVoucherCampaignsListResponse,
    SmartVoucherDetailsResponse,
    SmartVoucherPaymentInfoResponse,
    SmartVouchersListResponse,
    VoucherRedemptionRequest,
)
from loyalty_bff.services.smart_vouchers_service import SmartVouchersService

router = APIRouter(prefix="/api/smartVouchers", tags=["smart-vouchers"])

_NIL_UUID = uuid.UUID(int=0)
_SHORT_CODE_PATTERN = r"^[A-Za-z0-9-]+$"


def _campaign_id_or_nil(raw: str | None) -> uuid.UUID:
    # A missing or malformed id is answered like the nil id: campaign not found.
    try:
        return uuid.UUID(raw.strip()) if raw else _NIL_UUID
    except ValueError:
        return _NIL_UUID


@router.get("/campaigns", response_model=SmartVoucherCampaignsListResponse)
async def list_campaigns(
    current_page: int = Query(alias="currentPage", ge=1, le=10000),
    page_size: int = Query(alias="pageSize", ge=1, le=500),
    campaign_name: str | None = Query(default=None, alias="campaignName", max_length=200),
    longitude: float | None = Query(default=None, ge=-180, le=180),
    latitude: float | None = Query(default=None, ge=-90, le=90),
    radius_in_km: float | None = Query(default=None, alias="radiusInKm", gt=0),
    country_iso3_code: str | None = Query(
        default=None, alias="countryIso3Code", min_length=3, max_length=3
    ),
    _: Customer = Depends(get_customer),
    svc: SmartVouchersService = Depends(smart_vouchers_service_dep),
) -> SmartVoucherCampaignsListResponse:
    query = CampaignQuery(
        current_page=current_page,
        page_size=page_size,
        campaign_name=campaign_name,
        longitude=longitude,
        latitude=latitude,
        radius_in_km=radius_in_km,
        country_iso3_code=country_iso3_code,
    )
    return await svc.list_campaigns(query)


@router.get("/campaigns/search", response_model=SmartVoucherCampaignDetailsResponse)
async def get_campaign(
    campaign_id: str | None = Query(default=None, alias="id"),
    _: Customer = Depends(get_customer),
    svc: SmartVouchersService = Depends(smart_vouchers_service_dep),
) -> SmartVoucherCampaignDetailsResponse:
    return await svc.get_campaign(_campaign_id_or_nil(campaign_id))


@router.post("/reserve", response_model=ReserveSmartVoucherResponse)
async def reserve_voucher(
    body: ReserveSmartVoucherRequest,
    customer: Customer = Depends(get_customer),
    svc: SmartVouchersService = Depends(smart_vouchers_service_dep),
) -> ReserveSmartVoucherResponse:
    return await svc.reserve(
        customer_id=customer.customer_id,
        campaign_id=body.smart_voucher_campaign_id,
    )


@router.post("/cancelReservation", status_code=HTTP_204_NO_CONTENT)
async def cancel_reservation(
    body: CancelSmartVoucherReservationRequest,
    _: Customer = Depends(get_customer),
    svc: SmartVouchersService = Depends(smart_vouchers_service_dep),
) -> Response:
    await svc.cancel_reservation(body.short_code)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.get("", response_model=SmartVouchersListResponse)
async def list_customer_vouchers(
    current_page: int = Query(alias="currentPage", ge=1, le=10000),
    page_size: int = Query(alias="pageSize", ge=1, le=500),
    customer: Customer = Depends(get_customer),
    svc: SmartVouchersService = Depends(smart_vouchers_service_dep),
) -> SmartVouchersListResponse:
    paging = PaginationRequest(current_page=current_page, page_size=page_size)
    return await svc.list_customer_vouchers(customer.customer_id, paging)


@router.get("/voucherShortCode", response_model=SmartVoucherDetailsResponse)
async def get_voucher(
    short_code: str = Query(
        alias="voucherShortCode", min_length=1, max_length=64, pattern=_SHORT_CODE_PATTERN
    ),
    _: Customer = Depends(get_customer),
    svc: SmartVouchersService = Depends(smart_vouchers_service_dep),
) -> SmartVoucherDetailsResponse:
    return await svc.get_voucher(short_code)


@router.get("/paymentUrl", response_model=SmartVoucherPaymentInfoResponse)
async def get_payment_info(
    short_code: str = Query(
        alias="shortCode", min_length=1, max_length=64, pattern=_SHORT_CODE_PATTERN
    ),
    _: Customer = Depends(get_customer),
    svc: SmartVouchersService = Depends(smart_vouchers_service_dep),
) -> SmartVoucherPaymentInfoResponse:
    return await svc.get_payment_info(short_code)


@router.post("/usage", response_model=RedeemVoucherResultCode)
async def redeem_voucher(
    body: VoucherRedemptionRequest,
    customer: Customer = Depends(get_customer),
    svc: SmartVouchersService = Depends(smart_vouchers_service_dep),
) -> RedeemVoucherResultCode:
    # The redeeming customer is the partner's seller account.
    return await svc.redeem(body, seller_customer_id=customer.customer_id)


# --- Module Notes -----------------------------------------------------------
# Query bounds mirror the request models so invalid paging is rejected with 422
# before any downstream call is made.
