"""
loyalty_bff.schemas.smart_vouchers

Smart voucher DTOs exposed by `/api/smartVouchers`.

Responsibilities:
- Request models (filters, reservation, cancellation, redemption).
- Response models enriched with partner and campaign data.

Enrichment fields default to None: a value left unset means the secondary
entity could not be joined.
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime

from pydantic import Field, model_validator

from loyalty_bff.clients.models import (
    BusinessVertical,
    Localization,
    VoucherCampaignContentType,
    VoucherCampaignState,
    VoucherStatus,
)
from loyalty_bff.schemas.base import ApiModel, Money, PaginationRequest

# --- Requests ---------------------------------------------------------------


class CampaignQuery(PaginationRequest):
    campaign_name: str | None = Field(default=None, max_length=200)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    radius_in_km: float | None = Field(default=None, gt=0)
    country_iso3_code: str | None = Field(default=None, min_length=3, max_length=3)

    @property
    def has_coordinates(self) -> bool:
        return (
            self.longitude is not None
            and self.latitude is not None
            and self.radius_in_km is not None
        )

    @property
    def has_geo_filter(self) -> bool:
        return self.has_coordinates or bool(self.country_iso3_code)


class ReserveSmartVoucherRequest(ApiModel):
    smart_voucher_campaign_id: uuid.UUID


class CancelSmartVoucherReservationRequest(ApiModel):
    short_code: str = Field(min_length=1, max_length=64)


class VoucherRedemptionRequest(ApiModel):
    voucher_short_code: str = Field(min_length=1, max_length=64)
    voucher_validation_code: str = Field(min_length=1, max_length=64)

    @model_validator(mode="after")
    def _strip(self) -> VoucherRedemptionRequest:
        self.voucher_short_code = self.voucher_short_code.strip()
        self.voucher_validation_code = self.voucher_validation_code.strip()
        return self


# --- Campaigns --------------------------------------------------------------


class GeolocationModel(ApiModel):
    latitude: float
    longitude: float


class LocalizedContentModel(ApiModel):
    content_type: VoucherCampaignContentType
    localization: Localization
    value: str | None = None


class SmartVoucherCampaignResponse(ApiModel):
    id: uuid.UUID
    name: str | None = None
    description: str | None = None
    image_url: str | None = None
    from_date: datetime
    to_date: datetime | None = None
    vouchers_total_count: int = 0
    bought_vouchers_count: int = 0
    voucher_price: Money
    currency: str
    state: VoucherCampaignState
    partner_id: uuid.UUID

    # Partner enrichment
    partner_name: str | None = None
    vertical: BusinessVertical | None = None
    geolocations: list[GeolocationModel] | None = None


class SmartVoucherCampaignDetailsResponse(SmartVoucherCampaignResponse):
    localized_contents: list[LocalizedContentModel] = Field(default_factory=list)


class SmartVoucherCampaignsListResponse(ApiModel):
    smart_voucher_campaigns: list[SmartVoucherCampaignResponse] = Field(default_factory=list)
    total_count: int = 0


# --- Vouchers ---------------------------------------------------------------


class SmartVoucherResponse(ApiModel):
    short_code: str
    campaign_id: uuid.UUID
    status: VoucherStatus
    owner_id: uuid.UUID | None = None
    purchase_date: datetime | None = None

    # Campaign enrichment
    campaign_name: str | None = None
    description: str | None = None
    image_url: str | None = None
    price: Money | None = None
    currency: str | None = None
    expiration_date: datetime | None = None
    partner_id: uuid.UUID | None = None

    # Partner enrichment
    partner_name: str | None = None


class SmartVoucherDetailsResponse(SmartVoucherResponse):
    validation_code: str | None = None


class SmartVouchersListResponse(ApiModel):
    smart_vouchers: list[SmartVoucherResponse] = Field(default_factory=list)
    total_count: int = 0


class ReserveSmartVoucherResponse(ApiModel):
    payment_url: str | None = None


class SmartVoucherPaymentInfoResponse(ApiModel):
    payment_url: str


class RedeemVoucherResultCode(enum.StrEnum):
    none = "None"
    voucher_not_found = "VoucherNotFound"
    wrong_validation_code = "WrongValidationCode"
    seller_customer_is_not_a_linked_partner = "SellerCustomerIsNotALinkedPartner"
    seller_customer_is_not_the_voucher_issuer = "SellerCustomerIsNotTheVoucherIssuer"
    voucher_is_not_in_correct_status_to_be_redeemed = "VoucherIsNotInCorrectStatusToBeRedeemed"


# --- Module Notes -----------------------------------------------------------
# RedeemVoucherResultCode is the client contract; it is kept separate from the
# downstream enum so a downstream rename cannot leak to the mobile app.
