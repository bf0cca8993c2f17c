"""
loyalty_bff.clients.models

Payload models for the downstream microservices.

Responsibilities:
- Parse camelCase JSON from partner management, smart vouchers and payment management.
- Mirror the downstream enumerations as stable string enums.
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DownstreamModel(BaseModel):
    # Downstream services are .NET; unknown fields are ignored so additive changes don't break us.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


# --- Enumerations -----------------------------------------------------------


class BusinessVertical(enum.StrEnum):
    hospitality = "Hospitality"
    real_estate = "RealEstate"
    retail = "Retail"


class VoucherCampaignState(enum.StrEnum):
    draft = "Draft"
    published = "Published"
    deleted = "Deleted"


class VoucherStatus(enum.StrEnum):
    in_stock = "InStock"
    reserved = "Reserved"
    sold = "Sold"
    used = "Used"
    expired = "Expired"


class Localization(enum.StrEnum):
    en = "En"
    ar = "Ar"


class VoucherCampaignContentType(enum.StrEnum):
    campaign_name = "Name"
    description = "Description"
    image_url = "ImageUrl"


class ProcessingVoucherErrorCode(enum.StrEnum):
    # Shared by reserve and cancel-reservation responses.
    none = "None"
    voucher_campaign_not_found = "VoucherCampaignNotFound"
    voucher_campaign_not_active = "VoucherCampaignNotActive"
    no_available_vouchers = "NoAvailableVouchers"
    invalid_partner_payment_configuration = "InvalidPartnerPaymentConfiguration"
    voucher_not_found = "VoucherNotFound"


class RedeemVoucherErrorCode(enum.StrEnum):
    none = "None"
    voucher_not_found = "VoucherNotFound"
    wrong_validation_code = "WrongValidationCode"
    seller_customer_is_not_a_linked_partner = "SellerCustomerIsNotALinkedPartner"
    seller_customer_is_not_the_voucher_issuer = "SellerCustomerIsNotTheVoucherIssuer"
    voucher_is_not_in_correct_status_to_be_redeemed = "VoucherIsNotInCorrectStatusToBeRedeemed"


# --- Partner management -----------------------------------------------------


class PartnerLocation(DownstreamModel):
    id: uuid.UUID | None = None
    name: str | None = None
    address: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    country_iso3_code: str | None = None


class Partner(DownstreamModel):
    id: uuid.UUID
    name: str
    business_vertical: BusinessVertical | None = None
    locations: list[PartnerLocation] = Field(default_factory=list)


class NearPartnersQuery(DownstreamModel):
    longitude: float | None = None
    latitude: float | None = None
    radius_in_km: float | None = None
    country_iso3_code: str | None = None


class NearPartners(DownstreamModel):
    partners_ids: list[uuid.UUID] = Field(default_factory=list)


# --- Smart vouchers ---------------------------------------------------------


class CampaignLocalizedContent(DownstreamModel):
    id: uuid.UUID | None = None
    content_type: VoucherCampaignContentType
    localization: Localization
    value: str | None = None


class VoucherCampaign(DownstreamModel):
    id: uuid.UUID
    name: str | None = None
    description: str | None = None
    vouchers_total_count: int = 0
    bought_vouchers_count: int = 0
    voucher_price: Decimal
    currency: str
    partner_id: uuid.UUID
    from_date: datetime
    to_date: datetime | None = None
    state: VoucherCampaignState = VoucherCampaignState.draft
    localized_contents: list[CampaignLocalizedContent] = Field(default_factory=list)

    def get_content_value(
        self, localization: Localization, content_type: VoucherCampaignContentType
    ) -> str | None:
        for content in self.localized_contents:
            if content.localization == localization and content.content_type == content_type:
                return content.value
        return None


class CampaignsFilter(DownstreamModel):
    campaign_name: str | None = None
    current_page: int = 1
    page_size: int = 20
    only_active: bool = True
    voucher_campaign_state: VoucherCampaignState | None = None
    partner_ids: list[uuid.UUID] | None = None


class CampaignsPage(DownstreamModel):
    campaigns: list[VoucherCampaign] = Field(default_factory=list)
    total_count: int = 0


class CampaignsBatch(DownstreamModel):
    campaigns: list[VoucherCampaign] = Field(default_factory=list)


class Voucher(DownstreamModel):
    id: uuid.UUID | None = None
    short_code: str
    validation_code: str | None = None
    campaign_id: uuid.UUID
    status: VoucherStatus
    owner_id: uuid.UUID | None = None
    purchase_date: datetime | None = None


class VouchersPage(DownstreamModel):
    vouchers: list[Voucher] = Field(default_factory=list)
    total_count: int = 0


class ReservationResult(DownstreamModel):
    error_code: ProcessingVoucherErrorCode
    payment_url: str | None = None


class ProcessingResult(DownstreamModel):
    error_code: ProcessingVoucherErrorCode


class VoucherRedemption(DownstreamModel):
    voucher_short_code: str
    voucher_validation_code: str
    seller_customer_id: uuid.UUID


class RedemptionResult(DownstreamModel):
    error_code: RedeemVoucherErrorCode


# --- Payment management -----------------------------------------------------


class PaymentInfo(DownstreamModel):
    payment_request_id: str | None = None
    external_payment_entity_id: str | None = None
    payment_url: str | None = None


# --- Module Notes -----------------------------------------------------------
# An unknown enum value in a downstream payload fails validation and surfaces as a
# server error; it indicates a contract mismatch, not a customer problem.
