"""
loyalty_bff.services.mapping

Field-by-field construction of client DTOs from downstream payloads.

Responsibilities:
- Build response shapes from primary entities.
- Apply best-effort enrichment from secondary entities.
- Translate downstream outcome codes into client-facing codes.
"""

from __future__ import annotations

import uuid

from loyalty_bff.clients.models import (
    Localization,
    Partner,
    RedeemVoucherErrorCode,
    Voucher,
    VoucherCampaign,
    VoucherCampaignContentType,
    VoucherRedemption,
)
from loyalty_bff.schemas.smart_vouchers import (
    GeolocationModel,
    LocalizedContentModel,
    RedeemVoucherResultCode,
    SmartVoucherCampaignDetailsResponse,
    SmartVoucherCampaignResponse,
    SmartVoucherDetailsResponse,
    SmartVoucherResponse,
    VoucherRedemptionRequest,
)

# Customer-facing text is served in English.
DEFAULT_LOCALIZATION = Localization.en


def _content(campaign: VoucherCampaign, content_type: VoucherCampaignContentType) -> str | None:
    return campaign.get_content_value(DEFAULT_LOCALIZATION, content_type)


def to_campaign_response(campaign: VoucherCampaign) -> SmartVoucherCampaignResponse:
    return SmartVoucherCampaignResponse(**_campaign_fields(campaign))


def to_campaign_details_response(campaign: VoucherCampaign) -> SmartVoucherCampaignDetailsResponse:
    return SmartVoucherCampaignDetailsResponse(
        **_campaign_fields(campaign),
        localized_contents=[
            LocalizedContentModel(
                content_type=c.content_type,
                localization=c.localization,
                value=c.value,
            )
            for c in campaign.localized_contents
        ],
    )


def _campaign_fields(campaign: VoucherCampaign) -> dict:
    return {
        "id": campaign.id,
        "name": _content(campaign, VoucherCampaignContentType.campaign_name) or campaign.name,
        "description": (
            _content(campaign, VoucherCampaignContentType.description) or campaign.description
        ),
        "image_url": _content(campaign, VoucherCampaignContentType.image_url),
        "from_date": campaign.from_date,
        "to_date": campaign.to_date,
        "vouchers_total_count": campaign.vouchers_total_count,
        "bought_vouchers_count": campaign.bought_vouchers_count,
        "voucher_price": campaign.voucher_price,
        "currency": campaign.currency,
        "state": campaign.state,
        "partner_id": campaign.partner_id,
    }


def partner_geolocations(partner: Partner) -> list[GeolocationModel]:
    # Locations without both coordinates cannot be shown on the map.
    return [
        GeolocationModel(latitude=loc.latitude, longitude=loc.longitude)
        for loc in partner.locations
        if loc.latitude is not None and loc.longitude is not None
    ]


def apply_partner(campaign: SmartVoucherCampaignResponse, partner: Partner) -> None:
    campaign.vertical = partner.business_vertical
    campaign.partner_name = partner.name
    campaign.geolocations = partner_geolocations(partner)


def to_voucher_response(voucher: Voucher) -> SmartVoucherResponse:
    return SmartVoucherResponse(**_voucher_fields(voucher))


def to_voucher_details_response(voucher: Voucher) -> SmartVoucherDetailsResponse:
    return SmartVoucherDetailsResponse(
        **_voucher_fields(voucher),
        validation_code=voucher.validation_code,
    )


def _voucher_fields(voucher: Voucher) -> dict:
    return {
        "short_code": voucher.short_code,
        "campaign_id": voucher.campaign_id,
        "status": voucher.status,
        "owner_id": voucher.owner_id,
        "purchase_date": voucher.purchase_date,
    }


def apply_campaign(voucher: SmartVoucherResponse, campaign: VoucherCampaign) -> None:
    voucher.campaign_name = _content(campaign, VoucherCampaignContentType.campaign_name)
    voucher.image_url = _content(campaign, VoucherCampaignContentType.image_url)
    voucher.description = _content(campaign, VoucherCampaignContentType.description)
    voucher.expiration_date = campaign.to_date
    voucher.partner_id = campaign.partner_id
    voucher.price = campaign.voucher_price
    voucher.currency = campaign.currency


def to_redemption(
    request: VoucherRedemptionRequest, *, seller_customer_id: uuid.UUID
) -> VoucherRedemption:
    return VoucherRedemption(
        voucher_short_code=request.voucher_short_code,
        voucher_validation_code=request.voucher_validation_code,
        seller_customer_id=seller_customer_id,
    )


REDEEM_RESULT_CODES: dict[RedeemVoucherErrorCode, RedeemVoucherResultCode] = {
    RedeemVoucherErrorCode.none: RedeemVoucherResultCode.none,
    RedeemVoucherErrorCode.voucher_not_found: RedeemVoucherResultCode.voucher_not_found,
    RedeemVoucherErrorCode.wrong_validation_code: RedeemVoucherResultCode.wrong_validation_code,
    RedeemVoucherErrorCode.seller_customer_is_not_a_linked_partner: (
        RedeemVoucherResultCode.seller_customer_is_not_a_linked_partner
    ),
    RedeemVoucherErrorCode.seller_customer_is_not_the_voucher_issuer: (
        RedeemVoucherResultCode.seller_customer_is_not_the_voucher_issuer
    ),
    RedeemVoucherErrorCode.voucher_is_not_in_correct_status_to_be_redeemed: (
        RedeemVoucherResultCode.voucher_is_not_in_correct_status_to_be_redeemed
    ),
}

_unmapped = set(RedeemVoucherErrorCode) - set(REDEEM_RESULT_CODES)
if _unmapped:
    raise RuntimeError(f"redeem error codes without a client mapping: {sorted(_unmapped)}")


def to_redeem_result_code(code: RedeemVoucherErrorCode) -> RedeemVoucherResultCode:
    return REDEEM_RESULT_CODES[code]


# --- Module Notes -----------------------------------------------------------
# Reserve/cancel outcome translation depends on configuration and lives in the
# orchestrator (`services.smart_vouchers_service`).
