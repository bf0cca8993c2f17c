"""
loyalty_bff.services.smart_vouchers_service

Smart voucher request orchestration.

Responsibilities:
- Compose partner management, smart vouchers and payment management calls per operation.
- Join secondary entities best-effort: a miss is logged and leaves fields unset.
- Fail hard when the primary entity (the campaign or voucher asked for) is absent.
- Translate downstream outcome codes into client-facing errors.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from loyalty_bff.clients.models import (
    CampaignsFilter,
    NearPartnersQuery,
    ProcessingVoucherErrorCode,
    VoucherCampaignState,
)
from loyalty_bff.clients.protocols import (
    CampaignCatalogProtocol,
    PartnerDirectoryProtocol,
    PaymentInfoProtocol,
    VoucherOperationsProtocol,
)
from loyalty_bff.errors import ApiError, ApiErrorCode, UnexpectedDownstreamCodeError
from loyalty_bff.observability.logging import get_logger
from loyalty_bff.schemas.base import PaginationRequest
from loyalty_bff.schemas.smart_vouchers import (
    CampaignQuery,
    RedeemVoucherResultCode,
    ReserveSmartVoucherResponse,
    SmartVoucherCampaignDetailsResponse,
    SmartVoucherCampaignsListResponse,
    SmartVoucherDetailsResponse,
    SmartVoucherPaymentInfoResponse,
    SmartVouchersListResponse,
    VoucherRedemptionRequest,
)
from loyalty_bff.services import mapping
from loyalty_bff.settings import Settings

_NIL_UUID = uuid.UUID(int=0)


@dataclass(frozen=True, slots=True)
class OrchestrationOptions:
    # Campaign details: a missing partner fails the request instead of returning it unenriched.
    campaign_details_require_partner: bool = True
    # Reserve: report an invalid partner payment setup as NoAvailableVouchers.
    fold_payment_error_into_no_vouchers: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> OrchestrationOptions:
        return cls(
            campaign_details_require_partner=settings.campaign_details_require_partner,
            fold_payment_error_into_no_vouchers=settings.fold_payment_error_into_no_vouchers,
        )


def reserve_error_codes(
    options: OrchestrationOptions,
) -> dict[ProcessingVoucherErrorCode, ApiErrorCode]:
    payment_error = (
        ApiErrorCode.no_available_vouchers
        if options.fold_payment_error_into_no_vouchers
        else ApiErrorCode.payment_provider_error
    )
    return {
        ProcessingVoucherErrorCode.voucher_campaign_not_found: (
            ApiErrorCode.smart_voucher_campaign_not_found
        ),
        ProcessingVoucherErrorCode.voucher_campaign_not_active: (
            ApiErrorCode.smart_voucher_campaign_not_active
        ),
        ProcessingVoucherErrorCode.no_available_vouchers: ApiErrorCode.no_available_vouchers,
        ProcessingVoucherErrorCode.invalid_partner_payment_configuration: payment_error,
    }


class SmartVouchersService:
    def __init__(
        self,
        *,
        partners: PartnerDirectoryProtocol,
        campaigns: CampaignCatalogProtocol,
        vouchers: VoucherOperationsProtocol,
        payments: PaymentInfoProtocol,
        options: OrchestrationOptions | None = None,
    ) -> None:
        self._partners = partners
        self._campaigns = campaigns
        self._vouchers = vouchers
        self._payments = payments
        self._options = options or OrchestrationOptions()
        self._reserve_errors = reserve_error_codes(self._options)
        self._log = get_logger(__name__)

    async def list_campaigns(self, query: CampaignQuery) -> SmartVoucherCampaignsListResponse:
        partner_ids: list[uuid.UUID] | None = None
        if query.has_geo_filter:
            near = await self._partners.get_near(
                NearPartnersQuery(
                    longitude=query.longitude,
                    latitude=query.latitude,
                    radius_in_km=query.radius_in_km,
                    country_iso3_code=query.country_iso3_code,
                )
            )
            # An empty resolution means "no partner filter", not "no campaigns".
            if near.partners_ids:
                partner_ids = near.partners_ids

        page = await self._campaigns.list_campaigns(
            CampaignsFilter(
                campaign_name=query.campaign_name,
                current_page=query.current_page,
                page_size=query.page_size,
                only_active=True,
                voucher_campaign_state=VoucherCampaignState.published,
                partner_ids=partner_ids,
            )
        )

        result = SmartVoucherCampaignsListResponse(
            smart_voucher_campaigns=[mapping.to_campaign_response(c) for c in page.campaigns],
            total_count=page.total_count,
        )
        if not result.smart_voucher_campaigns:
            return result

        wanted = list(dict.fromkeys(c.partner_id for c in result.smart_voucher_campaigns))
        partners = {p.id: p for p in await self._partners.get_by_ids(wanted)}

        for campaign in result.smart_voucher_campaigns:
            partner = partners.get(campaign.partner_id)
            if partner is None:
                self._log.warning(
                    "smart_voucher_campaign_partner_missing",
                    partner_id=campaign.partner_id,
                    campaign_id=campaign.id,
                )
                continue
            mapping.apply_partner(campaign, partner)

        return result

    async def get_campaign(self, campaign_id: uuid.UUID) -> SmartVoucherCampaignDetailsResponse:
        if campaign_id == _NIL_UUID:
            raise ApiError.bad_request(ApiErrorCode.smart_voucher_campaign_not_found)

        campaign = await self._campaigns.get_by_id(campaign_id)
        if campaign is None:
            raise ApiError.bad_request(ApiErrorCode.smart_voucher_campaign_not_found)

        result = mapping.to_campaign_details_response(campaign)

        partner = await self._partners.get_by_id(campaign.partner_id)
        if partner is None:
            self._log.warning(
                "smart_voucher_campaign_partner_missing",
                partner_id=campaign.partner_id,
                campaign_id=campaign.id,
            )
            if self._options.campaign_details_require_partner:
                raise ApiError.bad_request(ApiErrorCode.smart_voucher_campaign_not_found)
            return result

        mapping.apply_partner(result, partner)
        return result

    async def reserve(
        self, *, customer_id: uuid.UUID, campaign_id: uuid.UUID
    ) -> ReserveSmartVoucherResponse:
        outcome = await self._vouchers.reserve(customer_id=customer_id, campaign_id=campaign_id)

        if outcome.error_code == ProcessingVoucherErrorCode.none:
            return ReserveSmartVoucherResponse(payment_url=outcome.payment_url)

        error_code = self._reserve_errors.get(outcome.error_code)
        if error_code is None:
            self._log.error(
                "smart_voucher_reserve_unexpected_code",
                error_code=str(outcome.error_code),
                campaign_id=campaign_id,
            )
            raise UnexpectedDownstreamCodeError("reserve", outcome.error_code)
        raise ApiError.bad_request(error_code)

    async def cancel_reservation(self, short_code: str) -> None:
        outcome = await self._vouchers.cancel_reservation(short_code)
        if outcome != ProcessingVoucherErrorCode.none:
            raise ApiError.bad_request(ApiErrorCode.smart_voucher_not_found)

    async def list_customer_vouchers(
        self, customer_id: uuid.UUID, paging: PaginationRequest
    ) -> SmartVouchersListResponse:
        page = await self._vouchers.list_for_customer(
            customer_id,
            current_page=paging.current_page,
            page_size=paging.page_size,
        )

        result = SmartVouchersListResponse(
            smart_vouchers=[mapping.to_voucher_response(v) for v in page.vouchers],
            total_count=page.total_count,
        )
        if not result.smart_vouchers:
            return result

        campaign_ids = list(dict.fromkeys(v.campaign_id for v in page.vouchers))
        campaigns = {c.id: c for c in await self._campaigns.get_by_ids(campaign_ids)}

        partner_ids = list(dict.fromkeys(c.partner_id for c in campaigns.values()))
        partner_names = {p.id: p.name for p in await self._partners.get_by_ids(partner_ids)}

        for voucher in result.smart_vouchers:
            campaign = campaigns.get(voucher.campaign_id)
            if campaign is None:
                self._log.warning(
                    "smart_voucher_campaign_missing",
                    voucher_short_code=voucher.short_code,
                    campaign_id=voucher.campaign_id,
                )
                continue

            mapping.apply_campaign(voucher, campaign)

            partner_name = partner_names.get(campaign.partner_id)
            if partner_name is None:
                self._log.warning(
                    "smart_voucher_partner_missing",
                    partner_id=campaign.partner_id,
                    campaign_id=campaign.id,
                )
                continue
            voucher.partner_name = partner_name

        return result

    async def get_voucher(self, short_code: str) -> SmartVoucherDetailsResponse:
        voucher = await self._vouchers.get_by_short_code(short_code)
        if voucher is None:
            raise ApiError.bad_request(ApiErrorCode.smart_voucher_not_found)

        result = mapping.to_voucher_details_response(voucher)

        campaign = await self._campaigns.get_by_id(voucher.campaign_id)
        if campaign is None:
            self._log.warning(
                "smart_voucher_campaign_missing",
                voucher_short_code=voucher.short_code,
                campaign_id=voucher.campaign_id,
            )
            return result

        mapping.apply_campaign(result, campaign)

        partner = await self._partners.get_by_id(campaign.partner_id)
        if partner is None:
            self._log.warning(
                "smart_voucher_partner_missing",
                partner_id=campaign.partner_id,
                campaign_id=campaign.id,
            )
        else:
            result.partner_name = partner.name

        return result

    async def get_payment_info(self, short_code: str) -> SmartVoucherPaymentInfoResponse:
        info = await self._payments.get_payment_info(short_code)
        if not info.payment_url:
            raise ApiError.not_found(ApiErrorCode.payment_info_not_found)
        return SmartVoucherPaymentInfoResponse(payment_url=info.payment_url)

    async def redeem(
        self, request: VoucherRedemptionRequest, *, seller_customer_id: uuid.UUID
    ) -> RedeemVoucherResultCode:
        outcome = await self._vouchers.redeem(
            mapping.to_redemption(request, seller_customer_id=seller_customer_id)
        )
        return mapping.to_redeem_result_code(outcome)


# --- Module Notes -----------------------------------------------------------
# Calls inside one operation are sequential because each lookup needs an id from the
# previous response. Nothing here holds state across requests.
