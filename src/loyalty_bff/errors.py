"""
loyalty_bff.errors

Client-visible error codes and the exceptions that carry them.

Responsibilities:
- Name every reason code the mobile application can receive.
- Carry an HTTP status with the code so routers stay free of status logic.
- Signal downstream contract mismatches that must not be mapped to a client response.
"""

from __future__ import annotations

import enum
from typing import Any

from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND


class ApiErrorCode(enum.StrEnum):
    smart_voucher_campaign_not_found = "SmartVoucherCampaignNotFound"
    smart_voucher_campaign_not_active = "SmartVoucherCampaignNotActive"
    no_available_vouchers = "NoAvailableVouchers"
    payment_provider_error = "PaymentProviderError"
    smart_voucher_not_found = "SmartVoucherNotFound"
    payment_info_not_found = "PaymentInfoNotFound"
    model_validation_failed = "ModelValidationFailed"


_MESSAGES: dict[ApiErrorCode, str] = {
    ApiErrorCode.smart_voucher_campaign_not_found: "Smart voucher campaign not found",
    ApiErrorCode.smart_voucher_campaign_not_active: "Smart voucher campaign is not active",
    ApiErrorCode.no_available_vouchers: "There are no available vouchers in this campaign",
    ApiErrorCode.payment_provider_error: "Partner payment provider is not configured correctly",
    ApiErrorCode.smart_voucher_not_found: "Smart voucher not found",
    ApiErrorCode.payment_info_not_found: "Payment info not found",
    ApiErrorCode.model_validation_failed: "Request validation failed",
}


class ApiError(Exception):
    def __init__(self, *, status_code: int, code: ApiErrorCode, message: str | None = None) -> None:
        self.status_code = status_code
        self.code = code
        self.message = message or _MESSAGES[code]
        super().__init__(f"{code}: {self.message}")

    @classmethod
    def bad_request(cls, code: ApiErrorCode) -> ApiError:
        return cls(status_code=HTTP_400_BAD_REQUEST, code=code)

    @classmethod
    def not_found(cls, code: ApiErrorCode) -> ApiError:
        return cls(status_code=HTTP_404_NOT_FOUND, code=code)

    def to_body(self) -> dict[str, Any]:
        return {"error": self.code.value, "message": self.message}


class UnexpectedDownstreamCodeError(Exception):
    """
    Raised when a downstream service answers with an outcome code this service
    does not handle. It is deliberately not an ApiError: it surfaces as a 500.
    """

    def __init__(self, operation: str, code: Any) -> None:
        self.operation = operation
        self.code = code
        super().__init__(f"unexpected {operation} outcome code: {code!r}")


# --- Module Notes -----------------------------------------------------------
# The JSON body shape {"error": ..., "message": ...} is what the mobile apps already parse.
