"""
loyalty_bff.clients.payment_management

HTTP client for the payment management service.
"""

from __future__ import annotations

import httpx

from loyalty_bff.clients.models import PaymentInfo


class PaymentManagementClient:
    def __init__(self, *, http: httpx.AsyncClient) -> None:
        self._http = http

    async def get_payment_info(self, external_payment_entity_id: str) -> PaymentInfo:
        # Smart voucher payments are keyed by the voucher short code.
        r = await self._http.post(
            "/api/payments/info",
            json={"externalPaymentEntityId": external_payment_entity_id},
        )
        r.raise_for_status()
        return PaymentInfo.model_validate(r.json())
