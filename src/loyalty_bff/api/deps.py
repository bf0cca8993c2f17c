"""
loyalty_bff.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Expose the settings and password validator built once in `create_app`.
- Build the request-scoped orchestrator over the app-wide downstream httpx clients.
"""

from __future__ import annotations

from fastapi import Request

from loyalty_bff.clients.partner_management import PartnerManagementClient
from loyalty_bff.clients.payment_management import PaymentManagementClient
from loyalty_bff.clients.smart_vouchers import CampaignsClient, VouchersClient
from loyalty_bff.services.password_validator import PasswordValidator
from loyalty_bff.services.smart_vouchers_service import OrchestrationOptions, SmartVouchersService
from loyalty_bff.settings import Settings


def settings_dep(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def password_validator_dep(request: Request) -> PasswordValidator:
    return request.app.state.password_validator  # type: ignore[attr-defined]


def smart_vouchers_service_dep(request: Request) -> SmartVouchersService:
    # The httpx clients are opened in the app lifespan (see `loyalty_bff.api.app`).
    state = request.app.state
    return SmartVouchersService(
        partners=PartnerManagementClient(http=state.partner_management_http),
        campaigns=CampaignsClient(http=state.smart_vouchers_http),
        vouchers=VouchersClient(http=state.smart_vouchers_http),
        payments=PaymentManagementClient(http=state.payment_management_http),
        options=OrchestrationOptions.from_settings(state.settings),
    )


# --- Module Notes -----------------------------------------------------------
# Tests replace `smart_vouchers_service_dep` through `app.dependency_overrides` to run
# the HTTP layer against in-memory fakes.
