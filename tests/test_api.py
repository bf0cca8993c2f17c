"""
tests.test_api

HTTP surface of the BFF: routing, authentication, wire casing and error bodies.

The orchestrator dependency is overridden with one built over in-memory fakes, so
these tests exercise the FastAPI layer only.
"""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator
from dataclasses import dataclass

import httpx
import pytest
import pytest_asyncio

from downstream_fakes import (
    FakeCampaigns,
    FakePartners,
    FakePayments,
    FakeVouchers,
    make_campaign,
    make_partner,
    make_voucher,
)
from loyalty_bff.api.app import create_app
from loyalty_bff.api.deps import smart_vouchers_service_dep
from loyalty_bff.auth.deps import jwt_config
from loyalty_bff.auth.jwt import issue_token
from loyalty_bff.clients.models import ProcessingVoucherErrorCode, RedeemVoucherErrorCode
from loyalty_bff.services.smart_vouchers_service import SmartVouchersService
from loyalty_bff.settings import Settings

CUSTOMER_ID = uuid.UUID("5d2f7b8a-3c4e-4a1b-8f9d-0e1f2a3b4c5d")


@dataclass
class Downstream:
    partners: FakePartners
    campaigns: FakeCampaigns
    vouchers: FakeVouchers
    payments: FakePayments

    def total_calls(self) -> int:
        return sum(
            len(fake.calls)
            for fake in (self.partners, self.campaigns, self.vouchers, self.payments)
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(env="test")


@pytest.fixture
def downstream() -> Downstream:
    partner = make_partner("Sea Breeze Cafe")
    campaign = make_campaign(partner.id)
    voucher = make_voucher(campaign.id, short_code="ABC123", owner_id=CUSTOMER_ID)
    return Downstream(
        partners=FakePartners([partner]),
        campaigns=FakeCampaigns([campaign]),
        vouchers=FakeVouchers([voucher]),
        payments=FakePayments({"ABC123": "https://pay.example.com/session/9"}),
    )


@pytest.fixture
def auth_headers(settings: Settings) -> dict[str, str]:
    token = issue_token(cfg=jwt_config(settings), subject=str(CUSTOMER_ID))
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(settings: Settings, downstream: Downstream) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=settings)
    app.dependency_overrides[smart_vouchers_service_dep] = lambda: SmartVouchersService(
        partners=downstream.partners,
        campaigns=downstream.campaigns,
        vouchers=downstream.vouchers,
        payments=downstream.payments,
    )
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# --- Authentication ---------------------------------------------------------


@pytest.mark.asyncio
async def test_missing_token_is_rejected_before_downstream_calls(
    client: httpx.AsyncClient, downstream: Downstream
) -> None:
    r = await client.get("/api/smartVouchers/campaigns?currentPage=1&pageSize=10")

    assert r.status_code == 401
    assert downstream.total_calls() == 0


@pytest.mark.asyncio
async def test_token_for_wrong_audience_is_rejected(client: httpx.AsyncClient) -> None:
    other = Settings(env="test", jwt_audience="someone-else")
    token = issue_token(cfg=jwt_config(other), subject=str(CUSTOMER_ID))

    r = await client.get(
        "/api/smartVouchers/voucherShortCode?voucherShortCode=ABC123",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert r.status_code == 401


@pytest.mark.asyncio
async def test_token_with_non_uuid_subject_is_rejected(
    client: httpx.AsyncClient, settings: Settings
) -> None:
    token = issue_token(cfg=jwt_config(settings), subject="not-a-customer-id")

    r = await client.get(
        "/api/smartVouchers/voucherShortCode?voucherShortCode=ABC123",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert r.status_code == 401


# --- Campaigns --------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_campaigns_returns_camel_case_body(
    client: httpx.AsyncClient, auth_headers: dict[str, str]
) -> None:
    r = await client.get(
        "/api/smartVouchers/campaigns",
        params={"currentPage": 1, "pageSize": 10},
        headers=auth_headers,
    )

    assert r.status_code == 200
    body = r.json()
    assert body["totalCount"] == 1
    campaign = body["smartVoucherCampaigns"][0]
    assert campaign["name"] == "Two coffees"
    assert campaign["partnerName"] == "Sea Breeze Cafe"
    assert campaign["vertical"] == "Hospitality"
    assert campaign["voucherPrice"] == 12.5
    assert campaign["geolocations"] == [{"latitude": 25.2, "longitude": 55.27}]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {"currentPage": 0, "pageSize": 10},
        {"currentPage": 10001, "pageSize": 10},
        {"currentPage": 1, "pageSize": 0},
        {"currentPage": 1, "pageSize": 501},
        {"currentPage": 1},
    ],
)
async def test_list_campaigns_invalid_paging_is_rejected_without_downstream_calls(
    client: httpx.AsyncClient,
    auth_headers: dict[str, str],
    downstream: Downstream,
    params: dict[str, int],
) -> None:
    r = await client.get("/api/smartVouchers/campaigns", params=params, headers=auth_headers)

    assert r.status_code == 422
    body = r.json()
    assert body["error"] == "ModelValidationFailed"
    assert body["errors"]
    assert downstream.total_calls() == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {"id": str(uuid.UUID(int=0))},
        {},
        {"id": ""},
        {"id": "   "},
        {"id": "not-a-campaign-id"},
    ],
)
async def test_get_campaign_without_usable_id_is_not_found(
    client: httpx.AsyncClient,
    auth_headers: dict[str, str],
    downstream: Downstream,
    params: dict[str, str],
) -> None:
    r = await client.get(
        "/api/smartVouchers/campaigns/search", params=params, headers=auth_headers
    )

    assert r.status_code == 400
    assert r.json()["error"] == "SmartVoucherCampaignNotFound"
    assert downstream.total_calls() == 0


@pytest.mark.asyncio
async def test_get_campaign_returns_localized_contents(
    client: httpx.AsyncClient, auth_headers: dict[str, str], downstream: Downstream
) -> None:
    campaign_id = next(iter(downstream.campaigns.campaigns))

    r = await client.get(
        "/api/smartVouchers/campaigns/search",
        params={"id": str(campaign_id)},
        headers=auth_headers,
    )

    assert r.status_code == 200
    body = r.json()
    assert body["id"] == str(campaign_id)
    assert {c["contentType"] for c in body["localizedContents"]} == {
        "Name",
        "Description",
        "ImageUrl",
    }


# --- Reservation ------------------------------------------------------------


@pytest.mark.asyncio
async def test_reserve_uses_caller_as_customer(
    client: httpx.AsyncClient, auth_headers: dict[str, str], downstream: Downstream
) -> None:
    campaign_id = uuid.uuid4()

    r = await client.post(
        "/api/smartVouchers/reserve",
        json={"smartVoucherCampaignId": str(campaign_id)},
        headers=auth_headers,
    )

    assert r.status_code == 200
    assert r.json() == {"paymentUrl": "https://pay.example.com/session/1"}
    assert downstream.vouchers.calls == [("reserve", (CUSTOMER_ID, campaign_id))]


@pytest.mark.asyncio
async def test_reserve_failure_returns_error_body(
    client: httpx.AsyncClient, auth_headers: dict[str, str], downstream: Downstream
) -> None:
    downstream.vouchers.reserve_code = ProcessingVoucherErrorCode.no_available_vouchers

    r = await client.post(
        "/api/smartVouchers/reserve",
        json={"smartVoucherCampaignId": str(uuid.uuid4())},
        headers=auth_headers,
    )

    assert r.status_code == 400
    assert r.json()["error"] == "NoAvailableVouchers"


@pytest.mark.asyncio
async def test_reserve_unexpected_code_is_a_server_error(
    client: httpx.AsyncClient, auth_headers: dict[str, str], downstream: Downstream
) -> None:
    downstream.vouchers.reserve_code = ProcessingVoucherErrorCode.voucher_not_found

    r = await client.post(
        "/api/smartVouchers/reserve",
        json={"smartVoucherCampaignId": str(uuid.uuid4())},
        headers=auth_headers,
    )

    assert r.status_code == 500


@pytest.mark.asyncio
async def test_cancel_reservation_returns_no_content(
    client: httpx.AsyncClient, auth_headers: dict[str, str], downstream: Downstream
) -> None:
    r = await client.post(
        "/api/smartVouchers/cancelReservation",
        json={"shortCode": "ABC123"},
        headers=auth_headers,
    )

    assert r.status_code == 204
    assert r.content == b""
    assert downstream.vouchers.calls == [("cancel_reservation", "ABC123")]


@pytest.mark.asyncio
async def test_cancel_reservation_failure_is_voucher_not_found(
    client: httpx.AsyncClient, auth_headers: dict[str, str], downstream: Downstream
) -> None:
    downstream.vouchers.cancel_code = ProcessingVoucherErrorCode.voucher_campaign_not_active

    r = await client.post(
        "/api/smartVouchers/cancelReservation",
        json={"shortCode": "ABC123"},
        headers=auth_headers,
    )

    assert r.status_code == 400
    assert r.json()["error"] == "SmartVoucherNotFound"


# --- Vouchers ---------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_customer_vouchers_is_scoped_to_caller(
    client: httpx.AsyncClient, auth_headers: dict[str, str], downstream: Downstream
) -> None:
    r = await client.get(
        "/api/smartVouchers",
        params={"currentPage": 1, "pageSize": 20},
        headers=auth_headers,
    )

    assert r.status_code == 200
    body = r.json()
    assert body["totalCount"] == 1
    voucher = body["smartVouchers"][0]
    assert voucher["shortCode"] == "ABC123"
    assert voucher["partnerName"] == "Sea Breeze Cafe"
    assert "validationCode" not in voucher
    assert downstream.vouchers.calls[0] == ("list_for_customer", (CUSTOMER_ID, 1, 20))


@pytest.mark.asyncio
async def test_get_voucher_includes_validation_code(
    client: httpx.AsyncClient, auth_headers: dict[str, str]
) -> None:
    r = await client.get(
        "/api/smartVouchers/voucherShortCode",
        params={"voucherShortCode": "ABC123"},
        headers=auth_headers,
    )

    assert r.status_code == 200
    assert r.json()["validationCode"] == "VAL123"


@pytest.mark.asyncio
async def test_get_unknown_voucher_is_bad_request(
    client: httpx.AsyncClient, auth_headers: dict[str, str]
) -> None:
    r = await client.get(
        "/api/smartVouchers/voucherShortCode",
        params={"voucherShortCode": "MISSING"},
        headers=auth_headers,
    )

    assert r.status_code == 400
    assert r.json() == {"error": "SmartVoucherNotFound", "message": "Smart voucher not found"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("path", "param"),
    [
        ("/api/smartVouchers/voucherShortCode", "voucherShortCode"),
        ("/api/smartVouchers/paymentUrl", "shortCode"),
    ],
)
@pytest.mark.parametrize(
    "short_code",
    [f"../campaigns/{uuid.uuid4()}", f"../customer/{uuid.uuid4()}", "..", "ABC?x=1", "ABC#frag"],
)
async def test_short_code_that_is_not_a_plain_code_is_rejected(
    client: httpx.AsyncClient,
    auth_headers: dict[str, str],
    downstream: Downstream,
    path: str,
    param: str,
    short_code: str,
) -> None:
    r = await client.get(path, params={param: short_code}, headers=auth_headers)

    assert r.status_code == 422
    assert r.json()["error"] == "ModelValidationFailed"
    assert downstream.total_calls() == 0


@pytest.mark.asyncio
async def test_payment_url_found(client: httpx.AsyncClient, auth_headers: dict[str, str]) -> None:
    r = await client.get(
        "/api/smartVouchers/paymentUrl", params={"shortCode": "ABC123"}, headers=auth_headers
    )

    assert r.status_code == 200
    assert r.json() == {"paymentUrl": "https://pay.example.com/session/9"}


@pytest.mark.asyncio
async def test_payment_url_missing_is_not_found(
    client: httpx.AsyncClient, auth_headers: dict[str, str]
) -> None:
    r = await client.get(
        "/api/smartVouchers/paymentUrl", params={"shortCode": "OTHER1"}, headers=auth_headers
    )

    assert r.status_code == 404
    assert r.json()["error"] == "PaymentInfoNotFound"


@pytest.mark.asyncio
async def test_usage_returns_result_code_and_uses_caller_as_seller(
    client: httpx.AsyncClient, auth_headers: dict[str, str], downstream: Downstream
) -> None:
    downstream.vouchers.redeem_code = RedeemVoucherErrorCode.wrong_validation_code

    r = await client.post(
        "/api/smartVouchers/usage",
        json={"voucherShortCode": " ABC123 ", "voucherValidationCode": "BAD"},
        headers=auth_headers,
    )

    assert r.status_code == 200
    assert r.json() == "WrongValidationCode"
    _, redemption = downstream.vouchers.calls[0]
    assert redemption.voucher_short_code == "ABC123"
    assert redemption.seller_customer_id == CUSTOMER_ID


# --- Passwords --------------------------------------------------------------


@pytest.mark.asyncio
async def test_password_rules_are_public(client: httpx.AsyncClient) -> None:
    r = await client.get("/api/customers/passwordValidationRules")

    assert r.status_code == 200
    body = r.json()
    assert body["minLength"] == 8
    assert body["maxLength"] == 100
    assert body["allowWhiteSpaces"] is False
    assert body["message"].startswith("Password length should be between 8 and 100")


@pytest.mark.asyncio
async def test_password_validation_valid(client: httpx.AsyncClient) -> None:
    r = await client.post("/api/customers/passwordValidation", json={"password": "Abcd1!ef"})

    assert r.status_code == 200
    assert r.json() == {"isValid": True, "message": None}


@pytest.mark.asyncio
async def test_password_validation_invalid_carries_policy_message(
    client: httpx.AsyncClient,
) -> None:
    r = await client.post("/api/customers/passwordValidation", json={"password": "abcd1!ef"})

    assert r.status_code == 200
    body = r.json()
    assert body["isValid"] is False
    assert "Whitespaces are not allowed." in body["message"]


# --- Request context --------------------------------------------------------


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz", headers={"x-request-id": "mobile-42"})

    assert r.headers["x-request-id"] == "mobile-42"


@pytest.mark.asyncio
async def test_request_id_is_minted_when_absent(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz")

    assert uuid.UUID(r.headers["x-request-id"])


@pytest.mark.asyncio
async def test_dev_token_endpoint_mints_usable_token(client: httpx.AsyncClient) -> None:
    r = await client.post("/v1/dev/token", json={"customerId": str(CUSTOMER_ID)})

    assert r.status_code == 200
    assert r.json()["expiresIn"] == 3600
    token = r.json()["accessToken"]
    r = await client.get(
        "/api/smartVouchers/voucherShortCode",
        params={"voucherShortCode": "ABC123"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert r.status_code == 200
