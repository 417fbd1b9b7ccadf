"""Tests for the HR platform passthrough endpoints."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from leave_bridge.exceptions import GatewayFailure

if TYPE_CHECKING:
    from httpx import AsyncClient

    from .conftest import StubLeaveGateway

BALANCE_URL = "/leave-balance"
CREATE_URL = "/create-leave"

CREATE_PAYLOAD = {
    "person_number": "E1",
    "employer": "ADQ",
    "absence_type": "Annual Leave",
    "start_date": "2024-06-01",
    "end_date": "2024-06-03",
    "start_date_duration": "1",
    "end_date_duration": "1",
    "employee_token": "ZW1wbG95ZWU6dG9rZW4=",
}


# ---------------------------------------------------------------------------
# Leave balance
# ---------------------------------------------------------------------------


async def test_leave_balance_passthrough(async_client: AsyncClient, gateway: StubLeaveGateway) -> None:
    resp = await async_client.post(BALANCE_URL, json={"employee_number": "E1", "as_of_date": "2024-06-01"})
    assert resp.status_code == 200
    assert resp.json() == {"data": gateway.balance_body}
    assert gateway.balance_calls == [("E1", date(2024, 6, 1))]


async def test_leave_balance_accepts_platform_keys(async_client: AsyncClient, gateway: StubLeaveGateway) -> None:
    resp = await async_client.post(BALANCE_URL, json={"employeeNumber": "E1", "asofDate": "2024-06-01"})
    assert resp.status_code == 200
    assert gateway.balance_calls == [("E1", date(2024, 6, 1))]


async def test_leave_balance_upstream_failure(async_client: AsyncClient, gateway: StubLeaveGateway) -> None:
    gateway.fail_with = GatewayFailure(
        "getEmpLeaveBalance returned HTTP 401",
        upstream_status=401,
        body={"error": "unauthorized"},
    )
    resp = await async_client.post(BALANCE_URL, json={"employee_number": "E1", "as_of_date": "2024-06-01"})
    assert resp.status_code == 502
    body = resp.json()
    assert body["error"] == "GatewayFailure"
    assert body["detail"] == "getEmpLeaveBalance returned HTTP 401"
    assert body["context"] == {"upstream_status": 401, "body": {"error": "unauthorized"}}


async def test_leave_balance_validation(async_client: AsyncClient, gateway: StubLeaveGateway) -> None:
    resp = await async_client.post(BALANCE_URL, json={"employee_number": "E1", "as_of_date": "not-a-date"})
    assert resp.status_code == 422
    assert gateway.balance_calls == []


async def test_leave_balance_get_not_allowed(async_client: AsyncClient) -> None:
    resp = await async_client.get(BALANCE_URL)
    assert resp.status_code == 405


# ---------------------------------------------------------------------------
# Direct leave creation
# ---------------------------------------------------------------------------


async def test_create_leave_passthrough(async_client: AsyncClient, gateway: StubLeaveGateway) -> None:
    resp = await async_client.post(CREATE_URL, json=CREATE_PAYLOAD)
    assert resp.status_code == 200
    assert resp.json() == {"data": gateway.create_body}

    request, token = gateway.create_calls[0]
    assert token == CREATE_PAYLOAD["employee_token"]
    assert request.person_number == "E1"
    assert request.start_date == date(2024, 6, 1)


async def test_create_leave_accepts_platform_keys(async_client: AsyncClient, gateway: StubLeaveGateway) -> None:
    payload = {
        "personNumber": "E1",
        "employer": "ADQ",
        "absenceType": "Annual Leave",
        "startDate": "2024-06-01",
        "endDate": "2024-06-03",
        "absenceStatusCd": "SUBMITTED",
        "approvalStatusCd": "AWAITING",
        "startDateDuration": "1",
        "endDateDuration": "1",
        "employeeToken": "ZW1wbG95ZWU6dG9rZW4=",
    }
    resp = await async_client.post(CREATE_URL, json=payload)
    assert resp.status_code == 200

    request, token = gateway.create_calls[0]
    assert token == "ZW1wbG95ZWU6dG9rZW4="
    assert request.to_wire() == {k: v for k, v in payload.items() if k != "employeeToken"}


async def test_create_leave_records_no_approval(async_client: AsyncClient) -> None:
    await async_client.post(CREATE_URL, json=CREATE_PAYLOAD)
    listing = (await async_client.get("/approvals")).json()
    assert listing["counts"]["total"] == 0


async def test_create_leave_upstream_failure_not_masked(
    async_client: AsyncClient,
    gateway: StubLeaveGateway,
) -> None:
    gateway.fail_with = GatewayFailure("createLeave reported status Failed", upstream_status=200, body={"status": "Failed"})
    resp = await async_client.post(CREATE_URL, json=CREATE_PAYLOAD)
    assert resp.status_code == 502
    assert resp.json()["context"]["upstream_status"] == 200


async def test_create_leave_missing_field(async_client: AsyncClient, gateway: StubLeaveGateway) -> None:
    payload = {k: v for k, v in CREATE_PAYLOAD.items() if k != "absence_type"}
    resp = await async_client.post(CREATE_URL, json=payload)
    assert resp.status_code == 422
    assert gateway.create_calls == []


async def test_create_leave_get_not_allowed(async_client: AsyncClient) -> None:
    resp = await async_client.get(CREATE_URL)
    assert resp.status_code == 405
