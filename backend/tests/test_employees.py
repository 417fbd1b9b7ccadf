"""Integration tests for the employee directory (upsert, lookup, routing, listing)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from leave_bridge.exceptions import EmployeeNotFound, ManagerNotFound, NoManagerAssigned
from leave_bridge.schemas.auth import AuthContext
from leave_bridge.schemas.employee import UpsertEmployeeRequest
from leave_bridge.services import directory

if TYPE_CHECKING:
    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

ADMIN_HEADERS = {"X-Employee-Number": "HR1", "X-Role": "admin"}
EMPLOYEE_HEADERS = {"X-Employee-Number": "E1", "X-Role": "employee"}
EMPLOYEES_URL = "/employees"
ADMIN = AuthContext(employee_number="HR1", role="admin")


async def _put_employee(
    client: AsyncClient,
    employee_number: str,
    display_name: str,
    manager_number: str | None = None,
) -> dict:
    resp = await client.put(
        f"{EMPLOYEES_URL}/{employee_number}",
        json={"display_name": display_name, "manager_number": manager_number},
        headers=ADMIN_HEADERS,
    )
    assert resp.status_code == 200, resp.json()
    result: dict = resp.json()
    return result


# ---------------------------------------------------------------------------
# Upsert tests
# ---------------------------------------------------------------------------


async def test_upsert_creates_employee(async_client: AsyncClient) -> None:
    data = await _put_employee(async_client, "M1", "Mariam Al Mansoori")
    assert data["employee_number"] == "M1"
    assert data["display_name"] == "Mariam Al Mansoori"
    assert data["manager_number"] is None
    assert data["manager_name"] is None
    assert data["active"] is True


async def test_upsert_snapshots_manager_name(async_client: AsyncClient) -> None:
    await _put_employee(async_client, "M1", "Mariam Al Mansoori")
    data = await _put_employee(async_client, "E1", "Sara Khalil", manager_number="M1")
    assert data["manager_number"] == "M1"
    assert data["manager_name"] == "Mariam Al Mansoori"


async def test_manager_rename_does_not_rewrite_snapshot(async_client: AsyncClient) -> None:
    await _put_employee(async_client, "M1", "Mariam Al Mansoori")
    await _put_employee(async_client, "E1", "Sara Khalil", manager_number="M1")
    await _put_employee(async_client, "M1", "Mariam Haddad")

    resp = await async_client.get(f"{EMPLOYEES_URL}/E1")
    assert resp.json()["manager_name"] == "Mariam Al Mansoori"


async def test_upsert_updates_existing(async_client: AsyncClient) -> None:
    await _put_employee(async_client, "M1", "Mariam Al Mansoori")
    await _put_employee(async_client, "E1", "Sara Khalil", manager_number="M1")
    data = await _put_employee(async_client, "E1", "Sara K.", manager_number=None)
    assert data["display_name"] == "Sara K."
    assert data["manager_number"] is None
    assert data["manager_name"] is None


async def test_upsert_unknown_manager_rejected(async_client: AsyncClient) -> None:
    resp = await async_client.put(
        f"{EMPLOYEES_URL}/E1",
        json={"display_name": "Sara Khalil", "manager_number": "NOPE"},
        headers=ADMIN_HEADERS,
    )
    assert resp.status_code == 422
    body = resp.json()
    assert body["error"] == "InvalidManager"
    assert body["context"] == {"employee_number": "E1", "manager_number": "NOPE"}

    # Nothing was written.
    assert (await async_client.get(f"{EMPLOYEES_URL}/E1")).status_code == 404


async def test_upsert_self_as_manager_rejected(async_client: AsyncClient) -> None:
    await _put_employee(async_client, "E1", "Sara Khalil")
    resp = await async_client.put(
        f"{EMPLOYEES_URL}/E1",
        json={"display_name": "Sara Khalil", "manager_number": "E1"},
        headers=ADMIN_HEADERS,
    )
    assert resp.status_code == 422
    assert resp.json()["error"] == "InvalidManager"


async def test_upsert_inactive_manager_rejected(async_client: AsyncClient) -> None:
    await _put_employee(async_client, "M1", "Mariam Al Mansoori")
    await async_client.post(f"{EMPLOYEES_URL}/M1/deactivate", headers=ADMIN_HEADERS)

    resp = await async_client.put(
        f"{EMPLOYEES_URL}/E1",
        json={"display_name": "Sara Khalil", "manager_number": "M1"},
        headers=ADMIN_HEADERS,
    )
    assert resp.status_code == 422


async def test_upsert_requires_admin(async_client: AsyncClient) -> None:
    resp = await async_client.put(
        f"{EMPLOYEES_URL}/E1",
        json={"display_name": "Sara Khalil"},
        headers=EMPLOYEE_HEADERS,
    )
    assert resp.status_code == 403


async def test_upsert_validation_error(async_client: AsyncClient) -> None:
    resp = await async_client.put(f"{EMPLOYEES_URL}/E1", json={"display_name": ""}, headers=ADMIN_HEADERS)
    assert resp.status_code == 422
    assert resp.json()["error"] == "ValidationError"


# ---------------------------------------------------------------------------
# Deactivation
# ---------------------------------------------------------------------------


async def test_deactivate_is_soft(async_client: AsyncClient) -> None:
    await _put_employee(async_client, "E1", "Sara Khalil")
    resp = await async_client.post(f"{EMPLOYEES_URL}/E1/deactivate", headers=ADMIN_HEADERS)
    assert resp.status_code == 200
    assert resp.json()["active"] is False

    # Still readable, just inactive.
    get_resp = await async_client.get(f"{EMPLOYEES_URL}/E1")
    assert get_resp.status_code == 200
    assert get_resp.json()["active"] is False


async def test_deactivate_unknown_employee(async_client: AsyncClient) -> None:
    resp = await async_client.post(f"{EMPLOYEES_URL}/NOPE/deactivate", headers=ADMIN_HEADERS)
    assert resp.status_code == 404
    assert resp.json()["error"] == "EmployeeNotFound"


async def test_upsert_reactivates(async_client: AsyncClient) -> None:
    await _put_employee(async_client, "E1", "Sara Khalil")
    await async_client.post(f"{EMPLOYEES_URL}/E1/deactivate", headers=ADMIN_HEADERS)
    data = await _put_employee(async_client, "E1", "Sara Khalil")
    assert data["active"] is True


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


async def test_list_employees_filters(async_client: AsyncClient) -> None:
    await _put_employee(async_client, "M1", "Mariam Al Mansoori")
    await _put_employee(async_client, "E1", "Sara Khalil", manager_number="M1")
    await _put_employee(async_client, "E2", "Yousef Nasser", manager_number="M1")
    await _put_employee(async_client, "E3", "Layla Farouk")
    await async_client.post(f"{EMPLOYEES_URL}/E2/deactivate", headers=ADMIN_HEADERS)

    resp = await async_client.get(EMPLOYEES_URL)
    assert resp.json()["total"] == 4

    resp = await async_client.get(EMPLOYEES_URL, params={"manager_number": "M1"})
    assert [e["employee_number"] for e in resp.json()["items"]] == ["E1", "E2"]

    resp = await async_client.get(EMPLOYEES_URL, params={"manager_number": "M1", "active": "true"})
    assert [e["employee_number"] for e in resp.json()["items"]] == ["E1"]


async def test_list_employees_pagination(async_client: AsyncClient) -> None:
    for n in range(1, 6):
        await _put_employee(async_client, f"E{n}", f"Employee {n}")

    resp = await async_client.get(EMPLOYEES_URL, params={"page": 2, "limit": 2})
    data = resp.json()
    assert data["total"] == 5
    assert data["page"] == 2
    assert [e["employee_number"] for e in data["items"]] == ["E3", "E4"]


# ---------------------------------------------------------------------------
# Service-level lookups
# ---------------------------------------------------------------------------


async def _seed(db_session: AsyncSession) -> None:
    await directory.upsert_employee(db_session, ADMIN, "M1", UpsertEmployeeRequest(display_name="Mariam"))
    await directory.upsert_employee(
        db_session, ADMIN, "E1", UpsertEmployeeRequest(display_name="Sara", manager_number="M1")
    )
    await directory.upsert_employee(db_session, ADMIN, "E2", UpsertEmployeeRequest(display_name="Yousef"))


async def test_lookup_active(db_session: AsyncSession) -> None:
    await _seed(db_session)
    employee = await directory.lookup(db_session, "E1")
    assert employee.display_name == "Sara"


async def test_lookup_inactive_treated_as_absent(db_session: AsyncSession) -> None:
    await _seed(db_session)
    await directory.deactivate_employee(db_session, ADMIN, "E1")
    with pytest.raises(EmployeeNotFound):
        await directory.lookup(db_session, "E1")


async def test_manager_of_resolves_one_level(db_session: AsyncSession) -> None:
    await _seed(db_session)
    manager = await directory.manager_of(db_session, "E1")
    assert manager.employee_number == "M1"


async def test_manager_of_no_manager(db_session: AsyncSession) -> None:
    await _seed(db_session)
    with pytest.raises(NoManagerAssigned):
        await directory.manager_of(db_session, "E2")


async def test_manager_of_inactive_manager(db_session: AsyncSession) -> None:
    await _seed(db_session)
    await directory.deactivate_employee(db_session, ADMIN, "M1")
    with pytest.raises(ManagerNotFound):
        await directory.manager_of(db_session, "E1")


async def test_manager_of_unknown_employee(db_session: AsyncSession) -> None:
    with pytest.raises(EmployeeNotFound):
        await directory.manager_of(db_session, "NOPE")
