"""Seed script for development data.

Run with:  python -m leave_bridge.seed

Submissions go through the running API, so they reach whatever HR platform
ORACLE_BASE_URL points at. When it is unreachable the approvals are still
created with a synthesized gateway response.
"""

from __future__ import annotations

import asyncio
import sys
from datetime import date, timedelta

import httpx

BASE_URL = "http://localhost:8000"

ADMIN_HEADERS = {
    "Content-Type": "application/json",
    "X-Employee-Number": "ADMIN",
    "X-Role": "admin",
}

# Managers come first so that reports can reference them.
EMPLOYEES = [
    {"employee_number": "M1", "display_name": "Mariam Al Mansoori", "manager_number": None},
    {"employee_number": "M2", "display_name": "Omar Haddad", "manager_number": "M1"},
    {"employee_number": "E1", "display_name": "Sara Khalil", "manager_number": "M1"},
    {"employee_number": "E2", "display_name": "Yousef Nasser", "manager_number": "M2"},
    {"employee_number": "E3", "display_name": "Layla Farouk", "manager_number": "M2"},
]

# (employee_number, absence_type, days_from_today, length_days)
SUBMISSIONS = [
    ("E1", "Annual Leave", 7, 3),
    ("E2", "Sick Leave", 1, 1),
    ("E3", "Annual Leave", 21, 5),
]


async def _safe_put(client: httpx.AsyncClient, url: str, json: dict, label: str) -> dict | None:
    """PUT (upsert), naturally idempotent."""
    resp = await client.put(url, json=json, headers=ADMIN_HEADERS)
    if resp.status_code in (200, 201):
        print(f"  [OK] {label}")
        return resp.json()
    print(f"  [ERROR] {label}: {resp.status_code} {resp.text[:200]}")
    return None


async def seed_employees(client: httpx.AsyncClient) -> None:
    """Seed the directory via PUT (upsert)."""
    print("\n--- Seeding employees ---")
    for emp in EMPLOYEES:
        body = {"display_name": emp["display_name"], "manager_number": emp["manager_number"]}
        await _safe_put(
            client,
            f"{BASE_URL}/employees/{emp['employee_number']}",
            body,
            f"{emp['employee_number']} {emp['display_name']}",
        )


async def seed_approvals(client: httpx.AsyncClient) -> list[int]:
    """Submit leave for each seeded employee and return the approval ids."""
    print("\n--- Seeding approvals ---")
    existing = await client.get(f"{BASE_URL}/approvals", params={"limit": 1})
    if existing.status_code == 200 and existing.json()["counts"]["total"] > 0:
        print("  [SKIP] approvals already present")
        return []

    today = date.today()
    approval_ids: list[int] = []
    for employee_number, absence_type, offset, length in SUBMISSIONS:
        start = today + timedelta(days=offset)
        end = start + timedelta(days=length - 1)
        resp = await client.post(
            f"{BASE_URL}/approvals",
            json={
                "employee_number": employee_number,
                "absence_type": absence_type,
                "start_date": start.isoformat(),
                "end_date": end.isoformat(),
                "start_date_duration": "1",
                "end_date_duration": "1",
                "employee_token": f"seed-token-{employee_number}",
            },
        )
        if resp.status_code == 201:
            data = resp.json()
            approval_ids.append(data["approval_id"])
            print(f"  [OK] {employee_number} {absence_type} -> approval {data['approval_id']} ({data['response_source']})")
        else:
            print(f"  [ERROR] {employee_number}: {resp.status_code} {resp.text[:200]}")
    return approval_ids


async def seed_decisions(client: httpx.AsyncClient, approval_ids: list[int]) -> None:
    """Approve the first seeded approval so the listing shows both states."""
    print("\n--- Seeding decisions ---")
    if not approval_ids:
        print("  [SKIP] nothing to decide")
        return
    resp = await client.post(
        f"{BASE_URL}/approvals/{approval_ids[0]}/decision",
        json={"manager_number": "M1", "action": "APPROVE", "comments": "Enjoy the break"},
    )
    if resp.status_code == 200:
        print(f"  [OK] Approved approval {approval_ids[0]}")
    elif resp.status_code == 409:
        print(f"  [SKIP] Approval {approval_ids[0]} already decided")
    else:
        print(f"  [ERROR] Deciding approval {approval_ids[0]}: {resp.status_code}")


async def main() -> None:
    print("=" * 60)
    print("  Leave Bridge — Development Seed Script")
    print("=" * 60)

    async with httpx.AsyncClient(timeout=60.0) as client:
        try:
            resp = await client.get(f"{BASE_URL}/health")
            if resp.status_code != 200:
                print(f"API health check failed: {resp.status_code}")
                sys.exit(1)
            print("\n[OK] API is healthy")
        except httpx.ConnectError:
            print("ERROR: Cannot connect to API at", BASE_URL)
            sys.exit(1)

        await seed_employees(client)
        approval_ids = await seed_approvals(client)
        await seed_decisions(client, approval_ids)

    print("\n" + "=" * 60)
    print("  Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
