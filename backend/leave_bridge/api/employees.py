from __future__ import annotations

from fastapi import APIRouter, Query

from leave_bridge.api.deps import AdminDep
from leave_bridge.db import SessionDep
from leave_bridge.schemas.employee import EmployeeListResponse, EmployeeResponse, UpsertEmployeeRequest
from leave_bridge.services import directory

employees_router = APIRouter(prefix="/employees", tags=["employees"])


@employees_router.put("/{employee_number}", response_model=EmployeeResponse)
async def upsert_employee(
    employee_number: str,
    payload: UpsertEmployeeRequest,
    session: SessionDep,
    auth: AdminDep,
) -> EmployeeResponse:
    """Create or update a directory entry (admin only)."""
    return await directory.upsert_employee(session, auth, employee_number, payload)


@employees_router.post("/{employee_number}/deactivate", response_model=EmployeeResponse)
async def deactivate_employee(
    employee_number: str,
    session: SessionDep,
    auth: AdminDep,
) -> EmployeeResponse:
    """Soft-deactivate an employee (admin only)."""
    return await directory.deactivate_employee(session, auth, employee_number)


@employees_router.get("/{employee_number}", response_model=EmployeeResponse)
async def get_employee(
    employee_number: str,
    session: SessionDep,
) -> EmployeeResponse:
    """Get a directory entry."""
    return await directory.get_employee(session, employee_number)


@employees_router.get("", response_model=EmployeeListResponse)
async def list_employees(
    session: SessionDep,
    active: bool | None = Query(default=None),
    manager_number: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=100),
) -> EmployeeListResponse:
    """List directory entries with optional filters."""
    return await directory.list_employees(
        session, active=active, manager_number=manager_number, page=page, limit=limit
    )
