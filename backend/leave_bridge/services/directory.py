"""Employee directory: identity records and one-level reporting lines."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from leave_bridge.exceptions import EmployeeNotFound, InvalidManager, ManagerNotFound, NoManagerAssigned
from leave_bridge.models.employee import Employee
from leave_bridge.models.enums import AuditAction, AuditEntityType
from leave_bridge.schemas.employee import EmployeeListResponse, EmployeeResponse
from leave_bridge.services.audit import model_to_audit_dict, write_audit_log

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_bridge.schemas.auth import AuthContext
    from leave_bridge.schemas.employee import UpsertEmployeeRequest


def build_employee_response(employee: Employee) -> EmployeeResponse:
    """Map an employee model to its response schema."""
    return EmployeeResponse(
        employee_number=employee.employee_number,
        display_name=employee.display_name,
        manager_number=employee.manager_number,
        manager_name=employee.manager_name,
        active=employee.active,
        created_at=employee.created_at,
        updated_at=employee.updated_at,
    )


async def _get_employee(session: AsyncSession, employee_number: str) -> Employee | None:
    """Fetch an employee by number regardless of active flag."""
    result = await session.execute(select(Employee).where(col(Employee.employee_number) == employee_number))
    return result.scalar_one_or_none()


async def lookup(session: AsyncSession, employee_number: str) -> Employee:
    """Return the active employee. Inactive employees are treated as absent."""
    employee = await _get_employee(session, employee_number)
    if employee is None or not employee.active:
        raise EmployeeNotFound(employee_number)
    return employee


async def manager_of(session: AsyncSession, employee_number: str) -> Employee:
    """Resolve the employee's direct manager. Only one level is ever followed."""
    employee = await lookup(session, employee_number)
    if employee.manager_number is None:
        raise NoManagerAssigned(employee_number)

    manager = await _get_employee(session, employee.manager_number)
    if manager is None or not manager.active:
        raise ManagerNotFound(employee.manager_number)
    return manager


async def get_employee(session: AsyncSession, employee_number: str) -> EmployeeResponse:
    """Get a directory entry, including deactivated ones."""
    employee = await _get_employee(session, employee_number)
    if employee is None:
        raise EmployeeNotFound(employee_number)
    return build_employee_response(employee)


async def list_employees(
    session: AsyncSession,
    *,
    active: bool | None = None,
    manager_number: str | None = None,
    page: int = 1,
    limit: int = 50,
) -> EmployeeListResponse:
    """List directory entries ordered by employee number."""
    filters = []
    if active is not None:
        filters.append(col(Employee.active) == active)
    if manager_number is not None:
        filters.append(col(Employee.manager_number) == manager_number)

    count_result = await session.execute(select(func.count()).select_from(Employee).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(Employee)
        .where(*filters)
        .order_by(col(Employee.employee_number))
        .offset((page - 1) * limit)
        .limit(limit)
    )
    employees = list(result.scalars().all())

    return EmployeeListResponse(
        items=[build_employee_response(e) for e in employees],
        total=total,
        page=page,
        limit=limit,
    )


async def upsert_employee(
    session: AsyncSession,
    auth: AuthContext,
    employee_number: str,
    payload: UpsertEmployeeRequest,
) -> EmployeeResponse:
    """Create or update an employee by number.

    A manager reference must resolve to another active employee; the manager's
    display name is snapshotted onto the record. Reporting cycles longer than
    one hop are not detected.
    """
    manager_name: str | None = None
    if payload.manager_number is not None:
        if payload.manager_number == employee_number:
            raise InvalidManager(employee_number, payload.manager_number)
        manager = await _get_employee(session, payload.manager_number)
        if manager is None or not manager.active:
            raise InvalidManager(employee_number, payload.manager_number)
        manager_name = manager.display_name

    employee = await _get_employee(session, employee_number)
    if employee is None:
        employee = Employee(
            employee_number=employee_number,
            display_name=payload.display_name,
            manager_number=payload.manager_number,
            manager_name=manager_name,
            active=payload.active,
        )
        session.add(employee)
        before_dict = None
        action = AuditAction.CREATE
    else:
        before_dict = model_to_audit_dict(employee)
        employee.display_name = payload.display_name
        employee.manager_number = payload.manager_number
        employee.manager_name = manager_name
        employee.active = payload.active
        employee.touch()
        action = AuditAction.UPDATE

    await session.flush()

    await write_audit_log(
        session,
        actor=auth.actor,
        entity_type=AuditEntityType.EMPLOYEE,
        entity_id=employee_number,
        action=action,
        before_json=before_dict,
        after_json=model_to_audit_dict(employee),
    )

    await session.commit()
    await session.refresh(employee)
    return build_employee_response(employee)


async def deactivate_employee(
    session: AsyncSession,
    auth: AuthContext,
    employee_number: str,
) -> EmployeeResponse:
    """Soft-deactivate an employee. Approvals referencing them are untouched."""
    employee = await _get_employee(session, employee_number)
    if employee is None:
        raise EmployeeNotFound(employee_number)
    if not employee.active:
        return build_employee_response(employee)

    before_dict = model_to_audit_dict(employee)
    employee.active = False
    employee.touch()
    await session.flush()

    await write_audit_log(
        session,
        actor=auth.actor,
        entity_type=AuditEntityType.EMPLOYEE,
        entity_id=employee_number,
        action=AuditAction.DEACTIVATE,
        before_json=before_dict,
        after_json=model_to_audit_dict(employee),
    )

    await session.commit()
    await session.refresh(employee)
    return build_employee_response(employee)
