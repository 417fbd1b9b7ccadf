"""Reporting service: read-only approval listings and audit log queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from leave_bridge.models.approval import Approval
from leave_bridge.models.audit import AuditLog
from leave_bridge.models.enums import ApprovalStatus
from leave_bridge.schemas.approval import ApprovalCounts, ApprovalListResponse
from leave_bridge.schemas.report import AuditLogEntryResponse, AuditLogListResponse
from leave_bridge.services.approval import build_approval_response

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


async def list_approvals(
    session: AsyncSession,
    *,
    status_filter: ApprovalStatus | None = None,
    manager_number: str | None = None,
    employee_number: str | None = None,
    page: int = 1,
    limit: int = 50,
) -> ApprovalListResponse:
    """List approvals newest first, with counts computed over the filtered set."""
    filters = []
    if status_filter is not None:
        filters.append(col(Approval.status) == status_filter.value)
    if manager_number is not None:
        filters.append(col(Approval.manager_number) == manager_number)
    if employee_number is not None:
        filters.append(col(Approval.employee_number) == employee_number)

    count_result = await session.execute(
        select(col(Approval.status), func.count()).where(*filters).group_by(col(Approval.status))
    )
    by_status = {row[0]: row[1] for row in count_result.all()}
    counts = ApprovalCounts(
        total=sum(by_status.values()),
        pending=by_status.get(ApprovalStatus.PENDING.value, 0),
        approved=by_status.get(ApprovalStatus.APPROVED.value, 0),
        rejected=by_status.get(ApprovalStatus.REJECTED.value, 0),
    )

    result = await session.execute(
        select(Approval)
        .where(*filters)
        .order_by(col(Approval.submitted_at).desc(), col(Approval.id).desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    approvals = list(result.scalars().all())

    return ApprovalListResponse(
        items=[build_approval_response(a) for a in approvals],
        page=page,
        limit=limit,
        counts=counts,
    )


async def query_audit_log(
    session: AsyncSession,
    *,
    entity_type: str | None = None,
    entity_id: str | None = None,
    actor: str | None = None,
    offset: int = 0,
    limit: int = 50,
) -> AuditLogListResponse:
    """Query audit log entries with optional filters."""
    filters = []

    if entity_type is not None:
        filters.append(col(AuditLog.entity_type) == entity_type)
    if entity_id is not None:
        filters.append(col(AuditLog.entity_id) == entity_id)
    if actor is not None:
        filters.append(col(AuditLog.actor) == actor)

    count_result = await session.execute(select(func.count()).select_from(AuditLog).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(AuditLog).where(*filters).order_by(col(AuditLog.created_at).desc()).offset(offset).limit(limit)
    )
    entries = list(result.scalars().all())

    return AuditLogListResponse(
        items=[
            AuditLogEntryResponse(
                id=e.id,
                actor=e.actor,
                entity_type=e.entity_type,
                entity_id=e.entity_id,
                action=e.action,
                before_json=e.before_json,
                after_json=e.after_json,
                created_at=e.created_at,
            )
            for e in entries
        ],
        total=total,
    )
