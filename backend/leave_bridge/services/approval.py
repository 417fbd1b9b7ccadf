"""Approval workflow engine: submission, manager routing, and single-decision recording."""

from __future__ import annotations

import logging
import secrets
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from leave_bridge.config import get_settings
from leave_bridge.exceptions import (
    AlreadyDecided,
    ApprovalNotFound,
    ConflictError,
    EmployeeNotFound,
    GatewayFailure,
    ManagerNotFound,
    Unauthorized,
)
from leave_bridge.models.approval import Approval
from leave_bridge.models.enums import ApprovalStatus, AuditAction, AuditEntityType, DecisionAction, ResponseSource
from leave_bridge.schemas.approval import (
    ApprovalResponse,
    DecisionResult,
    LeaveRequest,
    PendingApprovalsResponse,
    SubmissionResult,
)
from leave_bridge.schemas.gateway import AbsenceConfirmation, CreateAbsenceRequest, GatewayResult
from leave_bridge.services import directory
from leave_bridge.services.audit import model_to_audit_dict, write_audit_log

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_bridge.schemas.approval import DecisionPayload, SubmitLeavePayload
    from leave_bridge.services.gateway import LeaveGateway

logger = logging.getLogger(__name__)

ABSENCE_STATUS_SUBMITTED = "SUBMITTED"
APPROVAL_STATUS_AWAITING = "AWAITING"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def format_duration(start_date: date, end_date: date) -> str:
    """Human-readable calendar length of a leave range, both ends inclusive."""
    days = (end_date - start_date).days + 1
    return f"{days} day(s)"


def _local_correlation_id() -> str:
    return f"LOCAL-{datetime.now(UTC):%Y%m%d%H%M%S%f}-{secrets.token_hex(3)}"


def build_approval_response(approval: Approval) -> ApprovalResponse:
    """Map an approval model to its response schema."""
    return ApprovalResponse(
        id=approval.id,
        employee_number=approval.employee_number,
        employee_name=approval.employee_name,
        manager_number=approval.manager_number,
        manager_name=approval.manager_name,
        leave_request=LeaveRequest.model_validate(approval.leave_request_json),
        status=ApprovalStatus(approval.status),
        submitted_at=approval.submitted_at,
        decided_by=approval.decided_by,
        decided_at=approval.decided_at,
        comments=approval.comments,
        gateway_response=GatewayResult.model_validate(approval.gateway_response_json),
    )


async def _get_approval_or_404(session: AsyncSession, approval_id: int) -> Approval:
    result = await session.execute(select(Approval).where(col(Approval.id) == approval_id))
    approval = result.scalar_one_or_none()
    if approval is None:
        raise ApprovalNotFound(approval_id)
    return approval


async def _next_approval_id(session: AsyncSession) -> int:
    """Next integer after the highest allocated approval id (1 for an empty store)."""
    result = await session.execute(select(func.max(col(Approval.id))))
    current = result.scalar_one_or_none()
    return (current or 0) + 1


def _synthesize_result(payload: SubmitLeavePayload, failure: GatewayFailure) -> GatewayResult:
    """Stand-in confirmation used when the HR platform cannot record the leave."""
    confirmation = AbsenceConfirmation(
        status=ResponseSource.SYNTHESIZED.value,
        correlation_id=_local_correlation_id(),
        absence_type=payload.absence_type,
        submission_date=date.today(),
        person_id=f"LOCAL-{payload.employee_number}",
        duration=format_duration(payload.start_date, payload.end_date),
    )
    return GatewayResult(
        source=ResponseSource.SYNTHESIZED,
        confirmation=confirmation,
        failure_reason=failure.message,
        upstream_status=failure.upstream_status,
    )


async def _create_absence_or_fallback(gateway: LeaveGateway, payload: SubmitLeavePayload) -> GatewayResult:
    """Create the leave upstream; absorb a GatewayFailure into a synthesized result."""
    request = CreateAbsenceRequest(
        person_number=payload.employee_number,
        employer=get_settings().hr_employer,
        absence_type=payload.absence_type,
        start_date=payload.start_date,
        end_date=payload.end_date,
        absence_status_cd=ABSENCE_STATUS_SUBMITTED,
        approval_status_cd=APPROVAL_STATUS_AWAITING,
        start_date_duration=payload.start_date_duration,
        end_date_duration=payload.end_date_duration,
    )
    try:
        confirmation = await gateway.create_absence(request, payload.employee_token)
    except GatewayFailure as exc:
        logger.warning(
            "Leave creation failed upstream for employee %s (upstream status %s), using local fallback: %s",
            payload.employee_number,
            exc.upstream_status,
            exc.message,
        )
        return _synthesize_result(payload, exc)
    return GatewayResult(source=ResponseSource.GENUINE, confirmation=confirmation)


def _build_leave_request(
    payload: SubmitLeavePayload,
    employee_name: str,
    gateway_result: GatewayResult,
) -> LeaveRequest:
    confirmation = gateway_result.confirmation
    return LeaveRequest(
        correlation_id=confirmation.correlation_id or _local_correlation_id(),
        absence_type=confirmation.absence_type or payload.absence_type,
        start_date=payload.start_date,
        end_date=payload.end_date,
        duration=confirmation.duration or format_duration(payload.start_date, payload.end_date),
        submission_date=confirmation.submission_date or date.today(),
        employee_number=payload.employee_number,
        employee_name=employee_name,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def submit_leave(
    session: AsyncSession,
    gateway: LeaveGateway,
    payload: SubmitLeavePayload,
) -> SubmissionResult:
    """Submit leave and route it to the employee's manager.

    Flow:
    1. Resolve the active employee
    2. Resolve the direct manager (one level)
    3. Create the leave on the HR platform on behalf of the employee
    4. On upstream failure, synthesize a tagged substitute result
    5. Allocate the next approval id
    6. Insert the PENDING approval with name snapshots, retrying on id conflicts
    7. Write audit log and commit
    """
    # 1-2. Routing.
    employee = await directory.lookup(session, payload.employee_number)
    manager = await directory.manager_of(session, payload.employee_number)
    employee_name = employee.display_name
    manager_number = manager.employee_number
    manager_name = manager.display_name

    # 3-4. Upstream creation with fallback.
    gateway_result = await _create_absence_or_fallback(gateway, payload)
    leave_request = _build_leave_request(payload, employee_name, gateway_result)

    # 5-7. Allocation and insert.
    max_attempts = get_settings().approval_id_max_attempts
    submitted_at = datetime.now(UTC)
    for attempt in range(1, max_attempts + 1):
        approval_id = await _next_approval_id(session)
        approval = Approval(
            id=approval_id,
            employee_number=payload.employee_number,
            employee_name=employee_name,
            manager_number=manager_number,
            manager_name=manager_name,
            leave_request_json=leave_request.model_dump(mode="json"),
            gateway_response_json=gateway_result.model_dump(mode="json"),
            response_source=gateway_result.source.value,
            status=ApprovalStatus.PENDING.value,
            submitted_at=submitted_at,
        )
        session.add(approval)
        try:
            await session.flush()
        except IntegrityError:
            await session.rollback()
            logger.warning("Approval id %d already allocated (attempt %d of %d)", approval_id, attempt, max_attempts)
            continue

        await write_audit_log(
            session,
            actor=payload.employee_number,
            entity_type=AuditEntityType.APPROVAL,
            entity_id=approval_id,
            action=AuditAction.SUBMIT,
            after_json=model_to_audit_dict(approval),
        )
        await session.commit()

        logger.info(
            "Approval %d created for employee %s, routed to manager %s (%s response)",
            approval_id,
            payload.employee_number,
            manager_number,
            gateway_result.source.value,
        )
        return SubmissionResult(
            approval_id=approval_id,
            status=ApprovalStatus.PENDING,
            manager_number=manager_number,
            manager_name=manager_name,
            response_source=gateway_result.source,
            message=f"Leave request submitted to {manager_name} for approval",
        )

    raise ConflictError("Could not allocate an approval id", context={"attempts": max_attempts})


async def decide_approval(
    session: AsyncSession,
    approval_id: int,
    payload: DecisionPayload,
) -> DecisionResult:
    """Record a manager's decision on a pending approval.

    Authorization uses the manager snapshot taken at submission time. The
    status update is conditional on the row still being PENDING, so of two
    concurrent decisions exactly one is recorded. Nothing is pushed back to
    the HR platform.
    """
    try:
        await directory.lookup(session, payload.manager_number)
    except EmployeeNotFound:
        raise ManagerNotFound(payload.manager_number) from None

    approval = await _get_approval_or_404(session, approval_id)

    if approval.manager_number != payload.manager_number:
        raise Unauthorized(approval_id, payload.manager_number)

    if approval.status != ApprovalStatus.PENDING.value:
        raise AlreadyDecided(approval_id, approval.status)

    before_dict = model_to_audit_dict(approval)
    new_status = payload.action.resulting_status
    comments = payload.comments or ""
    now = datetime.now(UTC)

    result = await session.execute(
        update(Approval)
        .where(
            col(Approval.id) == approval_id,
            col(Approval.status) == ApprovalStatus.PENDING.value,
        )
        .values(
            status=new_status.value,
            decided_by=payload.manager_number,
            decided_at=now,
            comments=comments,
        )
    )
    if result.rowcount == 0:  # type: ignore[attr-defined]
        await session.rollback()
        current = await _get_approval_or_404(session, approval_id)
        raise AlreadyDecided(approval_id, current.status)

    await session.refresh(approval)

    await write_audit_log(
        session,
        actor=payload.manager_number,
        entity_type=AuditEntityType.APPROVAL,
        entity_id=approval_id,
        action=AuditAction.APPROVE if payload.action == DecisionAction.APPROVE else AuditAction.REJECT,
        before_json=before_dict,
        after_json=model_to_audit_dict(approval),
    )
    await session.commit()

    logger.info("Approval %d %s by manager %s", approval_id, new_status.value, payload.manager_number)
    return DecisionResult(
        approval_id=approval_id,
        status=new_status,
        decided_by=payload.manager_number,
        decided_at=now,
        comments=comments,
        message=f"Leave request {new_status.value.lower()}",
    )


async def list_pending(session: AsyncSession, manager_number: str) -> PendingApprovalsResponse:
    """All PENDING approvals routed to the manager, newest submission first."""
    try:
        await directory.lookup(session, manager_number)
    except EmployeeNotFound:
        raise ManagerNotFound(manager_number) from None

    result = await session.execute(
        select(Approval)
        .where(
            col(Approval.manager_number) == manager_number,
            col(Approval.status) == ApprovalStatus.PENDING.value,
        )
        .order_by(col(Approval.submitted_at).desc(), col(Approval.id).desc())
    )
    approvals = list(result.scalars().all())

    return PendingApprovalsResponse(
        manager_number=manager_number,
        items=[build_approval_response(a) for a in approvals],
        total=len(approvals),
    )


async def get_approval(session: AsyncSession, approval_id: int) -> ApprovalResponse:
    """Get a single approval by id."""
    approval = await _get_approval_or_404(session, approval_id)
    return build_approval_response(approval)
