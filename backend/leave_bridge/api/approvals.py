# ruff: noqa: B008
from __future__ import annotations

from fastapi import APIRouter, Query, status

from leave_bridge.api.deps import GatewayDep
from leave_bridge.db import SessionDep
from leave_bridge.models.enums import ApprovalStatus
from leave_bridge.schemas.approval import (
    ApprovalListResponse,
    ApprovalResponse,
    DecisionPayload,
    DecisionResult,
    PendingApprovalsResponse,
    SubmissionResult,
    SubmitLeavePayload,
)
from leave_bridge.services import approval as approval_service
from leave_bridge.services import report as report_service

approvals_router = APIRouter(prefix="/approvals", tags=["approvals"])
managers_router = APIRouter(prefix="/managers", tags=["approvals"])


@approvals_router.post("", response_model=SubmissionResult, status_code=status.HTTP_201_CREATED)
async def submit_leave(
    payload: SubmitLeavePayload,
    session: SessionDep,
    gateway: GatewayDep,
) -> SubmissionResult:
    """Submit leave for manager approval."""
    return await approval_service.submit_leave(session, gateway, payload)


@approvals_router.get("", response_model=ApprovalListResponse)
async def list_approvals(
    session: SessionDep,
    status_filter: ApprovalStatus | None = Query(default=None, alias="status"),
    manager_number: str | None = Query(default=None),
    employee_number: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=100),
) -> ApprovalListResponse:
    """List approvals with optional filters and aggregate counts."""
    return await report_service.list_approvals(
        session,
        status_filter=status_filter,
        manager_number=manager_number,
        employee_number=employee_number,
        page=page,
        limit=limit,
    )


@approvals_router.get("/{approval_id}", response_model=ApprovalResponse)
async def get_approval(
    approval_id: int,
    session: SessionDep,
) -> ApprovalResponse:
    """Get a single approval."""
    return await approval_service.get_approval(session, approval_id)


@approvals_router.post("/{approval_id}/decision", response_model=DecisionResult)
async def decide_approval(
    approval_id: int,
    payload: DecisionPayload,
    session: SessionDep,
) -> DecisionResult:
    """Approve or reject a pending approval as its assigned manager."""
    return await approval_service.decide_approval(session, approval_id, payload)


@managers_router.get("/{manager_number}/approvals/pending", response_model=PendingApprovalsResponse)
async def list_pending_approvals(
    manager_number: str,
    session: SessionDep,
) -> PendingApprovalsResponse:
    """Pending approvals routed to a manager, newest first."""
    return await approval_service.list_pending(session, manager_number)
