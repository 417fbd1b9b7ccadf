# ruff: noqa: TC001, TC003
from __future__ import annotations

from datetime import date, datetime
from typing import Self

from pydantic import BaseModel, Field, model_validator

from leave_bridge.models.enums import ApprovalStatus, DecisionAction, ResponseSource
from leave_bridge.schemas.gateway import GatewayResult

# ---------------------------------------------------------------------------
# Embedded values
# ---------------------------------------------------------------------------


class LeaveRequest(BaseModel):
    """The time off being requested, denormalized at submission time."""

    correlation_id: str
    absence_type: str
    start_date: date
    end_date: date
    duration: str
    submission_date: date
    employee_number: str
    employee_name: str


# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class SubmitLeavePayload(BaseModel):
    """Request body for submitting leave for manager approval."""

    employee_number: str = Field(min_length=1, max_length=50)
    absence_type: str = Field(min_length=1, max_length=255)
    start_date: date
    end_date: date
    start_date_duration: str = Field(min_length=1, max_length=50)
    end_date_duration: str = Field(min_length=1, max_length=50)
    employee_token: str = Field(min_length=1)

    @model_validator(mode="after")
    def _validate_dates(self) -> Self:
        if self.end_date < self.start_date:
            msg = "end_date must be on or after start_date"
            raise ValueError(msg)
        return self


class DecisionPayload(BaseModel):
    """Request body for a manager's decision."""

    manager_number: str = Field(min_length=1, max_length=50)
    action: DecisionAction
    comments: str | None = Field(default=None, max_length=2000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class SubmissionResult(BaseModel):
    """Result of a successful submission."""

    approval_id: int
    status: ApprovalStatus
    manager_number: str
    manager_name: str
    response_source: ResponseSource
    message: str


class DecisionResult(BaseModel):
    """Result of a recorded decision."""

    approval_id: int
    status: ApprovalStatus
    decided_by: str
    decided_at: datetime
    comments: str
    message: str


class ApprovalResponse(BaseModel):
    """Response schema for a single approval."""

    id: int
    employee_number: str
    employee_name: str
    manager_number: str
    manager_name: str
    leave_request: LeaveRequest
    status: ApprovalStatus
    submitted_at: datetime
    decided_by: str | None
    decided_at: datetime | None
    comments: str | None
    gateway_response: GatewayResult


class PendingApprovalsResponse(BaseModel):
    """Pending approvals routed to one manager, newest first."""

    manager_number: str
    items: list[ApprovalResponse]
    total: int


class ApprovalCounts(BaseModel):
    """Aggregate counts over a filtered set of approvals."""

    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0


class ApprovalListResponse(BaseModel):
    """Paginated list of approvals."""

    items: list[ApprovalResponse]
    page: int
    limit: int
    counts: ApprovalCounts
