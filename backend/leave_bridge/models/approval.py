from __future__ import annotations

from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from leave_bridge.models.enums import ApprovalStatus


class Approval(SQLModel, table=True):
    """One employee's leave submission tracked through a single manager decision.

    Rows are never deleted. ``id`` is allocated by the workflow engine rather
    than by a database sequence; the primary key constraint guards uniqueness.
    """

    __tablename__ = "approval"
    __table_args__ = (
        sa.Index("ix_approval_manager_status", "manager_number", "status"),
        sa.Index("ix_approval_submitted_at", "submitted_at"),
    )

    id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    employee_number: str = Field(
        sa_column=sa.Column(sa.String(50), sa.ForeignKey("employee.employee_number"), nullable=False, index=True),
    )
    employee_name: str = Field(max_length=255)
    manager_number: str = Field(
        sa_column=sa.Column(sa.String(50), sa.ForeignKey("employee.employee_number"), nullable=False),
    )
    manager_name: str = Field(max_length=255)
    leave_request_json: dict[str, Any] = Field(sa_type=sa.JSON)
    gateway_response_json: dict[str, Any] = Field(sa_type=sa.JSON)
    response_source: str = Field(max_length=50)
    status: str = Field(
        default=ApprovalStatus.PENDING, max_length=50, index=True, sa_column_kwargs={"server_default": "PENDING"}
    )
    submitted_at: datetime = Field(sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
    decided_by: str | None = Field(default=None, max_length=50)
    decided_at: datetime | None = Field(default=None, sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
    comments: str | None = None
