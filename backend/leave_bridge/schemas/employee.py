# ruff: noqa: TC003
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class UpsertEmployeeRequest(BaseModel):
    """Request body for creating or updating a directory entry."""

    display_name: str = Field(min_length=1, max_length=255)
    manager_number: str | None = Field(default=None, min_length=1, max_length=50)
    active: bool = True


class EmployeeResponse(BaseModel):
    """Response schema for an employee."""

    employee_number: str
    display_name: str
    manager_number: str | None
    manager_name: str | None
    active: bool
    created_at: datetime
    updated_at: datetime


class EmployeeListResponse(BaseModel):
    """Paginated list of employees."""

    items: list[EmployeeResponse]
    total: int
    page: int
    limit: int
