from __future__ import annotations

import sqlalchemy as sa
from sqlmodel import Field

from leave_bridge.models.base import TimestampMixin


class Employee(TimestampMixin, table=True):
    """Directory entry: identity plus a one-level reporting line.

    Employees are soft-deactivated through ``active`` and never deleted.
    """

    __tablename__ = "employee"

    employee_number: str = Field(primary_key=True, max_length=50)
    display_name: str = Field(max_length=255)
    manager_number: str | None = Field(
        default=None,
        sa_column=sa.Column(sa.String(50), sa.ForeignKey("employee.employee_number"), nullable=True, index=True),
    )
    # Snapshot of the manager's display name at the time the reference was set.
    manager_name: str | None = Field(default=None, max_length=255)
    active: bool = Field(default=True, sa_column_kwargs={"server_default": sa.true()})
