"""directory, approvals and audit log

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "employee",
        sa.Column("employee_number", sa.String(length=50), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=False),
        sa.Column("manager_number", sa.String(length=50), nullable=True),
        sa.Column("manager_name", sa.String(length=255), nullable=True),
        sa.Column("active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["manager_number"], ["employee.employee_number"]),
        sa.PrimaryKeyConstraint("employee_number"),
    )
    op.create_index("ix_employee_manager_number", "employee", ["manager_number"])

    op.create_table(
        "approval",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("employee_number", sa.String(length=50), nullable=False),
        sa.Column("employee_name", sa.String(length=255), nullable=False),
        sa.Column("manager_number", sa.String(length=50), nullable=False),
        sa.Column("manager_name", sa.String(length=255), nullable=False),
        sa.Column("leave_request_json", sa.JSON(), nullable=False),
        sa.Column("gateway_response_json", sa.JSON(), nullable=False),
        sa.Column("response_source", sa.String(length=50), nullable=False),
        sa.Column("status", sa.String(length=50), server_default="PENDING", nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("decided_by", sa.String(length=50), nullable=True),
        sa.Column("decided_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("comments", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["employee_number"], ["employee.employee_number"]),
        sa.ForeignKeyConstraint(["manager_number"], ["employee.employee_number"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_approval_employee_number", "approval", ["employee_number"])
    op.create_index("ix_approval_status", "approval", ["status"])
    op.create_index("ix_approval_manager_status", "approval", ["manager_number", "status"])
    op.create_index("ix_approval_submitted_at", "approval", ["submitted_at"])

    op.create_table(
        "audit_log",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("actor", sa.String(length=50), nullable=False),
        sa.Column("entity_type", sa.String(length=50), nullable=False),
        sa.Column("entity_id", sa.String(length=50), nullable=False),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("before_json", sa.JSON(), nullable=True),
        sa.Column("after_json", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_audit_log_actor", "audit_log", ["actor"])
    op.create_index("ix_audit_log_created_at", "audit_log", ["created_at"])
    op.create_index("ix_audit_entity", "audit_log", ["entity_type", "entity_id"])


def downgrade() -> None:
    op.drop_table("audit_log")
    op.drop_table("approval")
    op.drop_table("employee")
