from sqlmodel import SQLModel

from leave_bridge.models.approval import Approval
from leave_bridge.models.audit import AuditLog
from leave_bridge.models.base import TimestampMixin, UUIDBase
from leave_bridge.models.employee import Employee
from leave_bridge.models.enums import (
    ApprovalStatus,
    AuditAction,
    AuditEntityType,
    DecisionAction,
    ResponseSource,
)

__all__ = [
    "Approval",
    "ApprovalStatus",
    "AuditAction",
    "AuditEntityType",
    "AuditLog",
    "DecisionAction",
    "Employee",
    "ResponseSource",
    "SQLModel",
    "TimestampMixin",
    "UUIDBase",
]
