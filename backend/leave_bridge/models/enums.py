from __future__ import annotations

import enum


class ApprovalStatus(enum.StrEnum):
    """State machine for leave approvals."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class DecisionAction(enum.StrEnum):
    """Decision a manager can record on a pending approval."""

    APPROVE = "APPROVE"
    REJECT = "REJECT"

    @property
    def resulting_status(self) -> ApprovalStatus:
        if self is DecisionAction.APPROVE:
            return ApprovalStatus.APPROVED
        return ApprovalStatus.REJECTED


class ResponseSource(enum.StrEnum):
    """Whether a leave confirmation came from the HR platform or was synthesized locally."""

    GENUINE = "GENUINE"
    SYNTHESIZED = "SYNTHESIZED"


class AuditEntityType(enum.StrEnum):
    """Entity type recorded in the audit log."""

    EMPLOYEE = "EMPLOYEE"
    APPROVAL = "APPROVAL"


class AuditAction(enum.StrEnum):
    """Action recorded in the audit log."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DEACTIVATE = "DEACTIVATE"
    SUBMIT = "SUBMIT"
    APPROVE = "APPROVE"
    REJECT = "REJECT"
