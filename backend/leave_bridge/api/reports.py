# ruff: noqa: B008
from __future__ import annotations

from fastapi import APIRouter, Query

from leave_bridge.api.deps import AdminDep
from leave_bridge.db import SessionDep
from leave_bridge.schemas.report import AuditLogListResponse
from leave_bridge.services import report as report_service

reports_router = APIRouter(tags=["reports"])


@reports_router.get("/audit-log", response_model=AuditLogListResponse)
async def query_audit_log(
    session: SessionDep,
    auth: AdminDep,
    entity_type: str | None = Query(default=None),
    entity_id: str | None = Query(default=None),
    actor: str | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> AuditLogListResponse:
    """Query audit log entries with optional filters (admin only)."""
    return await report_service.query_audit_log(
        session,
        entity_type=entity_type,
        entity_id=entity_id,
        actor=actor,
        offset=offset,
        limit=limit,
    )
