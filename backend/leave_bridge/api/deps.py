# ruff: noqa: B008
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, Request, status

from leave_bridge.exceptions import AppError
from leave_bridge.schemas.auth import AuthContext
from leave_bridge.services.gateway import LeaveGateway


async def get_auth_context(
    x_employee_number: str | None = Header(default=None),
    x_role: str = Header(default="employee"),
) -> AuthContext:
    """Extract dev auth context from request headers."""
    return AuthContext(employee_number=x_employee_number, role=x_role)


AuthDep = Annotated[AuthContext, Depends(get_auth_context)]


async def require_admin(
    auth: AuthDep,
) -> AuthContext:
    """Require admin role for directory maintenance and audit queries."""
    if auth.role != "admin":
        raise AppError("Admin access required", status_code=status.HTTP_403_FORBIDDEN)
    return auth


AdminDep = Annotated[AuthContext, Depends(require_admin)]


def get_leave_gateway(request: Request) -> LeaveGateway:
    """Gateway constructed in the application lifespan."""
    gateway: LeaveGateway = request.app.state.leave_gateway
    return gateway


GatewayDep = Annotated[LeaveGateway, Depends(get_leave_gateway)]
