from __future__ import annotations

from fastapi import APIRouter

from leave_bridge.api.deps import GatewayDep
from leave_bridge.schemas.leave import CreateLeavePayload, LeaveBalancePayload, PassthroughResponse

leave_router = APIRouter(tags=["leave"])


@leave_router.post("/leave-balance", response_model=PassthroughResponse)
async def get_leave_balance(
    payload: LeaveBalancePayload,
    gateway: GatewayDep,
) -> PassthroughResponse:
    """Fetch leave balances from the HR platform. Upstream failures propagate."""
    balance = await gateway.get_balance(payload.employee_number, payload.as_of_date)
    return PassthroughResponse(data=balance.raw)


@leave_router.post("/create-leave", response_model=PassthroughResponse)
async def create_leave(
    payload: CreateLeavePayload,
    gateway: GatewayDep,
) -> PassthroughResponse:
    """Create leave directly on the HR platform, without an approval record."""
    confirmation = await gateway.create_absence(payload.to_request(), payload.employee_token)
    return PassthroughResponse(data=confirmation.raw)
