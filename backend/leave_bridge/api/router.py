from fastapi import APIRouter

from leave_bridge.api.approvals import approvals_router, managers_router
from leave_bridge.api.employees import employees_router
from leave_bridge.api.leave import leave_router
from leave_bridge.api.reports import reports_router

api_router = APIRouter()
api_router.include_router(employees_router)
api_router.include_router(approvals_router)
api_router.include_router(managers_router)
api_router.include_router(leave_router)
api_router.include_router(reports_router)
