from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str
    detail: str | None = None
    status_code: int
    context: dict[str, Any] | None = None


class AppError(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.context = context
        super().__init__(self.message)


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------


class NotFoundError(AppError):
    """An employee, manager, or approval does not resolve."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND, context=context)


class EmployeeNotFound(NotFoundError):
    def __init__(self, employee_number: str) -> None:
        super().__init__("Employee not found", context={"employee_number": employee_number})


class ManagerNotFound(NotFoundError):
    def __init__(self, manager_number: str) -> None:
        super().__init__("Manager not found", context={"manager_number": manager_number})


class NoManagerAssigned(NotFoundError):
    def __init__(self, employee_number: str) -> None:
        super().__init__("Employee has no manager assigned", context={"employee_number": employee_number})


class ApprovalNotFound(NotFoundError):
    def __init__(self, approval_id: int) -> None:
        super().__init__("Approval not found", context={"approval_id": approval_id})


# ---------------------------------------------------------------------------
# Validation, authorization, conflict
# ---------------------------------------------------------------------------


class InvalidManager(AppError):
    """Manager reference on a directory upsert does not resolve to another active employee."""

    def __init__(self, employee_number: str, manager_number: str) -> None:
        super().__init__(
            "Manager must be another active employee",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            context={"employee_number": employee_number, "manager_number": manager_number},
        )


class AuthorizationError(AppError):
    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, status_code=status.HTTP_403_FORBIDDEN, context=context)


class Unauthorized(AuthorizationError):
    """Manager attempting to decide an approval not routed to them."""

    def __init__(self, approval_id: int, manager_number: str) -> None:
        super().__init__(
            "Approval is not assigned to this manager",
            context={"approval_id": approval_id, "manager_number": manager_number},
        )


class ConflictError(AppError):
    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, status_code=status.HTTP_409_CONFLICT, context=context)


class AlreadyDecided(ConflictError):
    def __init__(self, approval_id: int, current_status: str) -> None:
        self.current_status = current_status
        super().__init__(
            f"Approval has already been {current_status.lower()}",
            context={"approval_id": approval_id, "current_status": current_status},
        )


# ---------------------------------------------------------------------------
# Upstream
# ---------------------------------------------------------------------------


class UpstreamFailure(AppError):
    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, status_code=status.HTTP_502_BAD_GATEWAY, context=context)


class GatewayFailure(UpstreamFailure):
    """Transport or semantic failure reported by the external HR platform."""

    def __init__(self, message: str, upstream_status: int | None = None, body: Any = None) -> None:
        self.upstream_status = upstream_status
        self.body = body
        super().__init__(message, context={"upstream_status": upstream_status, "body": body})


async def _app_exception_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(
            ErrorResponse(
                error=type(exc).__name__,
                detail=exc.message,
                status_code=exc.status_code,
                context=exc.context,
            )
        ),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            error="ValidationError",
            detail=str(exc.errors()),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        ).model_dump(),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the application."""
    app.add_exception_handler(AppError, _app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)  # type: ignore[arg-type]
