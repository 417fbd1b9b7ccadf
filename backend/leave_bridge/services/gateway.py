"""Remote Leave Gateway: calls to the external HR platform's integration flows.

Every call carries the fixed service credential as a Basic ``Authorization``
header. Calls made on behalf of an employee additionally carry the employee's
token as an ``Authorization`` query parameter, which is how the platform
resolves the acting user.

Transport errors, non-2xx statuses, a 2xx body whose ``status`` is
``"Failed"``, and a creation body that cannot be normalized are all surfaced
as :class:`GatewayFailure`. The gateway never retries; retry or fallback
policy belongs to the caller.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from leave_bridge.exceptions import GatewayFailure
from leave_bridge.schemas.gateway import AbsenceConfirmation, LeaveBalance

if TYPE_CHECKING:
    from datetime import date

    from leave_bridge.config import Settings
    from leave_bridge.schemas.gateway import CreateAbsenceRequest

logger = logging.getLogger(__name__)

CREATE_LEAVE_OPERATION = "createLeave"
LEAVE_BALANCE_OPERATION = "getEmpLeaveBalance"
FAILED_STATUS = "failed"


@runtime_checkable
class LeaveGateway(Protocol):
    """Interface for the external HR platform."""

    async def create_absence(self, request: CreateAbsenceRequest, on_behalf_of_token: str) -> AbsenceConfirmation:
        """Create a leave entry as the employee identified by the token."""
        ...

    async def get_balance(self, employee_number: str, as_of_date: date) -> LeaveBalance:
        """Fetch leave balances for an employee as of a date."""
        ...


class HttpLeaveGateway:
    """httpx-backed gateway holding its own credentials."""

    def __init__(
        self,
        base_url: str,
        service_token: str,
        *,
        project_name: str = "MOBILEAPP",
        create_absence_path: str = "/ADQ_CREATE_ABSENCE_SYNC/1.0/createAbsence",
        leave_balance_path: str = "/ADQ_EMP_GET_ABSEN_BALAN_SYNC/1.0/leavebalance",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.project_name = project_name
        self.create_absence_path = create_absence_path
        self.leave_balance_path = leave_balance_path
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"Basic {service_token}",
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> HttpLeaveGateway:
        return cls(
            settings.oracle_base_url,
            settings.oracle_token,
            project_name=settings.hr_project_name,
            create_absence_path=settings.hr_create_absence_path,
            leave_balance_path=settings.hr_leave_balance_path,
            timeout=settings.hr_timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def create_absence(self, request: CreateAbsenceRequest, on_behalf_of_token: str) -> AbsenceConfirmation:
        url = f"{self.create_absence_path}?Authorization=Basic%20{quote(on_behalf_of_token, safe='')}"
        status_code, body = await self._post(url, CREATE_LEAVE_OPERATION, request.to_wire())
        try:
            return AbsenceConfirmation.from_body(body)
        except ValidationError as exc:
            raise GatewayFailure(
                f"{CREATE_LEAVE_OPERATION} returned a body that could not be normalized",
                upstream_status=status_code,
                body=body,
            ) from exc

    async def get_balance(self, employee_number: str, as_of_date: date) -> LeaveBalance:
        _, body = await self._post(
            self.leave_balance_path,
            LEAVE_BALANCE_OPERATION,
            {"employeeNumber": employee_number, "asofDate": as_of_date.isoformat()},
        )
        status = body.get("status")
        return LeaveBalance(
            employee_number=employee_number,
            as_of_date=as_of_date,
            status=str(status) if status is not None else None,
            raw=body,
        )

    async def _post(self, url: str, operation_name: str, fields: dict[str, Any]) -> tuple[int, dict[str, Any]]:
        """POST one operation and return the HTTP status and JSON body, or raise GatewayFailure."""
        payload = {"operationName": operation_name, "projectName": self.project_name, **fields}
        logger.debug("HR platform call: %s", operation_name)
        try:
            response = await self._client.post(url, json=payload)
        except httpx.HTTPError as exc:
            raise GatewayFailure(f"{operation_name} request failed: {exc!r}") from exc

        if not response.is_success:
            raise GatewayFailure(
                f"{operation_name} returned HTTP {response.status_code}",
                upstream_status=response.status_code,
                body=response.text,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise GatewayFailure(
                f"{operation_name} returned a non-JSON body",
                upstream_status=response.status_code,
                body=response.text,
            ) from exc

        if not isinstance(body, dict):
            raise GatewayFailure(
                f"{operation_name} returned an unexpected body",
                upstream_status=response.status_code,
                body=body,
            )

        if str(body.get("status", "")).lower() == FAILED_STATUS:
            raise GatewayFailure(
                f"{operation_name} reported status Failed",
                upstream_status=response.status_code,
                body=body,
            )
        return response.status_code, body
