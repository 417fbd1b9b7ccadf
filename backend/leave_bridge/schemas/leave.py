# ruff: noqa: TC003
from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from leave_bridge.schemas.gateway import CreateAbsenceRequest


class LeaveBalancePayload(BaseModel):
    """Request body for a leave balance lookup, in the platform's camelCase or snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    employee_number: str = Field(min_length=1, max_length=50)
    as_of_date: date = Field(alias="asofDate")


class CreateLeavePayload(CreateAbsenceRequest):
    """Request body for direct leave creation, bypassing the approval workflow."""

    employee_token: str = Field(min_length=1)

    def to_request(self) -> CreateAbsenceRequest:
        return CreateAbsenceRequest.model_validate(self.model_dump(exclude={"employee_token"}))


class PassthroughResponse(BaseModel):
    """HR platform response body, returned as-is."""

    data: dict[str, Any]
