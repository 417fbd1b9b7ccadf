"""Typed request/response contracts for the external HR platform."""

# ruff: noqa: TC003
from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from leave_bridge.models.enums import ResponseSource

# Response keys the HR platform has been seen to use for each normalized field.
_CORRELATION_KEYS = ("absenceEntryId", "perAbsenceEntryId", "AbsenceEntryId", "requestId", "id")
_ABSENCE_TYPE_KEYS = ("absenceType", "AbsenceType")
_SUBMISSION_DATE_KEYS = ("submittedDate", "submissionDate", "creationDate")
_PERSON_ID_KEYS = ("personId", "PersonId", "personNumber")
_DURATION_KEYS = ("duration", "formattedDuration", "Duration")


def _first(body: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = body.get(key)
        if value not in (None, ""):
            return value
    return None


def _parse_date(value: Any) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


class CreateAbsenceRequest(BaseModel):
    """Operation fields for the HR platform's leave creation call.

    Accepts either the snake_case field names or the platform's camelCase keys.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    person_number: str = Field(min_length=1)
    employer: str = Field(min_length=1)
    absence_type: str = Field(min_length=1)
    start_date: date
    end_date: date
    absence_status_cd: str = "SUBMITTED"
    approval_status_cd: str = "AWAITING"
    start_date_duration: str = Field(min_length=1)
    end_date_duration: str = Field(min_length=1)

    def to_wire(self) -> dict[str, str]:
        """Render the camelCase fields the HR platform expects."""
        return {
            "personNumber": self.person_number,
            "employer": self.employer,
            "absenceType": self.absence_type,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "absenceStatusCd": self.absence_status_cd,
            "approvalStatusCd": self.approval_status_cd,
            "startDateDuration": self.start_date_duration,
            "endDateDuration": self.end_date_duration,
        }


class AbsenceConfirmation(BaseModel):
    """Normalized view of a leave creation response."""

    status: str | None = None
    correlation_id: str | None = None
    absence_type: str | None = None
    submission_date: date | None = None
    person_id: str | None = None
    duration: str | None = None
    raw: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> AbsenceConfirmation:
        correlation_id = _first(body, _CORRELATION_KEYS)
        absence_type = _first(body, _ABSENCE_TYPE_KEYS)
        person_id = _first(body, _PERSON_ID_KEYS)
        duration = _first(body, _DURATION_KEYS)
        status = body.get("status")
        return cls(
            status=str(status) if status is not None else None,
            correlation_id=str(correlation_id) if correlation_id is not None else None,
            absence_type=str(absence_type) if absence_type is not None else None,
            submission_date=_parse_date(_first(body, _SUBMISSION_DATE_KEYS)),
            person_id=str(person_id) if person_id is not None else None,
            duration=str(duration) if duration is not None else None,
            raw=body,
        )


class GatewayResult(BaseModel):
    """Tagged outcome of leave creation: a genuine confirmation or a local substitute."""

    source: ResponseSource
    confirmation: AbsenceConfirmation
    failure_reason: str | None = None
    upstream_status: int | None = None

    @property
    def is_synthesized(self) -> bool:
        return self.source == ResponseSource.SYNTHESIZED


class LeaveBalance(BaseModel):
    """Leave balance response; balance line shapes are owned by the HR platform."""

    employee_number: str
    as_of_date: date
    status: str | None = None
    raw: dict[str, Any] = Field(default_factory=dict)
