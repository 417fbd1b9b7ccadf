from __future__ import annotations

from pydantic import BaseModel


class AuthContext(BaseModel):
    """Dev auth context extracted from request headers."""

    employee_number: str | None = None
    role: str = "employee"

    @property
    def actor(self) -> str:
        return self.employee_number or self.role
