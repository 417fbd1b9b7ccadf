from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from leave_bridge.api.deps import get_leave_gateway
from leave_bridge.db import get_session
from leave_bridge.main import app
from leave_bridge.models import SQLModel
from leave_bridge.schemas.gateway import AbsenceConfirmation, LeaveBalance

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from datetime import date

    from sqlalchemy.ext.asyncio import AsyncEngine

    from leave_bridge.exceptions import GatewayFailure
    from leave_bridge.schemas.gateway import CreateAbsenceRequest

TEST_DATABASE_URL = "sqlite+aiosqlite://"

CREATE_ABSENCE_BODY: dict[str, Any] = {
    "status": "SUCCESS",
    "absenceEntryId": 300100000123,
    "absenceType": "Annual Leave",
    "submittedDate": "2024-05-20",
    "personId": "300000001",
    "duration": "3 Days",
}
LEAVE_BALANCE_BODY: dict[str, Any] = {
    "status": "SUCCESS",
    "balances": [{"absencePlan": "Annual Leave", "balance": 21.5}],
}


class StubLeaveGateway:
    """In-memory stand-in for the HR platform that records every call."""

    def __init__(self) -> None:
        self.create_body: dict[str, Any] = dict(CREATE_ABSENCE_BODY)
        self.balance_body: dict[str, Any] = dict(LEAVE_BALANCE_BODY)
        self.fail_with: GatewayFailure | None = None
        self.create_calls: list[tuple[CreateAbsenceRequest, str]] = []
        self.balance_calls: list[tuple[str, date]] = []

    async def create_absence(self, request: CreateAbsenceRequest, on_behalf_of_token: str) -> AbsenceConfirmation:
        self.create_calls.append((request, on_behalf_of_token))
        if self.fail_with is not None:
            raise self.fail_with
        return AbsenceConfirmation.from_body(self.create_body)

    async def get_balance(self, employee_number: str, as_of_date: date) -> LeaveBalance:
        self.balance_calls.append((employee_number, as_of_date))
        if self.fail_with is not None:
            raise self.fail_with
        return LeaveBalance(employee_number=employee_number, as_of_date=as_of_date, raw=self.balance_body)


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Fresh in-memory database per test; StaticPool keeps one shared connection."""
    _engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield _engine
    await _engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Yield a database session bound to the per-test engine."""
    session = AsyncSession(bind=engine, expire_on_commit=False)
    yield session
    await session.close()


@pytest.fixture
def gateway() -> StubLeaveGateway:
    return StubLeaveGateway()


@pytest.fixture
async def async_client(db_session: AsyncSession, gateway: StubLeaveGateway) -> AsyncIterator[AsyncClient]:
    """Async HTTP client with the session and gateway dependencies overridden."""

    async def _override_get_session() -> AsyncIterator[AsyncSession]:
        yield db_session

    def _override_get_leave_gateway() -> StubLeaveGateway:
        return gateway

    app.dependency_overrides[get_session] = _override_get_session
    app.dependency_overrides[get_leave_gateway] = _override_get_leave_gateway
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
