from __future__ import annotations

from leave_bridge.db import engine_options


def test_engine_options_postgres() -> None:
    assert engine_options("postgresql+asyncpg://u:p@db:5432/leave_bridge") == {"pool_pre_ping": True}


def test_engine_options_sqlite() -> None:
    assert engine_options("sqlite+aiosqlite:///./leave_bridge.db") == {"connect_args": {"check_same_thread": False}}
