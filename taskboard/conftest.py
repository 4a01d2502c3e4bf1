"""Global pytest configuration -- clock + temporary SQLite database fixtures"""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio


class FixedClock:
    """Controllable time source for stores and boards"""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to 2024-06-15 12:00 UTC"""
    return FixedClock(datetime(2024, 6, 15, 12, 0, tzinfo=UTC))


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """Temporary SQLite database path"""
    return tmp_path / "test.db"


@pytest_asyncio.fixture
async def db_conn(tmp_db_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """Initialized temporary SQLite connection"""
    from taskboard.core.store.sqlite_init import init_db

    conn = await aiosqlite.connect(str(tmp_db_path))
    await init_db(conn)
    yield conn
    await conn.close()
