"""packages/core test configuration -- store fixtures for both backends"""

from collections.abc import AsyncGenerator

import pytest_asyncio
from taskboard.core.store import MemoryRecordStore, RecordStore, SqliteRecordStore


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def store(request, db_conn, clock) -> AsyncGenerator[RecordStore, None]:
    """RecordStore under test, once per backend"""
    if request.param == "memory":
        yield MemoryRecordStore(clock=clock)
    else:
        yield SqliteRecordStore(db_conn, clock=clock)
