"""Taskboard Core Store -- record persistence

Factory that builds the configured RecordStore implementation.
"""

from pathlib import Path

import aiosqlite

from ..models.record import utc_now
from .memory_store import MemoryRecordStore
from .protocols import Clock, RecordStore
from .sqlite_init import init_db
from .sqlite_store import SqliteRecordStore


async def open_sqlite_store(db_path: str, clock: Clock = utc_now) -> SqliteRecordStore:
    """Connect to (and initialize) a SQLite database

    Args:
        db_path: SQLite file path; parent directories are created
        clock: time source

    Returns:
        SqliteRecordStore instance owning the connection
    """
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    await init_db(conn)
    return SqliteRecordStore(conn, clock=clock)


async def create_record_store(
    backend: str,
    db_path: str | None = None,
    clock: Clock = utc_now,
) -> RecordStore:
    """Create a RecordStore for the given backend

    Args:
        backend: "sqlite" or "memory"
        db_path: SQLite file path, required for the sqlite backend
        clock: time source

    Raises:
        ValueError: unknown backend or missing db_path
    """
    if backend == "memory":
        return MemoryRecordStore(clock=clock)
    if backend == "sqlite":
        if not db_path:
            raise ValueError("db_path is required for the sqlite backend")
        return await open_sqlite_store(db_path, clock=clock)
    raise ValueError(f"Unknown record store backend: {backend!r}")


__all__ = [
    "Clock",
    "RecordStore",
    "MemoryRecordStore",
    "SqliteRecordStore",
    "create_record_store",
    "open_sqlite_store",
    "init_db",
]
