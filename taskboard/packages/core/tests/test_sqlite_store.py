"""SQLite backend tests

1. Durability across reconnects
2. Driver failures surface as StoreError with rollback
3. Store factory
"""

from pathlib import Path

import aiosqlite
import pytest
from taskboard.core.exceptions import StoreError
from taskboard.core.store import (
    MemoryRecordStore,
    SqliteRecordStore,
    create_record_store,
    open_sqlite_store,
)
from taskboard.core.store.sqlite_init import verify_wal_mode


class TestDurability:
    async def test_records_survive_reconnect(self, tmp_path: Path, clock):
        db_path = str(tmp_path / "durable.db")

        store = await open_sqlite_store(db_path, clock=clock)
        created = await store.create_record({"title": "Persist me", "dueDate": "2024-07-01"})
        await store.close()

        reopened = await open_sqlite_store(db_path, clock=clock)
        try:
            assert await reopened.get_record(created.id) == created
        finally:
            await reopened.close()

    async def test_open_creates_parent_dirs(self, tmp_path: Path):
        db_path = tmp_path / "nested" / "dir" / "records.db"
        store = await open_sqlite_store(str(db_path))
        await store.close()
        assert db_path.exists()

    async def test_wal_mode_enabled(self, db_conn):
        assert await verify_wal_mode(db_conn)


class TestFailures:
    async def test_write_failure_raises_store_error(self, db_conn, clock):
        store = SqliteRecordStore(db_conn, clock=clock)
        await db_conn.execute("DROP TABLE records")
        await db_conn.commit()

        with pytest.raises(StoreError) as exc_info:
            await store.create_record({"title": "x"})
        assert isinstance(exc_info.value.original_error, aiosqlite.Error)

    async def test_read_failure_raises_store_error(self, db_conn, clock):
        store = SqliteRecordStore(db_conn, clock=clock)
        await db_conn.execute("DROP TABLE records")
        await db_conn.commit()

        with pytest.raises(StoreError):
            await store.list_records()

    async def test_schema_rejects_blank_title(self, db_conn):
        with pytest.raises(aiosqlite.IntegrityError):
            await db_conn.execute(
                "INSERT INTO records (record_id, title, created_at, updated_at) "
                "VALUES ('r1', '   ', 'now', 'now')"
            )


class TestFactory:
    async def test_memory_backend(self):
        store = await create_record_store("memory")
        assert isinstance(store, MemoryRecordStore)

    async def test_sqlite_backend(self, tmp_path: Path):
        store = await create_record_store("sqlite", str(tmp_path / "f.db"))
        try:
            assert isinstance(store, SqliteRecordStore)
            await store.ping()
        finally:
            await store.close()

    async def test_sqlite_backend_requires_path(self):
        with pytest.raises(ValueError):
            await create_record_store("sqlite")

    async def test_unknown_backend(self):
        with pytest.raises(ValueError):
            await create_record_store("mongodb")


class TestClosedConnection:
    async def test_operations_raise_store_error(self, tmp_path: Path, clock):
        store = await open_sqlite_store(str(tmp_path / "closed.db"), clock=clock)
        created = await store.create_record({"title": "x"})
        await store.close()

        with pytest.raises(StoreError):
            await store.list_records()
        with pytest.raises(StoreError):
            await store.get_record(created.id)
        with pytest.raises(StoreError):
            await store.create_record({"title": "y"})
        with pytest.raises(StoreError):
            await store.delete_record(created.id)
        with pytest.raises(StoreError) as exc_info:
            await store.ping()
        assert isinstance(exc_info.value.original_error, (ValueError, aiosqlite.Error))
