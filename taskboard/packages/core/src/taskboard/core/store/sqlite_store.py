"""RecordStore SQLite implementation

Every mutation commits in its own transaction and rolls back on failure.
Driver errors surface as StoreError.
"""

import asyncio
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

import aiosqlite
import structlog
from ulid import ULID

from ..exceptions import RecordNotFoundError, StoreError
from ..models.record import (
    Record,
    RecordDraft,
    RecordPatch,
    RecordStats,
    apply_patch,
    build_record,
    compute_stats,
    parse_draft,
    parse_patch,
    utc_now,
    utc_today,
)
from .protocols import Clock

log = structlog.get_logger()

_COLUMNS = (
    "record_id, title, description, completed, priority, "
    "due_date, category, created_at, updated_at"
)


class SqliteRecordStore:
    """RecordStore backed by SQLite"""

    def __init__(self, conn: aiosqlite.Connection, clock: Clock = utc_now) -> None:
        self._conn = conn
        self._clock = clock
        self._write_lock = asyncio.Lock()

    async def _fetch(self, sql: str, params: Iterable[Any] = ()) -> list[Any]:
        try:
            cursor = await self._conn.execute(sql, tuple(params))
            return list(await cursor.fetchall())
        except (aiosqlite.Error, ValueError) as e:
            # aiosqlite raises ValueError once the connection is closed
            log.error("record_read_failed", error=str(e))
            raise StoreError(f"Record read failed: {e}", original_error=e) from e

    async def _write(self, sql: str, params: Iterable[Any]) -> int:
        """Execute one statement in its own transaction, returning rowcount"""
        try:
            cursor = await self._conn.execute(sql, tuple(params))
            await self._conn.commit()
            return cursor.rowcount
        except aiosqlite.Error as e:
            await self._conn.rollback()
            log.error("record_write_failed", error=str(e))
            raise StoreError(f"Record write failed: {e}", original_error=e) from e
        except ValueError as e:
            # closed connection, nothing to roll back
            log.error("record_write_failed", error=str(e))
            raise StoreError(f"Record write failed: {e}", original_error=e) from e

    async def list_records(self) -> list[Record]:
        """All records, created_at descending"""
        rows = await self._fetch(
            f"SELECT {_COLUMNS} FROM records ORDER BY created_at DESC, rowid DESC"
        )
        return [self._row_to_record(row) for row in rows]

    async def get_record(self, record_id: str) -> Record:
        rows = await self._fetch(
            f"SELECT {_COLUMNS} FROM records WHERE record_id = ?",
            (record_id,),
        )
        if not rows:
            raise RecordNotFoundError(record_id)
        return self._row_to_record(rows[0])

    async def create_record(self, fields: RecordDraft | Mapping[str, Any]) -> Record:
        draft = parse_draft(fields)
        async with self._write_lock:
            record = build_record(draft, str(ULID()), self._clock())
            await self._write(
                f"INSERT INTO records ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                self._record_to_row(record),
            )
        return record

    async def update_record(
        self,
        record_id: str,
        patch: RecordPatch | Mapping[str, Any],
    ) -> Record:
        parsed = parse_patch(patch)
        # read-modify-write under the lock so concurrent patches do not interleave
        async with self._write_lock:
            current = await self.get_record(record_id)
            updated = apply_patch(current, parsed, self._clock())
            row = self._record_to_row(updated)
            await self._write(
                """
                UPDATE records
                SET title = ?, description = ?, completed = ?, priority = ?,
                    due_date = ?, category = ?, updated_at = ?
                WHERE record_id = ?
                """,
                (*row[1:7], row[8], record_id),
            )
        return updated

    async def delete_record(self, record_id: str) -> None:
        async with self._write_lock:
            deleted = await self._write(
                "DELETE FROM records WHERE record_id = ?",
                (record_id,),
            )
        if deleted == 0:
            raise RecordNotFoundError(record_id)

    async def get_stats(self) -> RecordStats:
        records = await self.list_records()
        return compute_stats(records, utc_today(self._clock()))

    async def ping(self) -> None:
        """
        Raises:
            StoreError: connection closed or database unreadable
        """
        await self._fetch("SELECT 1")

    async def close(self) -> None:
        await self._conn.close()

    @staticmethod
    def _record_to_row(record: Record) -> tuple[Any, ...]:
        return (
            record.id,
            record.title,
            record.description,
            int(record.completed),
            record.priority.value,
            record.due_date.isoformat() if record.due_date else None,
            record.category,
            record.created_at.isoformat(),
            record.updated_at.isoformat(),
        )

    @staticmethod
    def _row_to_record(row: Any) -> Record:
        """Convert a database row (column order of _COLUMNS) into a Record"""
        return Record(
            id=row[0],
            title=row[1],
            description=row[2],
            completed=bool(row[3]),
            priority=row[4],
            due_date=date.fromisoformat(row[5]) if row[5] else None,
            category=row[6],
            created_at=datetime.fromisoformat(row[7]),
            updated_at=datetime.fromisoformat(row[8]),
        )
