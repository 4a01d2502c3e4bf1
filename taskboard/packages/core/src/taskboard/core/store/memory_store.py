"""RecordStore in-memory implementation

Holds records in a newest-first list. A single asyncio.Lock serializes
mutations, standing in for the per-write atomicity a database provides.
"""

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any

from ulid import ULID

from ..exceptions import RecordNotFoundError
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


class MemoryRecordStore:
    """RecordStore kept in process memory"""

    def __init__(self, clock: Clock = utc_now, seed: Iterable[Record] = ()) -> None:
        """
        Args:
            clock: time source for timestamps and overdue evaluation
            seed: initial records, already in newest-first order
        """
        self._clock = clock
        self._records: list[Record] = list(seed)
        self._lock = asyncio.Lock()

    def _index_of(self, record_id: str) -> int:
        for i, record in enumerate(self._records):
            if record.id == record_id:
                return i
        raise RecordNotFoundError(record_id)

    async def list_records(self) -> list[Record]:
        return list(self._records)

    async def get_record(self, record_id: str) -> Record:
        return self._records[self._index_of(record_id)]

    async def create_record(self, fields: RecordDraft | Mapping[str, Any]) -> Record:
        draft = parse_draft(fields)
        async with self._lock:
            record = build_record(draft, str(ULID()), self._clock())
            self._records.insert(0, record)
        return record

    async def update_record(
        self,
        record_id: str,
        patch: RecordPatch | Mapping[str, Any],
    ) -> Record:
        parsed = parse_patch(patch)
        async with self._lock:
            index = self._index_of(record_id)
            updated = apply_patch(self._records[index], parsed, self._clock())
            self._records[index] = updated
        return updated

    async def delete_record(self, record_id: str) -> None:
        async with self._lock:
            del self._records[self._index_of(record_id)]

    async def get_stats(self) -> RecordStats:
        return compute_stats(self._records, utc_today(self._clock()))

    async def ping(self) -> None:
        return None

    async def close(self) -> None:
        return None
