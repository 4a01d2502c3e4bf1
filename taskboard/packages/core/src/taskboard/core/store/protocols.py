"""Store Protocol definitions

RecordStore is the structural interface (duck typing via typing.Protocol)
shared by the in-memory and SQLite implementations. The gateway and the CLI
depend only on this interface.
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, Protocol

from ..models.record import Record, RecordDraft, RecordPatch, RecordStats

# Injected time source; must return timezone-aware UTC datetimes
Clock = Callable[[], datetime]


class RecordStore(Protocol):
    """Record storage interface

    Implementations own the authoritative collection. Mutations are
    serialized; reads are pure.
    """

    async def list_records(self) -> list[Record]:
        """All live records, newest-created first"""
        ...

    async def get_record(self, record_id: str) -> Record:
        """Fetch one record; raises RecordNotFoundError"""
        ...

    async def create_record(self, fields: RecordDraft | Mapping[str, Any]) -> Record:
        """Validate, fill defaults, assign id + timestamps; raises RecordValidationError"""
        ...

    async def update_record(
        self,
        record_id: str,
        patch: RecordPatch | Mapping[str, Any],
    ) -> Record:
        """Sparse merge; raises RecordNotFoundError / RecordValidationError"""
        ...

    async def delete_record(self, record_id: str) -> None:
        """Hard delete; raises RecordNotFoundError"""
        ...

    async def get_stats(self) -> RecordStats:
        """Aggregate counts evaluated at query time"""
        ...

    async def ping(self) -> None:
        """Readiness probe; raises if the backing store is unavailable"""
        ...

    async def close(self) -> None:
        """Release connections"""
        ...
