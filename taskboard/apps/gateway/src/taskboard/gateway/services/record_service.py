"""RecordService -- record lifecycle operations behind the HTTP routes

Delegates to the injected RecordStore and emits one structured log event
per successful mutation. Store exceptions propagate to the exception
handlers unchanged.
"""

import structlog
from taskboard.core.models import Record, RecordDraft, RecordPatch, RecordStats
from taskboard.core.store import RecordStore

log = structlog.get_logger()


class RecordService:
    """Record business service"""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    async def list_records(self) -> list[Record]:
        return await self._store.list_records()

    async def get_record(self, record_id: str) -> Record:
        return await self._store.get_record(record_id)

    async def create_record(self, draft: RecordDraft) -> Record:
        """Create a record from a draft

        Raises:
            RecordValidationError: title missing or blank
        """
        record = await self._store.create_record(draft)
        log.info(
            "record_created",
            record_id=record.id,
            priority=record.priority.value,
            has_due_date=record.due_date is not None,
        )
        return record

    async def update_record(self, record_id: str, patch: RecordPatch) -> Record:
        """Apply a sparse patch

        Raises:
            RecordNotFoundError: unknown id
            RecordValidationError: blank title in patch
        """
        record = await self._store.update_record(record_id, patch)
        log.info(
            "record_updated",
            record_id=record_id,
            fields=sorted(patch.changes()),
        )
        return record

    async def delete_record(self, record_id: str) -> None:
        await self._store.delete_record(record_id)
        log.info("record_deleted", record_id=record_id)

    async def get_stats(self) -> RecordStats:
        return await self._store.get_stats()
