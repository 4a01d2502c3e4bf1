"""TaskBoard -- client-side write-through cache of the record list

The cache mirrors list_tasks() order and is mutated only after the gateway
confirms a change. Failures leave the cache untouched and queue a
Notification; there is no retry and no optimistic update.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any

import structlog
from pydantic import BaseModel, Field
from taskboard.core.models import (
    Record,
    RecordDraft,
    RecordPatch,
    RecordStats,
    compute_stats,
    utc_now,
    utc_today,
)

from .api import TaskApiClient
from .exceptions import ClientError
from .filters import StatusFilter, filter_records
from .render import render_record_list

log = structlog.get_logger()


class Notification(BaseModel):
    """Non-blocking user-facing message"""

    level: str = Field(default="error")
    message: str
    detail: str = Field(default="")


class TaskBoard:
    """Cached record list plus the current filter and search term"""

    def __init__(
        self,
        api: TaskApiClient,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._api = api
        self._clock = clock
        self._records: list[Record] = []
        self._status = StatusFilter.ALL
        self._search = ""
        self.notifications: list[Notification] = []

    @property
    def records(self) -> list[Record]:
        """Snapshot of the cache, newest first"""
        return list(self._records)

    @property
    def status(self) -> StatusFilter:
        return self._status

    @property
    def search(self) -> str:
        return self._search

    def _notify(self, message: str, error: ClientError) -> None:
        log.warning("task_board_action_failed", notice=message, error=error.message)
        self.notifications.append(Notification(message=message, detail=error.message))

    def drain_notifications(self) -> list[Notification]:
        """Return queued notifications and clear the queue"""
        pending, self.notifications = self.notifications, []
        return pending

    def _index_of(self, record_id: str) -> int | None:
        for i, record in enumerate(self._records):
            if record.id == record_id:
                return i
        return None

    def _replace(self, record: Record) -> None:
        index = self._index_of(record.id)
        if index is not None:
            self._records[index] = record

    async def refresh(self) -> bool:
        """Replace the cache wholesale with the gateway's list"""
        try:
            records = await self._api.list_tasks()
        except ClientError as e:
            self._notify("Failed to load tasks. Make sure the server is running.", e)
            return False
        self._records = records
        log.debug("task_board_refreshed", count=len(records))
        return True

    async def add(self, draft: RecordDraft | dict[str, Any]) -> Record | None:
        """Create a record and put it at the front of the cache"""
        try:
            record = await self._api.create_task(draft)
        except ClientError as e:
            self._notify("Failed to add task", e)
            return None
        self._records.insert(0, record)
        return record

    async def toggle(self, record_id: str) -> Record | None:
        """Flip completion of a cached record"""
        index = self._index_of(record_id)
        if index is None:
            return None
        current = self._records[index]
        try:
            record = await self._api.update_task(
                record_id, RecordPatch(completed=not current.completed)
            )
        except ClientError as e:
            self._notify("Failed to update task", e)
            return None
        self._replace(record)
        return record

    async def edit(self, record_id: str, patch: RecordPatch | dict[str, Any]) -> Record | None:
        """Apply a sparse patch, replacing the cached record in place"""
        try:
            record = await self._api.update_task(record_id, patch)
        except ClientError as e:
            self._notify("Failed to update task", e)
            return None
        self._replace(record)
        return record

    async def remove(self, record_id: str) -> bool:
        try:
            await self._api.delete_task(record_id)
        except ClientError as e:
            self._notify("Failed to delete task", e)
            return False
        self._records = [r for r in self._records if r.id != record_id]
        return True

    def set_filter(self, status: StatusFilter | str) -> None:
        """
        Raises:
            ValueError: unknown status value
        """
        self._status = StatusFilter(status)

    def set_search(self, search: str) -> None:
        self._search = search

    def visible(self) -> list[Record]:
        """Cache filtered by status then search, order preserved"""
        return filter_records(
            self._records, self._status, self._search, utc_today(self._clock())
        )

    def summary(self) -> RecordStats:
        """Counts over the whole cache, same definition as the store's stats"""
        return compute_stats(self._records, utc_today(self._clock()))

    def render(self) -> str:
        return render_record_list(self.visible(), utc_today(self._clock()))
