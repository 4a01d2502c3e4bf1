"""packages/client test fixtures -- record factory and a store-backed fake API"""

from datetime import UTC, date, datetime

import httpx
import pytest
from taskboard.client.exceptions import ApiError, ApiTransportError
from taskboard.core.exceptions import RecordNotFoundError, RecordValidationError
from taskboard.core.models import Record, RecordDraft, build_record
from taskboard.core.store import MemoryRecordStore


def _make_record(record_id: str = "01JREC000000000000000001", **fields) -> Record:
    """Record built the way a store would build it"""
    completed = fields.pop("completed", False)
    draft = RecordDraft(title=fields.pop("title", "Write report"), **fields)
    record = build_record(draft, record_id, datetime(2024, 6, 1, 9, 0, tzinfo=UTC))
    return record.model_copy(update={"completed": completed})


class FakeTaskApi:
    """TaskApiClient stand-in backed by a MemoryRecordStore

    Set `offline = True` to make every call fail with ApiTransportError.
    """

    def __init__(self, store: MemoryRecordStore) -> None:
        self.store = store
        self.offline = False
        self.calls: list[str] = []

    def _check(self, name: str) -> None:
        self.calls.append(name)
        if self.offline:
            raise ApiTransportError("http://test", httpx.ConnectError("refused"))

    async def list_tasks(self):
        self._check("list_tasks")
        return await self.store.list_records()

    async def create_task(self, draft):
        self._check("create_task")
        try:
            return await self.store.create_record(draft)
        except RecordValidationError as e:
            raise ApiError(400, e.error, e.message) from e

    async def update_task(self, task_id, patch):
        self._check("update_task")
        try:
            return await self.store.update_record(task_id, patch)
        except RecordNotFoundError as e:
            raise ApiError(404, e.error, e.message) from e
        except RecordValidationError as e:
            raise ApiError(400, e.error, e.message) from e

    async def delete_task(self, task_id):
        self._check("delete_task")
        try:
            await self.store.delete_record(task_id)
        except RecordNotFoundError as e:
            raise ApiError(404, e.error, e.message) from e


@pytest.fixture
def fake_api(clock) -> FakeTaskApi:
    return FakeTaskApi(MemoryRecordStore(clock=clock))


@pytest.fixture
def today() -> date:
    """UTC date matching the pinned clock"""
    return date(2024, 6, 15)


@pytest.fixture
def make_record():
    """Factory: make_record(record_id, **fields) -> Record"""
    return _make_record
