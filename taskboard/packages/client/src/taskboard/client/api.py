"""TaskApiClient -- typed wrapper over the /api/tasks resource

One method per endpoint. Responses are parsed into core models; non-2xx
answers raise ApiError, connectivity failures raise ApiTransportError and
undecodable 2xx bodies raise ApiResponseError.
"""

from collections.abc import Mapping
from typing import Any, TypeVar

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError
from taskboard.core.models import Record, RecordDraft, RecordPatch, RecordStats

from .config import ClientConfig
from .exceptions import ApiError, ApiResponseError, ApiTransportError

log = structlog.get_logger()

TASKS_PATH = "/api/tasks"

_T = TypeVar("_T")

_RECORD = TypeAdapter(Record)
_RECORD_LIST = TypeAdapter(list[Record])
_STATS = TypeAdapter(RecordStats)


def _payload(body: RecordDraft | RecordPatch | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(body, (RecordDraft, RecordPatch)):
        return body.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return dict(body)


class TaskApiClient:
    """Async client for the task resource

    Owns its httpx.AsyncClient unless one is injected.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        timeout_s: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            base_url: gateway base URL
            timeout_s: per-request timeout (seconds)
            http_client: pre-built client (tests inject a MockTransport/ASGITransport)
        """
        self._base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout_s),
        )

    @classmethod
    def from_config(cls, config: ClientConfig) -> "TaskApiClient":
        return cls(base_url=config.base_url, timeout_s=config.timeout_s)

    async def __aenter__(self) -> "TaskApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            resp = await self._http.request(method, path, json=json)
        except httpx.HTTPError as e:
            log.error(
                "task_api_unreachable",
                method=method,
                path=path,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ApiTransportError(self._base_url, e) from e

        if resp.is_success:
            try:
                return resp.json()
            except ValueError as e:
                log.error("task_api_bad_response", method=method, path=path, error=str(e))
                raise ApiResponseError(path, e) from e

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        error = body.get("error") or resp.reason_phrase or "Request failed"
        message = body.get("message") or resp.text
        log.warning(
            "task_api_error",
            method=method,
            path=path,
            status_code=resp.status_code,
            error=error,
        )
        raise ApiError(resp.status_code, error, message)

    def _validate(self, adapter: TypeAdapter[_T], data: Any, path: str) -> _T:
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            log.error("task_api_bad_response", path=path, error=str(e))
            raise ApiResponseError(path, e) from e

    async def list_tasks(self) -> list[Record]:
        """GET /api/tasks -- newest first"""
        data = await self._request("GET", TASKS_PATH)
        return self._validate(_RECORD_LIST, data, TASKS_PATH)

    async def get_task(self, task_id: str) -> Record:
        path = f"{TASKS_PATH}/{task_id}"
        data = await self._request("GET", path)
        return self._validate(_RECORD, data, path)

    async def create_task(self, draft: RecordDraft | Mapping[str, Any]) -> Record:
        """POST /api/tasks

        Raises:
            ApiError: 400 when the title is missing or a field is invalid
        """
        data = await self._request("POST", TASKS_PATH, json=_payload(draft))
        return self._validate(_RECORD, data, TASKS_PATH)

    async def update_task(self, task_id: str, patch: RecordPatch | Mapping[str, Any]) -> Record:
        """PUT /api/tasks/{id} -- sparse update, only given keys change"""
        path = f"{TASKS_PATH}/{task_id}"
        data = await self._request("PUT", path, json=_payload(patch))
        return self._validate(_RECORD, data, path)

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", f"{TASKS_PATH}/{task_id}")

    async def get_stats(self) -> RecordStats:
        path = f"{TASKS_PATH}/stats/summary"
        data = await self._request("GET", path)
        return self._validate(_STATS, data, path)
