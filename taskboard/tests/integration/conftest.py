"""Integration test fixtures -- real gateway app driven by the real client"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import httpx
import pytest_asyncio
from taskboard.client.api import TaskApiClient
from taskboard.core.store import open_sqlite_store


@pytest_asyncio.fixture
async def integration_app(tmp_path: Path, clock):
    """FastAPI app over a temporary SQLite store"""
    os.environ["TASKBOARD_DB_PATH"] = str(tmp_path / "test.db")
    os.environ["TASKBOARD_STATIC_DIR"] = str(tmp_path / "no-static")
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    from taskboard.gateway.main import create_app

    app = create_app()
    store = await open_sqlite_store(str(tmp_path / "test.db"), clock=clock)
    app.state.record_store = store

    yield app

    await store.close()
    for key in ["TASKBOARD_DB_PATH", "TASKBOARD_STATIC_DIR", "LOGFIRE_SEND_TO_LOGFIRE"]:
        os.environ.pop(key, None)


@pytest_asyncio.fixture
async def api(integration_app) -> AsyncGenerator[TaskApiClient, None]:
    """TaskApiClient whose transport is the in-process gateway"""
    http = httpx.AsyncClient(
        transport=httpx.ASGITransport(app=integration_app),
        base_url="http://test",
    )
    async with TaskApiClient(base_url="http://test", http_client=http) as client:
        yield client
    await http.aclose()
