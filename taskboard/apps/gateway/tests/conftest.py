"""apps/gateway test configuration -- app with a clock-pinned store + httpx AsyncClient"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from taskboard.core.store import open_sqlite_store


@pytest_asyncio.fixture
async def test_app(tmp_path: Path, clock):
    """FastAPI app with app.state initialized manually (lifespan bypassed)"""
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
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """httpx AsyncClient bound to the test app"""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac
