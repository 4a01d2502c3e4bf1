"""TaskBoard end-to-end scenarios

Board cache, gateway and SQLite store together.
"""

import httpx
from taskboard.client.api import TaskApiClient
from taskboard.client.state import TaskBoard


class TestBoardScenarios:
    async def test_checkup_overdue_scenario(self, api, clock):
        board = TaskBoard(api, clock=clock)

        record = await board.add({"title": "Checkup", "priority": "high", "dueDate": "2020-01-01"})
        assert record is not None

        stats = await api.get_stats()
        assert stats.overdue == 1
        assert board.summary() == stats

        board.set_filter("overdue")
        assert [r.id for r in board.visible()] == [record.id]
        assert "Overdue" in board.render()

        await board.toggle(record.id)
        assert (await api.get_stats()).overdue == 0
        assert board.visible() == []

    async def test_cache_mirrors_server_after_mutations(self, api, clock):
        board = TaskBoard(api, clock=clock)
        a = await board.add({"title": "a"})
        clock.advance(seconds=1)
        b = await board.add({"title": "b", "category": "Home"})
        clock.advance(seconds=1)
        await board.add({"title": "c"})

        await board.edit(b.id, {"title": "b2"})
        await board.toggle(a.id)
        await board.remove(a.id)

        cached = board.records
        assert await board.refresh()
        assert board.records == cached

    async def test_rejected_create_keeps_cache(self, api, clock):
        board = TaskBoard(api, clock=clock)
        await board.add({"title": "kept"})

        assert await board.add({"description": "no title"}) is None
        assert len(board.records) == 1
        notes = board.drain_notifications()
        assert notes[0].message == "Failed to add task"

    async def test_unreachable_gateway_notifies(self, clock):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        http = httpx.AsyncClient(transport=httpx.MockTransport(refuse), base_url="http://test")
        async with TaskApiClient(base_url="http://test", http_client=http) as api:
            board = TaskBoard(api, clock=clock)
            assert await board.refresh() is False
            assert board.records == []
            assert board.notifications[0].message.startswith("Failed to load tasks")
        await http.aclose()
