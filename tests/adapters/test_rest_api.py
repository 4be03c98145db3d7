"""Tests for the REST API adapter and the API client."""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from todolist.adapters.rest_api import RestApiTaskRepository
from todolist.api.client import APIClient
from todolist.models import NotFoundError, PersistError, TaskUpdate, TransportError
from todolist.server import create_app
from todolist.services.task_service import TaskService


def _repo_for(handler) -> RestApiTaskRepository:
    client = APIClient("http://todo.test", transport=httpx.MockTransport(handler))
    return RestApiTaskRepository(client)


@pytest_asyncio.fixture
async def live_repo(sqlite_repo):
    """Adapter talking to the real app in-process."""
    transport = httpx.ASGITransport(app=create_app(TaskService(sqlite_repo)))
    repo = RestApiTaskRepository(APIClient("http://todo.test", transport=transport))
    yield repo
    await repo.close()


# ---------------------------------------------------------------------------
# Against the real application
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_full_lifecycle_through_server(live_repo, make_task):
    created = await live_repo.add(make_task("client-side-id", "  Buy milk "))

    assert created.title == "Buy milk"
    assert created.id != "client-side-id"

    toggled = await live_repo.update(created.id, TaskUpdate(is_done=True))
    assert toggled.is_done is True

    assert [t.id for t in await live_repo.list_all()] == [created.id]
    assert await live_repo.delete_completed() == 1
    assert await live_repo.list_all() == []


@pytest.mark.asyncio
async def test_unknown_task_maps_to_not_found(live_repo):
    with pytest.raises(NotFoundError, match="Task not found"):
        await live_repo.update("missing", TaskUpdate(is_done=True))
    with pytest.raises(NotFoundError):
        await live_repo.delete("missing")


@pytest.mark.asyncio
async def test_delete_returns_removed_task(live_repo, make_task):
    created = await live_repo.add(make_task("x", "temporary"))

    removed = await live_repo.delete(created.id)

    assert removed.id == created.id
    assert removed.title == "temporary"


# ---------------------------------------------------------------------------
# Transport failures
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_non_json_body_is_transport_error():
    repo = _repo_for(lambda request: httpx.Response(502, text="<html>Bad gateway</html>"))

    with pytest.raises(TransportError):
        await repo.list_all()
    await repo.close()


@pytest.mark.asyncio
async def test_body_without_envelope_is_transport_error():
    repo = _repo_for(lambda request: httpx.Response(200, json=[{"id": "1"}]))

    with pytest.raises(TransportError):
        await repo.list_all()


@pytest.mark.asyncio
async def test_malformed_task_record_is_transport_error():
    repo = _repo_for(
        lambda request: httpx.Response(200, json={"success": True, "data": [{"id": "1"}]})
    )

    with pytest.raises(TransportError):
        await repo.list_all()


@pytest.mark.asyncio
async def test_server_error_carries_message():
    repo = _repo_for(
        lambda request: httpx.Response(
            500, json={"success": False, "error": "Failed to fetch tasks"}
        )
    )

    with pytest.raises(PersistError, match="Failed to fetch tasks") as excinfo:
        await repo.list_all()
    assert not isinstance(excinfo.value, TransportError)


@pytest.mark.asyncio
async def test_network_failure_is_persist_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    repo = _repo_for(handler)

    with pytest.raises(PersistError, match="Could not reach"):
        await repo.list_all()


@pytest.mark.asyncio
async def test_update_sends_only_provided_fields():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = request.read().decode()
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": {
                    "id": "7",
                    "title": "t",
                    "isDone": True,
                    "createdAt": "2026-01-02T15:04:00Z",
                },
            },
        )

    repo = _repo_for(handler)
    task = await repo.update("7", TaskUpdate(is_done=True))

    assert task.is_done is True
    assert seen["method"] == "PUT"
    assert seen["path"] == "/api/tasks/7"
    assert seen["body"].replace(" ", "") == '{"isDone":true}'


@pytest.mark.asyncio
async def test_client_does_not_retry():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500, json={"success": False, "error": "Failed to create task"})

    client = APIClient("http://todo.test", transport=httpx.MockTransport(handler))

    with pytest.raises(PersistError):
        await client.post("/api/tasks", json={"title": "x"})
    assert len(calls) == 1
    await client.close()
