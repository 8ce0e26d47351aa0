"""BoardClient against the in-process app: caching, invalidation, failures."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import httpx
import pytest
from httpx import ASGITransport

from reqboard.client.cache import QueryStatus
from reqboard.client.client import BoardClient, BoardClientError
from reqboard.server.app import app
from reqboard.server.seed import seed_demo_data
from reqboard.server.store.memory import MemoryStore


class RequestLog:
    """Records every request the client puts on the wire."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, str]] = []

    async def __call__(self, request: httpx.Request) -> None:
        self.requests.append((request.method, request.url.path))

    def count(self, method: str, path: str) -> int:
        return self.requests.count((method, path))


@pytest.fixture
def wire() -> RequestLog:
    return RequestLog()


@pytest.fixture
def notifications() -> list[tuple[str, BoardClientError]]:
    return []


@pytest.fixture
async def board_client(
    store: MemoryStore,
    wire: RequestLog,
    notifications: list[tuple[str, BoardClientError]],
) -> AsyncIterator[BoardClient]:
    seed_demo_data(store)
    app.state.store = store

    http = httpx.AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        event_hooks={"request": [wire]},
    )
    client = BoardClient(http=http, notify=lambda title, exc: notifications.append((title, exc)))
    async with http:
        yield client

    app.state.store = None


async def _first_board(client: BoardClient) -> dict:
    (workspace,) = await client.workspaces()
    (board,) = await client.boards(workspace["id"])
    return board


async def test_reads_are_cached(board_client: BoardClient, wire: RequestLog) -> None:
    board = await _first_board(board_client)
    groups = await board_client.groups(board["id"])
    again = await board_client.groups(board["id"])

    assert [g["name"] for g in groups] == ["Incoming Requests", "In progress", "Completed"]
    assert again == groups
    assert wire.count("GET", f"/api/boards/{board['id']}/groups") == 1

    state = board_client.state(("/api/boards", board["id"], "groups"))
    assert state is not None
    assert state.status is QueryStatus.SUCCESS


async def test_create_request_invalidates_and_refetches(board_client: BoardClient, wire: RequestLog) -> None:
    board = await _first_board(board_client)
    incoming = (await board_client.groups(board["id"]))[0]
    before = await board_client.board_requests(board["id"])
    in_group = await board_client.group_requests(incoming["id"])

    created = await board_client.create_request(incoming["id"], {"name": "Newsletter", "priority": "high"})

    assert created["position"] == str(len(in_group) + 1)
    # Refetched eagerly after the mutation ...
    assert wire.count("GET", f"/api/boards/{board['id']}/requests") == 2
    assert wire.count("GET", f"/api/groups/{incoming['id']}/requests") == 2
    # ... so reads now hit the cache and see the new row.
    after = await board_client.board_requests(board["id"])
    assert len(after) == len(before) + 1
    assert created["id"] in {r["id"] for r in await board_client.group_requests(incoming["id"])}
    assert wire.count("GET", f"/api/boards/{board['id']}/requests") == 2


async def test_update_request_refreshes_board_listing(board_client: BoardClient) -> None:
    board = await _first_board(board_client)
    requests = await board_client.board_requests(board["id"])
    target = requests[0]

    updated = await board_client.update_request(target["id"], {"status": "completed"})

    assert updated["status"] == "completed"
    refreshed = {r["id"]: r for r in await board_client.board_requests(board["id"])}
    assert refreshed[target["id"]]["status"] == "completed"


async def test_delete_request_refreshes_listings(board_client: BoardClient) -> None:
    board = await _first_board(board_client)
    requests = await board_client.board_requests(board["id"])

    await board_client.delete_request(requests[0]["id"])

    remaining = await board_client.board_requests(board["id"])
    assert [r["id"] for r in remaining] == [r["id"] for r in requests[1:]]


async def test_create_group_and_collapse(board_client: BoardClient) -> None:
    board = await _first_board(board_client)
    await board_client.groups(board["id"])

    group = await board_client.create_group(board["id"], {"name": "Archive"})
    assert group["position"] == "4"

    await board_client.update_group(group["id"], {"collapsed": "true"})
    groups = await board_client.groups(board["id"])
    assert groups[-1]["name"] == "Archive"
    assert groups[-1]["collapsed"] == "true"


async def test_refetch_disabled_defers_to_next_read(board_client: BoardClient, wire: RequestLog) -> None:
    board_client._refetch = False
    board = await _first_board(board_client)
    await board_client.groups(board["id"])

    await board_client.create_group(board["id"], {"name": "Archive"})
    assert wire.count("GET", f"/api/boards/{board['id']}/groups") == 1

    groups = await board_client.groups(board["id"])
    assert wire.count("GET", f"/api/boards/{board['id']}/groups") == 2
    assert groups[-1]["name"] == "Archive"


async def test_failed_mutation_notifies_and_raises(
    board_client: BoardClient,
    notifications: list[tuple[str, BoardClientError]],
) -> None:
    with pytest.raises(BoardClientError) as exc_info:
        await board_client.update_request("missing", {"name": "X"})

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Request 'missing' not found."
    assert [title for title, _ in notifications] == ["Failed to update request"]


async def test_validation_failure_carries_errors(board_client: BoardClient) -> None:
    board = await _first_board(board_client)
    incoming = (await board_client.groups(board["id"]))[0]

    with pytest.raises(BoardClientError) as exc_info:
        await board_client.create_request(incoming["id"], {"name": "R", "priority": "urgent"})

    assert exc_info.value.status_code == 400
    assert [err["loc"] for err in exc_info.value.errors] == [["body", "priority"]]


async def test_failed_query_sets_error_state(board_client: BoardClient) -> None:
    with pytest.raises(BoardClientError):
        await board_client.board("missing")

    state = board_client.state(("/api/boards", "missing"))
    assert state is not None
    assert state.status is QueryStatus.ERROR
    assert isinstance(state.error, BoardClientError)


async def test_unreachable_server() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(refuse), base_url="http://test")
    notified: list[str] = []
    async with BoardClient(http=http, notify=lambda title, exc: notified.append(title)) as client:
        with pytest.raises(BoardClientError) as exc_info:
            await client.create_user({"name": "A", "email": "a@example.com", "initials": "A"})

    assert exc_info.value.status_code is None
    assert notified == ["Failed to create user"]
    await http.aclose()


async def test_mutation_refetch_does_not_reuse_read_sent_before_it() -> None:
    server = {"v": 1}
    reads = 0
    slow_read_started = asyncio.Event()
    release = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        nonlocal reads
        if request.method == "POST":
            server["v"] += 1
            return httpx.Response(201, json={"id": "u1"})
        reads += 1
        snapshot = dict(server)
        if reads == 2:
            slow_read_started.set()
            await release.wait()
        return httpx.Response(200, json=snapshot)

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")
    async with http:
        client = BoardClient(http=http)
        assert await client.users() == {"v": 1}

        slow = asyncio.create_task(client.query(("/api/users",), force=True))
        await slow_read_started.wait()

        await asyncio.wait_for(client.create_user({"name": "A", "email": "a@example.com", "initials": "A"}), 5)
        release.set()
        assert await slow == {"v": 1}

    state = client.state(("/api/users",))
    assert state.data == {"v": 2}
    assert not state.stale
    assert reads == 3
