"""API tests for board and group endpoints."""

from __future__ import annotations

from httpx import AsyncClient

from reqboard.server.models.entities import Board


async def test_get_board(client: AsyncClient, board: Board) -> None:
    resp = await client.get(f"/api/boards/{board.id}")
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == board.id
    assert data["workspaceId"] == board.workspace_id
    assert data["name"] == "Campaigns"
    assert "createdAt" in data


async def test_get_board_not_found(client: AsyncClient) -> None:
    resp = await client.get("/api/boards/missing")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Board 'missing' not found."}


async def test_create_groups_assigns_positions(client: AsyncClient, board: Board) -> None:
    resp = await client.post(f"/api/boards/{board.id}/groups", json={"name": "Backlog"})
    assert resp.status_code == 201
    backlog = resp.json()
    assert backlog["position"] == "1"
    assert backlog["boardId"] == board.id
    assert backlog["collapsed"] == "false"
    assert backlog["color"] == "#635BFF"

    resp = await client.post(f"/api/boards/{board.id}/groups", json={"name": "Done"})
    assert resp.json()["position"] == "2"

    resp = await client.get(f"/api/boards/{board.id}/groups")
    assert resp.status_code == 200
    assert [g["name"] for g in resp.json()] == ["Backlog", "Done"]


async def test_create_group_ignores_client_position(client: AsyncClient, board: Board) -> None:
    resp = await client.post(
        f"/api/boards/{board.id}/groups",
        json={"name": "Backlog", "position": "99", "boardId": "elsewhere"},
    )
    assert resp.status_code == 201
    assert resp.json()["position"] == "1"
    assert resp.json()["boardId"] == board.id


async def test_create_group_missing_board(client: AsyncClient) -> None:
    resp = await client.post("/api/boards/missing/groups", json={"name": "Backlog"})
    assert resp.status_code == 404

    resp = await client.get("/api/boards/missing/groups")
    assert resp.status_code == 200
    assert resp.json() == []


async def test_create_group_requires_name(client: AsyncClient, board: Board) -> None:
    resp = await client.post(f"/api/boards/{board.id}/groups", json={"color": "#000000"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["detail"] == "Invalid request data"
    assert any(err["loc"][-1] == "name" for err in body["errors"])


async def test_patch_group(client: AsyncClient, board: Board) -> None:
    group = (await client.post(f"/api/boards/{board.id}/groups", json={"name": "Backlog"})).json()

    resp = await client.patch(f"/api/groups/{group['id']}", json={"collapsed": "true"})
    assert resp.status_code == 200
    patched = resp.json()
    assert patched["collapsed"] == "true"
    assert {k: v for k, v in patched.items() if k != "collapsed"} == {
        k: v for k, v in group.items() if k != "collapsed"
    }

    resp = await client.get(f"/api/groups/{group['id']}")
    assert resp.json() == patched


async def test_patch_group_reorders(client: AsyncClient, board: Board) -> None:
    first = (await client.post(f"/api/boards/{board.id}/groups", json={"name": "First"})).json()
    await client.post(f"/api/boards/{board.id}/groups", json={"name": "Second"})

    resp = await client.patch(f"/api/groups/{first['id']}", json={"position": "3"})
    assert resp.status_code == 200

    resp = await client.get(f"/api/boards/{board.id}/groups")
    assert [g["name"] for g in resp.json()] == ["Second", "First"]


async def test_patch_group_not_found(client: AsyncClient) -> None:
    resp = await client.patch("/api/groups/missing", json={"name": "X"})
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Group 'missing' not found."}


async def test_patch_group_rejects_unknown_field(client: AsyncClient, board: Board) -> None:
    group = (await client.post(f"/api/boards/{board.id}/groups", json={"name": "Backlog"})).json()

    resp = await client.patch(f"/api/groups/{group['id']}", json={"boardId": "elsewhere"})
    assert resp.status_code == 400

    resp = await client.patch(f"/api/groups/{group['id']}", json={"colour": "#000000"})
    assert resp.status_code == 400

    resp = await client.get(f"/api/groups/{group['id']}")
    assert resp.json() == group


async def test_patch_group_rejects_bad_values(client: AsyncClient, board: Board) -> None:
    group = (await client.post(f"/api/boards/{board.id}/groups", json={"name": "Backlog"})).json()

    for payload in ({"position": "first"}, {"collapsed": "yes"}, {"name": None}, {"name": ""}):
        resp = await client.patch(f"/api/groups/{group['id']}", json=payload)
        assert resp.status_code == 400, payload

    resp = await client.get(f"/api/groups/{group['id']}")
    assert resp.json() == group


async def test_get_group_not_found(client: AsyncClient) -> None:
    resp = await client.get("/api/groups/missing")
    assert resp.status_code == 404
