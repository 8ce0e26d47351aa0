"""Fixtures for API tests."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from reqboard.server.app import app
from reqboard.server.managers.boards import create_board
from reqboard.server.managers.workspaces import create_workspace
from reqboard.server.models.api import BoardCreate, WorkspaceCreate
from reqboard.server.models.entities import Board
from reqboard.server.store.memory import MemoryStore


@pytest.fixture
async def client(store: MemoryStore) -> AsyncIterator[AsyncClient]:
    """Async HTTP client wired to the app with the test's store.

    The app lifespan does NOT run under ``ASGITransport``, so the store is
    set on ``app.state`` directly.
    """
    app.state.store = store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.state.store = None
    app.dependency_overrides.clear()


@pytest.fixture
def board(store: MemoryStore) -> Board:
    """An empty board inside a fresh workspace."""
    workspace = create_workspace(store, WorkspaceCreate(name="Studio"))
    return create_board(store, workspace.id, BoardCreate(name="Campaigns"))
