"""Board operations: create, list by workspace, get."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from loguru import logger

from reqboard.server.managers.workspaces import get_workspace
from reqboard.server.models.api import BoardCreate
from reqboard.server.models.entities import Board
from reqboard.server.models.enums import EntityKind
from reqboard.server.store.base import EntityStore


class BoardNotFoundError(LookupError):
    """Raised when a board is not found."""


def list_boards(store: EntityStore, workspace_id: str) -> list[Board]:
    """List the boards of a workspace in creation order.

    An unknown workspace simply has no boards.
    """
    return store.records(EntityKind.BOARD, workspace_id=workspace_id)


def get_board(store: EntityStore, board_id: str) -> Board:
    """Get a board by ID.  Raises ``BoardNotFoundError`` if missing."""
    board = store.get(EntityKind.BOARD, board_id)
    if board is None:
        raise BoardNotFoundError(board_id)
    return board


def create_board(store: EntityStore, workspace_id: str, body: BoardCreate) -> Board:
    """Create a board.  Raises ``WorkspaceNotFoundError`` if the workspace is missing."""
    with store.transaction():
        get_workspace(store, workspace_id)
        board = Board(
            id=str(uuid.uuid4()),
            workspace_id=workspace_id,
            created_at=datetime.now(UTC),
            **body.model_dump(),
        )
        store.insert(EntityKind.BOARD, board)
    logger.info("Board created: {} (workspace={})", board.id, workspace_id)
    return board
