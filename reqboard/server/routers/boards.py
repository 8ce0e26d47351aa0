"""Board endpoints: board lookup, its ordered groups and board-wide requests."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from reqboard.server.deps import Store
from reqboard.server.managers import boards as board_manager
from reqboard.server.managers import groups as group_manager
from reqboard.server.managers import requests as request_manager
from reqboard.server.models.api import GroupCreate
from reqboard.server.models.entities import Board, Group, WorkRequest

router = APIRouter(prefix="/boards", tags=["boards"])


@router.get("/{board_id}", response_model=Board)
async def get_board(board_id: str, store: Store) -> Board:
    try:
        return board_manager.get_board(store, board_id)
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Board '{board_id}' not found.") from None


@router.get("/{board_id}/groups", response_model=list[Group])
async def list_groups(board_id: str, store: Store) -> list[Group]:
    """List the board's groups ordered by position."""
    return group_manager.list_groups(store, board_id)


@router.post("/{board_id}/groups", response_model=Group, status_code=status.HTTP_201_CREATED)
async def create_group(board_id: str, body: GroupCreate, store: Store) -> Group:
    """Append a group to the board.  The server assigns its position."""
    try:
        return group_manager.create_group(store, board_id, body)
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Board '{board_id}' not found.") from None


@router.get("/{board_id}/requests", response_model=list[WorkRequest])
async def list_board_requests(board_id: str, store: Store) -> list[WorkRequest]:
    """List every request across the board's groups."""
    return request_manager.list_board_requests(store, board_id)
