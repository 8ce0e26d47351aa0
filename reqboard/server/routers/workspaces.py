"""Workspace endpoints and the boards nested under them."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from reqboard.server.deps import Store
from reqboard.server.managers import boards as board_manager
from reqboard.server.managers import workspaces as workspace_manager
from reqboard.server.models.api import BoardCreate, WorkspaceCreate
from reqboard.server.models.entities import Board, Workspace

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


@router.get("", response_model=list[Workspace])
async def list_workspaces(store: Store) -> list[Workspace]:
    """List all workspaces."""
    return workspace_manager.list_workspaces(store)


@router.post("", response_model=Workspace, status_code=status.HTTP_201_CREATED)
async def create_workspace(body: WorkspaceCreate, store: Store) -> Workspace:
    return workspace_manager.create_workspace(store, body)


@router.get("/{workspace_id}", response_model=Workspace)
async def get_workspace(workspace_id: str, store: Store) -> Workspace:
    try:
        return workspace_manager.get_workspace(store, workspace_id)
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Workspace '{workspace_id}' not found.") from None


@router.get("/{workspace_id}/boards", response_model=list[Board])
async def list_boards(workspace_id: str, store: Store) -> list[Board]:
    """List the boards of a workspace (empty for an unknown workspace)."""
    return board_manager.list_boards(store, workspace_id)


@router.post("/{workspace_id}/boards", response_model=Board, status_code=status.HTTP_201_CREATED)
async def create_board(workspace_id: str, body: BoardCreate, store: Store) -> Board:
    try:
        return board_manager.create_board(store, workspace_id, body)
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Workspace '{workspace_id}' not found.") from None
