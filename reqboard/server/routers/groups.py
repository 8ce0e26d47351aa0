"""Group endpoints and the requests nested under them."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from reqboard.server.deps import Store
from reqboard.server.managers import groups as group_manager
from reqboard.server.managers import requests as request_manager
from reqboard.server.models.api import GroupUpdate, RequestCreate
from reqboard.server.models.entities import Group, WorkRequest

router = APIRouter(prefix="/groups", tags=["groups"])


@router.get("/{group_id}", response_model=Group)
async def get_group(group_id: str, store: Store) -> Group:
    try:
        return group_manager.get_group(store, group_id)
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Group '{group_id}' not found.") from None


@router.patch("/{group_id}", response_model=Group)
async def update_group(group_id: str, body: GroupUpdate, store: Store) -> Group:
    """Partially update a group (rename, recolour, collapse, reorder)."""
    try:
        return group_manager.update_group(store, group_id, body)
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Group '{group_id}' not found.") from None


@router.get("/{group_id}/requests", response_model=list[WorkRequest])
async def list_group_requests(group_id: str, store: Store) -> list[WorkRequest]:
    """List the group's requests ordered by position."""
    return request_manager.list_group_requests(store, group_id)


@router.post("/{group_id}/requests", response_model=WorkRequest, status_code=status.HTTP_201_CREATED)
async def create_request(group_id: str, body: RequestCreate, store: Store) -> WorkRequest:
    """Append a request to the group.  The server assigns its position."""
    try:
        return request_manager.create_request(store, group_id, body)
    except request_manager.InvalidReferenceError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Group '{group_id}' not found.") from None
