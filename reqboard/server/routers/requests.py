"""Request endpoints: get, partial update, delete."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from reqboard.server.deps import Store
from reqboard.server.managers import requests as request_manager
from reqboard.server.models.api import RequestUpdate
from reqboard.server.models.entities import WorkRequest

router = APIRouter(prefix="/requests", tags=["requests"])


@router.get("/{request_id}", response_model=WorkRequest)
async def get_request(request_id: str, store: Store) -> WorkRequest:
    try:
        return request_manager.get_request(store, request_id)
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Request '{request_id}' not found.") from None


@router.patch("/{request_id}", response_model=WorkRequest)
async def update_request(request_id: str, body: RequestUpdate, store: Store) -> WorkRequest:
    """Partially update a request.  Setting ``groupId`` moves it."""
    try:
        return request_manager.update_request(store, request_id, body)
    except request_manager.InvalidReferenceError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Request '{request_id}' not found.") from None


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_request(request_id: str, store: Store) -> None:
    try:
        request_manager.delete_request(store, request_id)
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Request '{request_id}' not found.") from None
