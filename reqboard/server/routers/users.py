"""User endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from reqboard.server.deps import Store
from reqboard.server.managers import users as user_manager
from reqboard.server.models.api import UserCreate
from reqboard.server.models.entities import User

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[User])
async def list_users(store: Store) -> list[User]:
    return user_manager.list_users(store)


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(body: UserCreate, store: Store) -> User:
    try:
        return user_manager.create_user(store, body)
    except user_manager.DuplicateUserError:
        raise HTTPException(status.HTTP_409_CONFLICT, detail=f"User with email '{body.email}' already exists.") from None


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, store: Store) -> User:
    try:
        return user_manager.get_user(store, user_id)
    except LookupError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"User '{user_id}' not found.") from None
