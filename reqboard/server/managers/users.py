"""User operations.  Emails are unique across the store."""

from __future__ import annotations

import uuid

from loguru import logger

from reqboard.server.models.api import UserCreate
from reqboard.server.models.entities import User
from reqboard.server.models.enums import EntityKind
from reqboard.server.store.base import EntityStore


class DuplicateUserError(ValueError):
    """Raised when a user with the given email already exists."""


class UserNotFoundError(LookupError):
    """Raised when a user is not found."""


def list_users(store: EntityStore) -> list[User]:
    return store.records(EntityKind.USER)


def get_user(store: EntityStore, user_id: str) -> User:
    """Get a user by ID.  Raises ``UserNotFoundError`` if missing."""
    user = store.get(EntityKind.USER, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


def create_user(store: EntityStore, body: UserCreate) -> User:
    """Create a user.  Raises ``DuplicateUserError`` if the email is taken."""
    with store.transaction():
        email = body.email.lower()
        if any(u.email.lower() == email for u in store.records(EntityKind.USER)):
            raise DuplicateUserError(body.email)

        user = User(id=str(uuid.uuid4()), **body.model_dump())
        store.insert(EntityKind.USER, user)
    logger.info("User created: {} ({})", user.id, user.email)
    return user
