"""Data models for the board service."""

from reqboard.server.models.api import (
    BoardCreate,
    GroupCreate,
    GroupUpdate,
    RequestCreate,
    RequestUpdate,
    UserCreate,
    WorkspaceCreate,
)
from reqboard.server.models.entities import Board, Group, User, WorkRequest, Workspace
from reqboard.server.models.enums import EntityKind, Priority, RequestStatus

__all__ = [
    # Entities
    "Board",
    # API schemas
    "BoardCreate",
    # Enums
    "EntityKind",
    "Group",
    "GroupCreate",
    "GroupUpdate",
    "Priority",
    "RequestCreate",
    "RequestStatus",
    "RequestUpdate",
    "User",
    "UserCreate",
    "WorkRequest",
    "Workspace",
    "WorkspaceCreate",
]
