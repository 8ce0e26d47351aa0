"""Shared enumerations used across the board service."""

from __future__ import annotations

from enum import StrEnum

# -- Request -----------------------------------------------------------------


class RequestStatus(StrEnum):
    """Workflow status of a request."""

    WORKING = "working"
    PROGRESS = "progress"
    COMPLETED = "completed"


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# -- Store -------------------------------------------------------------------


class EntityKind(StrEnum):
    """Table names inside the entity store."""

    WORKSPACE = "workspace"
    BOARD = "board"
    GROUP = "group"
    REQUEST = "request"
    USER = "user"
