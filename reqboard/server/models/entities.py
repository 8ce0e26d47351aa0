"""Stored entity models.

These are the records held by the entity store and returned to clients.  The
wire format is camelCase (``workspaceId``, ``createdAt``), the Python
attributes are snake_case; ``populate_by_name`` lets the store build records
from either spelling.

Containment is a strict tree::

    Workspace -> Board -> Group -> Request

Users are referenced weakly from requests (``owner_id`` / ``assignee_id``).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from reqboard.server.models.enums import Priority, RequestStatus

DEFAULT_COLOR = "#635BFF"


class CamelModel(BaseModel):
    """Base model serialised with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Workspace(CamelModel):
    id: str
    name: str
    description: str | None = None
    color: str | None = DEFAULT_COLOR
    created_at: datetime


class Board(CamelModel):
    id: str
    workspace_id: str
    name: str
    description: str | None = None
    created_at: datetime


class Group(CamelModel):
    """A titled, ordered section of a board."""

    id: str
    board_id: str
    name: str
    color: str | None = DEFAULT_COLOR
    position: str
    """String-encoded integer rank among the board's groups."""

    collapsed: str | None = "false"
    """String boolean (``"true"`` / ``"false"``) kept for wire compatibility."""


class WorkRequest(CamelModel):
    """A single request (row) inside a group."""

    id: str
    group_id: str
    name: str
    creative_brief: str | None = None
    status: RequestStatus = RequestStatus.WORKING
    priority: Priority = Priority.MEDIUM
    type: str | None = None
    due_date: datetime | None = None
    owner_id: str | None = None
    assignee_id: str | None = None
    prediction: str | None = None
    position: str
    """String-encoded integer rank among the group's requests."""

    created_at: datetime


class User(CamelModel):
    id: str
    name: str
    email: str
    avatar: str | None = None
    initials: str
    color: str | None = DEFAULT_COLOR
