"""API request schemas for CRUD endpoints.

These thin schemas sit between HTTP and the access layer:

- **Create** schemas validate user input and provide defaults.  Server-owned
  fields (``id``, ``createdAt``, parent ids, ``position``) are not declared,
  so a client that sends them is ignored and the server value wins.
- **Update** schemas allow partial updates via ``exclude_unset``.  They only
  declare updatable fields and forbid everything else, so a misspelled or
  read-only field is rejected instead of merged blindly.

Responses reuse the stored entity models in ``entities.py``.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Literal

from pydantic import ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from reqboard.server.models.entities import DEFAULT_COLOR, CamelModel
from reqboard.server.models.enums import Priority, RequestStatus

POSITION_PATTERN = r"^[0-9]+$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

StringBool = Literal["true", "false"]


class PartialUpdate(CamelModel):
    """Base for partial updates.

    Fields listed in ``non_nullable`` may be omitted but not set to ``null``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    non_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_nulls(self) -> PartialUpdate:
        for name in sorted(self.model_fields_set & self.non_nullable):
            if getattr(self, name) is None:
                msg = f"Field '{to_camel(name)}' may not be null"
                raise ValueError(msg)
        return self


# ---------------------------------------------------------------------------
# Workspace / Board
# ---------------------------------------------------------------------------


class WorkspaceCreate(CamelModel):
    """Input for creating a new workspace."""

    name: str = Field(min_length=1)
    description: str | None = None
    color: str | None = DEFAULT_COLOR


class BoardCreate(CamelModel):
    """Input for creating a board; the workspace comes from the URL."""

    name: str = Field(min_length=1)
    description: str | None = None


# ---------------------------------------------------------------------------
# Group
# ---------------------------------------------------------------------------


class GroupCreate(CamelModel):
    """Input for creating a group; board and position are server-assigned."""

    name: str = Field(min_length=1)
    color: str | None = DEFAULT_COLOR
    collapsed: StringBool = "false"


class GroupUpdate(PartialUpdate):
    """Partial group update."""

    non_nullable: ClassVar[frozenset[str]] = frozenset({"name", "position", "collapsed"})

    name: str | None = Field(default=None, min_length=1)
    color: str | None = None
    position: str | None = Field(default=None, pattern=POSITION_PATTERN)
    collapsed: StringBool | None = None


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class RequestCreate(CamelModel):
    """Input for creating a request; group and position are server-assigned."""

    name: str = Field(min_length=1)
    creative_brief: str | None = None
    status: RequestStatus = RequestStatus.WORKING
    priority: Priority = Priority.MEDIUM
    type: str | None = None
    due_date: datetime | None = None
    owner_id: str | None = None
    assignee_id: str | None = None
    prediction: str | None = None


class RequestUpdate(PartialUpdate):
    """Partial request update.

    Setting ``groupId`` moves the request to another group; without an
    explicit ``position`` it is appended at the end of the target group.
    """

    non_nullable: ClassVar[frozenset[str]] = frozenset({"group_id", "name", "status", "priority", "position"})

    group_id: str | None = None
    name: str | None = Field(default=None, min_length=1)
    creative_brief: str | None = None
    status: RequestStatus | None = None
    priority: Priority | None = None
    type: str | None = None
    due_date: datetime | None = None
    owner_id: str | None = None
    assignee_id: str | None = None
    prediction: str | None = None
    position: str | None = Field(default=None, pattern=POSITION_PATTERN)


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------


class UserCreate(CamelModel):
    """Input for creating a user.  Emails are unique across the store."""

    name: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    avatar: str | None = None
    initials: str = Field(min_length=1, max_length=4)
    color: str | None = DEFAULT_COLOR
