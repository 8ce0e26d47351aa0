"""Request operations.

Requests are the rows of a group.  Like groups they are appended on create
and listed by position.  The board-wide listing merges the requests of every
group on the board: ordered by position first, then by the group's order on
the board, then by insertion order.

References carried in a payload are checked at write time:

- ``groupId`` on update must name an existing group (a move);
- ``ownerId`` / ``assigneeId`` must be ``null`` or name an existing user.

Violations raise ``InvalidReferenceError``.  A missing group in the URL of a
create raises ``GroupNotFoundError`` instead.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from loguru import logger
from pydantic.alias_generators import to_camel

from reqboard.server.managers.groups import get_group, list_groups
from reqboard.server.managers.ordering import position_rank, sort_by_position
from reqboard.server.models.api import RequestCreate, RequestUpdate
from reqboard.server.models.entities import WorkRequest
from reqboard.server.models.enums import EntityKind
from reqboard.server.store.base import EntityStore

USER_REFERENCE_FIELDS = ("owner_id", "assignee_id")


class RequestNotFoundError(LookupError):
    """Raised when a request is not found."""


class InvalidReferenceError(ValueError):
    """Raised when a payload references a group or user that does not exist."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"{to_camel(field)} '{value}' does not reference an existing record")
        self.field = field
        self.value = value


def _check_user_references(store: EntityStore, fields: dict[str, Any]) -> None:
    for name in USER_REFERENCE_FIELDS:
        user_id = fields.get(name)
        if user_id is not None and store.get(EntityKind.USER, user_id) is None:
            raise InvalidReferenceError(name, user_id)


# -- Query ---------------------------------------------------------------------


def list_group_requests(store: EntityStore, group_id: str) -> list[WorkRequest]:
    """List the requests of a group ordered by position."""
    return sort_by_position(store.records(EntityKind.REQUEST, group_id=group_id))


def list_board_requests(store: EntityStore, board_id: str) -> list[WorkRequest]:
    """List every request across a board's groups."""
    group_order = {group.id: index for index, group in enumerate(list_groups(store, board_id))}
    rows = [
        (index, request)
        for index, request in enumerate(store.records(EntityKind.REQUEST))
        if request.group_id in group_order
    ]
    rows.sort(key=lambda item: (position_rank(item[1].position), group_order[item[1].group_id], item[0]))
    return [request for _, request in rows]


def get_request(store: EntityStore, request_id: str) -> WorkRequest:
    """Get a request by ID.  Raises ``RequestNotFoundError`` if missing."""
    request = store.get(EntityKind.REQUEST, request_id)
    if request is None:
        raise RequestNotFoundError(request_id)
    return request


# -- Mutation ------------------------------------------------------------------


def create_request(store: EntityStore, group_id: str, body: RequestCreate) -> WorkRequest:
    """Append a request to a group.

    Raises ``GroupNotFoundError`` if the group is missing and
    ``InvalidReferenceError`` for an unknown owner or assignee.
    """
    fields = body.model_dump()
    with store.transaction():
        get_group(store, group_id)
        _check_user_references(store, fields)
        request = WorkRequest(
            id=str(uuid.uuid4()),
            group_id=group_id,
            position=store.next_position(EntityKind.REQUEST, group_id),
            created_at=datetime.now(UTC),
            **fields,
        )
        store.insert(EntityKind.REQUEST, request)
    logger.info("Request created: {} (group={}, position={})", request.id, group_id, request.position)
    return request


def update_request(store: EntityStore, request_id: str, body: RequestUpdate) -> WorkRequest:
    """Partially update a request.  Raises ``RequestNotFoundError`` if missing.

    A ``groupId`` change without an explicit ``position`` appends the request
    to the target group.
    """
    with store.transaction():
        request = get_request(store, request_id)

        changes = body.model_dump(exclude_unset=True)
        if not changes:
            return request

        _check_user_references(store, changes)
        target_group = changes.get("group_id")
        if target_group is not None and target_group != request.group_id:
            if store.get(EntityKind.GROUP, target_group) is None:
                raise InvalidReferenceError("group_id", target_group)
            if "position" not in changes:
                changes["position"] = store.next_position(EntityKind.REQUEST, target_group)

        request = request.model_copy(update=changes)
        store.replace(EntityKind.REQUEST, request)
    logger.info("Request updated: {} (fields={})", request_id, sorted(changes))
    return request


def delete_request(store: EntityStore, request_id: str) -> None:
    """Hard-delete a request.  Raises ``RequestNotFoundError`` if missing."""
    if not store.remove(EntityKind.REQUEST, request_id):
        raise RequestNotFoundError(request_id)
    logger.info("Request deleted: {}", request_id)
