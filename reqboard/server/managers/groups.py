"""Group operations.

Groups are the ordered sections of a board.  New groups are appended: the
store hands out the next rank for the board, so the first group on an empty
board gets position ``"1"``, the second ``"2"`` and so on.
"""

from __future__ import annotations

import uuid

from loguru import logger

from reqboard.server.managers.boards import get_board
from reqboard.server.managers.ordering import sort_by_position
from reqboard.server.models.api import GroupCreate, GroupUpdate
from reqboard.server.models.entities import Group
from reqboard.server.models.enums import EntityKind
from reqboard.server.store.base import EntityStore


class GroupNotFoundError(LookupError):
    """Raised when a group is not found."""


def list_groups(store: EntityStore, board_id: str) -> list[Group]:
    """List the groups of a board ordered by position."""
    return sort_by_position(store.records(EntityKind.GROUP, board_id=board_id))


def get_group(store: EntityStore, group_id: str) -> Group:
    """Get a group by ID.  Raises ``GroupNotFoundError`` if missing."""
    group = store.get(EntityKind.GROUP, group_id)
    if group is None:
        raise GroupNotFoundError(group_id)
    return group


def create_group(store: EntityStore, board_id: str, body: GroupCreate) -> Group:
    """Append a group to a board.  Raises ``BoardNotFoundError`` if the board is missing."""
    with store.transaction():
        get_board(store, board_id)
        group = Group(
            id=str(uuid.uuid4()),
            board_id=board_id,
            position=store.next_position(EntityKind.GROUP, board_id),
            **body.model_dump(),
        )
        store.insert(EntityKind.GROUP, group)
    logger.info("Group created: {} (board={}, position={})", group.id, board_id, group.position)
    return group


def update_group(store: EntityStore, group_id: str, body: GroupUpdate) -> Group:
    """Partially update a group.  Raises ``GroupNotFoundError`` if missing."""
    with store.transaction():
        group = get_group(store, group_id)

        changes = body.model_dump(exclude_unset=True)
        if not changes:
            return group

        group = group.model_copy(update=changes)
        store.replace(EntityKind.GROUP, group)
    logger.info("Group updated: {} (fields={})", group_id, sorted(changes))
    return group
