"""In-memory entity store.

Tables are plain dicts keyed by id, so iteration order is insertion order;
the access layer relies on that as the tie-break for equal positions.  An
update replaces the record under its existing key and therefore keeps its
slot.

Ranks are handed out from a per-parent sequence::

    next = max(highest rank held by a sibling, last rank issued) + 1

With sequential inserts and no deletes this is ``count(siblings) + 1``.
After a delete it never reuses a rank still held by a sibling, and because
the sequence is only advanced under the store lock two concurrent creates
under the same parent cannot receive the same rank.

Nothing is persisted; a new ``MemoryStore`` is empty.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from pydantic import BaseModel

from reqboard.server.managers.ordering import position_rank
from reqboard.server.models.enums import EntityKind

# Attribute holding the parent id, for kinds ordered by ``position``.
PARENT_FIELD: dict[EntityKind, str] = {
    EntityKind.GROUP: "board_id",
    EntityKind.REQUEST: "group_id",
}


class MemoryStore:
    """Process-local implementation of the EntityStore protocol."""

    def __init__(self) -> None:
        self._tables: dict[EntityKind, dict[str, Any]] = {kind: {} for kind in EntityKind}
        self._sequences: dict[tuple[EntityKind, str], int] = {}
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            yield

    # -- Query -----------------------------------------------------------------

    def get(self, kind: EntityKind, entity_id: str) -> Any | None:
        return self._tables[kind].get(entity_id)

    def records(self, kind: EntityKind, **where: Any) -> list[Any]:
        with self._lock:
            rows = list(self._tables[kind].values())
        if not where:
            return rows
        return [row for row in rows if all(getattr(row, key) == value for key, value in where.items())]

    # -- Mutation --------------------------------------------------------------

    def insert(self, kind: EntityKind, record: BaseModel) -> Any:
        record_id = record.id  # type: ignore[attr-defined]
        with self._lock:
            table = self._tables[kind]
            if record_id in table:
                raise KeyError(record_id)
            table[record_id] = record
        logger.debug("Store: insert {} {}", kind, record_id)
        return record

    def replace(self, kind: EntityKind, record: BaseModel) -> Any:
        record_id = record.id  # type: ignore[attr-defined]
        with self._lock:
            table = self._tables[kind]
            if record_id not in table:
                raise KeyError(record_id)
            table[record_id] = record
        logger.debug("Store: replace {} {}", kind, record_id)
        return record

    def remove(self, kind: EntityKind, entity_id: str) -> bool:
        with self._lock:
            removed = self._tables[kind].pop(entity_id, None) is not None
        if removed:
            logger.debug("Store: remove {} {}", kind, entity_id)
        return removed

    # -- Ordering --------------------------------------------------------------

    def next_position(self, kind: EntityKind, parent_id: str) -> str:
        parent_field = PARENT_FIELD[kind]
        with self._lock:
            siblings = self.records(kind, **{parent_field: parent_id})
            highest = max((position_rank(s.position) for s in siblings), default=0)
            key = (kind, parent_id)
            rank = max(highest, self._sequences.get(key, 0)) + 1
            self._sequences[key] = rank
        return str(rank)
