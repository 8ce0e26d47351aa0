"""Entity store interface.

The store is a dumb keyed container: one table per ``EntityKind``, records
are the pydantic entity models.  Ordering, reference checks and error
reporting belong to the access layer (``reqboard.server.managers``).
Lookups report absence with ``None`` / ``False``; ``insert`` and ``replace``
raise ``KeyError`` on an id collision or a missing record.

Multi-step sequences (read sibling ranks, then insert) must run inside
``transaction()`` to be atomic with respect to other callers.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from reqboard.server.models.enums import EntityKind


@runtime_checkable
class EntityStore(Protocol):
    """Protocol for the keyed entity tables backing the board service."""

    def transaction(self) -> AbstractContextManager[None]:
        """Hold the store lock for the duration of the block (re-entrant)."""
        ...

    def get(self, kind: EntityKind, entity_id: str) -> Any | None:
        """Return the record or ``None`` if absent."""
        ...

    def records(self, kind: EntityKind, **where: Any) -> list[Any]:
        """Return records in insertion order, filtered by attribute equality."""
        ...

    def insert(self, kind: EntityKind, record: BaseModel) -> Any:
        """Add a new record.  Raises ``KeyError`` if the id is taken."""
        ...

    def replace(self, kind: EntityKind, record: BaseModel) -> Any:
        """Overwrite an existing record in place, keeping its insertion slot."""
        ...

    def remove(self, kind: EntityKind, entity_id: str) -> bool:
        """Delete a record.  Returns whether anything was removed."""
        ...

    def next_position(self, kind: EntityKind, parent_id: str) -> str:
        """Reserve the next rank among the children of ``parent_id``."""
        ...
