"""Query cache for the board client.

Entries are keyed by resource path tuples, mirroring the REST layout::

    ("/api/boards", board_id, "groups")

Joining a key with ``/`` yields the URL it caches.  Invalidation works on key
prefixes: invalidating ``("/api/boards",)`` marks every board-scoped entry
stale, so the next ``fetch`` goes back to the network.

Concurrent fetches of one key share a single in-flight request, as long as
no invalidation happened since it was sent.  A fetch after an invalidation
sends a new request, and only the newest request per key writes the entry;
an older response still reaches the callers that awaited it.  A request
invalidated while in flight with no newer one behind it stores its data but
leaves the entry stale.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from loguru import logger

QueryKey = tuple[str, ...]
Fetcher = Callable[[], Awaitable[Any]]


class QueryStatus(StrEnum):
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class QueryState:
    """Cached state for one key.

    ``status`` reflects the last completed fetch; it stays ``pending`` until
    the first one finishes.  ``fetching`` is true while a request is in
    flight, including background refetches of data already shown.
    """

    key: QueryKey
    status: QueryStatus = QueryStatus.PENDING
    data: Any = None
    error: BaseException | None = None
    updated_at: float | None = None
    stale: bool = False
    fetching: bool = False
    generation: int = 0

    @property
    def has_data(self) -> bool:
        return self.updated_at is not None


def key_path(key: QueryKey) -> str:
    return "/".join(key)


def _has_prefix(key: QueryKey, prefix: QueryKey) -> bool:
    return key[: len(prefix)] == prefix


class QueryCache:
    def __init__(self) -> None:
        self._entries: dict[QueryKey, QueryState] = {}
        self._inflight: dict[QueryKey, tuple[asyncio.Task[Any], int]] = {}

    def get(self, key: QueryKey) -> QueryState | None:
        return self._entries.get(key)

    def keys(self) -> list[QueryKey]:
        return list(self._entries)

    async def fetch(self, key: QueryKey, fetcher: Fetcher, *, force: bool = False) -> Any:
        """Return fresh cached data for ``key`` or fetch it.

        ``force`` skips the cache.  A fetch already in flight is joined only
        if no invalidation happened since it started; otherwise a new one is
        sent and the older response is handed to its own callers without
        touching the entry.
        Fetch errors are recorded on the entry and re-raised.
        """
        entry = self._entries.get(key)
        if not force and entry is not None and entry.status is QueryStatus.SUCCESS and not entry.stale:
            return entry.data

        entry = self._entries.setdefault(key, QueryState(key=key))
        running = self._inflight.get(key)
        if running is not None and running[1] == entry.generation:
            task = running[0]
        else:
            # Nothing in flight, or the running fetch predates an invalidation.
            entry.fetching = True
            task = asyncio.ensure_future(self._run(entry, fetcher, entry.generation))
            self._inflight[key] = (task, entry.generation)
        return await asyncio.shield(task)

    def _owns(self, key: QueryKey) -> bool:
        running = self._inflight.get(key)
        return running is not None and running[0] is asyncio.current_task()

    async def _run(self, entry: QueryState, fetcher: Fetcher, started: int) -> Any:
        try:
            data = await fetcher()
        except Exception as exc:
            if self._owns(entry.key):
                entry.status = QueryStatus.ERROR
                entry.error = exc
                entry.fetching = False
                del self._inflight[entry.key]
            raise
        if not self._owns(entry.key):
            # Superseded or cleared; callers get the data, the cache does not.
            logger.debug("Cache: dropped superseded response for {}", key_path(entry.key))
            return data
        entry.status = QueryStatus.SUCCESS
        entry.data = data
        entry.error = None
        entry.updated_at = time.monotonic()
        entry.stale = entry.generation != started
        entry.fetching = False
        del self._inflight[entry.key]
        return data

    def set(self, key: QueryKey, data: Any) -> None:
        """Store data directly, e.g. the body returned by a mutation."""
        entry = self._entries.setdefault(key, QueryState(key=key))
        entry.status = QueryStatus.SUCCESS
        entry.data = data
        entry.error = None
        entry.updated_at = time.monotonic()
        entry.stale = False

    def invalidate(self, prefix: QueryKey) -> list[QueryKey]:
        """Mark every entry under ``prefix`` stale.  Returns the affected keys."""
        matched = [key for key in self._entries if _has_prefix(key, prefix)]
        for key in matched:
            entry = self._entries[key]
            entry.stale = True
            entry.generation += 1
        if matched:
            logger.debug("Cache: invalidated {} keys under {}", len(matched), key_path(prefix))
        return matched

    def clear(self) -> None:
        """Drop every entry.  Fetches still in flight no longer write back."""
        self._entries.clear()
        self._inflight.clear()
