"""Async client for the board API with a query cache.

Reads go through ``QueryCache`` keyed by resource path.  Every successful
mutation invalidates the affected key prefixes and, by default, refetches the
invalidated entries that already held data, so a caller reading right after a
mutation sees the server's view.  Failed mutations are reported through a
notifier callback (a toast, in a UI) and re-raised as ``BoardClientError``.

No retries and no queueing: concurrent mutations may interleave.  The
refetch after a mutation always sends a new GET; a read sent before the
mutation never overwrites its result.

Usage::

    async with BoardClient("http://localhost:8000") as board:
        workspaces = await board.workspaces()
        groups = await board.groups(board_id)
        await board.create_request(groups[0]["id"], {"name": "Flyer"})
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from typing import Any

import httpx
from loguru import logger

from reqboard.client.cache import QueryCache, QueryKey, QueryState, key_path

WORKSPACES = "/api/workspaces"
BOARDS = "/api/boards"
GROUPS = "/api/groups"
REQUESTS = "/api/requests"
USERS = "/api/users"


class BoardClientError(Exception):
    """A failed API call.

    ``status_code`` is ``None`` when the server could not be reached.
    ``errors`` carries the field-level list of a 400 validation failure.
    """

    def __init__(self, status_code: int | None, detail: str, errors: list[dict] | None = None) -> None:
        super().__init__(f"{status_code}: {detail}" if status_code is not None else detail)
        self.status_code = status_code
        self.detail = detail
        self.errors = errors or []

    @classmethod
    def from_response(cls, response: httpx.Response) -> BoardClientError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        detail = body.get("detail") or response.reason_phrase
        return cls(response.status_code, str(detail), body.get("errors"))


Notifier = Callable[[str, BoardClientError], None]


def log_notifier(title: str, error: BoardClientError) -> None:
    """Default notifier: log the failure."""
    logger.warning("{}: {}", title, error)


class BoardClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        http: httpx.AsyncClient | None = None,
        notify: Notifier = log_notifier,
        refetch: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._notify = notify
        self._refetch = refetch
        self.cache = QueryCache()

    async def __aenter__(self) -> BoardClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    # -- Transport -------------------------------------------------------------

    async def _send(self, method: str, path: str, body: dict[str, Any] | None = None) -> Any:
        try:
            response = await self._http.request(method, path, json=body)
        except httpx.HTTPError as exc:
            raise BoardClientError(None, f"{method} {path} failed: {exc}") from exc
        if response.is_error:
            raise BoardClientError.from_response(response)
        if response.status_code == httpx.codes.NO_CONTENT:
            return None
        return response.json()

    # -- Queries ---------------------------------------------------------------

    async def query(self, key: QueryKey, *, force: bool = False) -> Any:
        """Read ``key`` through the cache."""
        path = key_path(key)
        return await self.cache.fetch(key, lambda: self._send("GET", path), force=force)

    def state(self, key: QueryKey) -> QueryState | None:
        """Pending / error / data state of a cached key, if it was ever queried."""
        return self.cache.get(key)

    async def workspaces(self) -> list[dict]:
        return await self.query((WORKSPACES,))

    async def boards(self, workspace_id: str) -> list[dict]:
        return await self.query((WORKSPACES, workspace_id, "boards"))

    async def board(self, board_id: str) -> dict:
        return await self.query((BOARDS, board_id))

    async def groups(self, board_id: str) -> list[dict]:
        return await self.query((BOARDS, board_id, "groups"))

    async def board_requests(self, board_id: str) -> list[dict]:
        return await self.query((BOARDS, board_id, "requests"))

    async def group_requests(self, group_id: str) -> list[dict]:
        return await self.query((GROUPS, group_id, "requests"))

    async def users(self) -> list[dict]:
        return await self.query((USERS,))

    # -- Mutations -------------------------------------------------------------

    async def _mutate(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None,
        *,
        invalidates: Iterable[QueryKey],
        failure: str,
    ) -> Any:
        try:
            result = await self._send(method, path, body)
        except BoardClientError as exc:
            self._notify(failure, exc)
            raise

        stale: list[QueryKey] = []
        for prefix in invalidates:
            stale.extend(key for key in self.cache.invalidate(prefix) if key not in stale)
        if self._refetch:
            await self._refetch_keys(stale)
        return result

    async def _refetch_keys(self, keys: list[QueryKey]) -> None:
        active = [key for key in keys if (state := self.cache.get(key)) is not None and state.has_data]
        results = await asyncio.gather(*(self.query(key, force=True) for key in active), return_exceptions=True)
        for key, result in zip(active, results, strict=True):
            if isinstance(result, Exception):
                # The entry keeps its error state; the next read retries.
                logger.warning("Refetch of {} failed: {}", key_path(key), result)

    async def create_workspace(self, fields: dict[str, Any]) -> dict:
        return await self._mutate(
            "POST", WORKSPACES, fields, invalidates=[(WORKSPACES,)], failure="Failed to create workspace"
        )

    async def create_board(self, workspace_id: str, fields: dict[str, Any]) -> dict:
        return await self._mutate(
            "POST",
            f"{WORKSPACES}/{workspace_id}/boards",
            fields,
            invalidates=[(WORKSPACES, workspace_id)],
            failure="Failed to create board",
        )

    async def create_group(self, board_id: str, fields: dict[str, Any]) -> dict:
        return await self._mutate(
            "POST",
            f"{BOARDS}/{board_id}/groups",
            fields,
            invalidates=[(BOARDS,)],
            failure="Failed to create group",
        )

    async def update_group(self, group_id: str, changes: dict[str, Any]) -> dict:
        return await self._mutate(
            "PATCH",
            f"{GROUPS}/{group_id}",
            changes,
            invalidates=[(BOARDS,), (GROUPS, group_id)],
            failure="Failed to update group",
        )

    async def create_request(self, group_id: str, fields: dict[str, Any]) -> dict:
        return await self._mutate(
            "POST",
            f"{GROUPS}/{group_id}/requests",
            fields,
            invalidates=[(BOARDS,), (GROUPS, group_id)],
            failure="Failed to create request",
        )

    async def update_request(self, request_id: str, changes: dict[str, Any]) -> dict:
        # A groupId change touches two groups; drop every group-scoped key.
        return await self._mutate(
            "PATCH",
            f"{REQUESTS}/{request_id}",
            changes,
            invalidates=[(BOARDS,), (GROUPS,)],
            failure="Failed to update request",
        )

    async def delete_request(self, request_id: str) -> None:
        await self._mutate(
            "DELETE",
            f"{REQUESTS}/{request_id}",
            None,
            invalidates=[(BOARDS,), (GROUPS,)],
            failure="Failed to delete request",
        )

    async def create_user(self, fields: dict[str, Any]) -> dict:
        return await self._mutate("POST", USERS, fields, invalidates=[(USERS,)], failure="Failed to create user")
