"""Workspace operations: create, list, get."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from loguru import logger

from reqboard.server.models.api import WorkspaceCreate
from reqboard.server.models.entities import Workspace
from reqboard.server.models.enums import EntityKind
from reqboard.server.store.base import EntityStore


class WorkspaceNotFoundError(LookupError):
    """Raised when a workspace is not found."""


def list_workspaces(store: EntityStore) -> list[Workspace]:
    """List all workspaces in creation order."""
    return store.records(EntityKind.WORKSPACE)


def get_workspace(store: EntityStore, workspace_id: str) -> Workspace:
    """Get a workspace by ID.  Raises ``WorkspaceNotFoundError`` if missing."""
    workspace = store.get(EntityKind.WORKSPACE, workspace_id)
    if workspace is None:
        raise WorkspaceNotFoundError(workspace_id)
    return workspace


def create_workspace(store: EntityStore, body: WorkspaceCreate) -> Workspace:
    workspace = Workspace(
        id=str(uuid.uuid4()),
        created_at=datetime.now(UTC),
        **body.model_dump(),
    )
    store.insert(EntityKind.WORKSPACE, workspace)
    logger.info("Workspace created: {} ({!r})", workspace.id, workspace.name)
    return workspace
