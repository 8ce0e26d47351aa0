"""FastAPI dependency injection for the entity store.

Usage in route handlers::

    @router.get("/things")
    async def list_things(store: Store) -> list[Thing]:
        ...

The store instance is owned by the application (``app.state.store``), created
in the lifespan and replaced wholesale by tests.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from reqboard.server.store.base import EntityStore


def get_store(request: Request) -> EntityStore:
    """Return the application's entity store."""
    store: EntityStore | None = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Entity store not initialised.",
        )
    return store


Store = Annotated[EntityStore, Depends(get_store)]
"""Annotated dependency: the shared entity store."""
