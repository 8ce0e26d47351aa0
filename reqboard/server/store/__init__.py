"""Entity store implementations."""

from reqboard.server.store.base import EntityStore
from reqboard.server.store.memory import MemoryStore

__all__ = ["EntityStore", "MemoryStore"]
