"""Shared test fixtures.

Every test gets a fresh, empty ``MemoryStore``; nothing is shared between
tests.  Settings are re-read from the environment for each test.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from reqboard.server.settings import get_settings
from reqboard.server.store.memory import MemoryStore


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()
