"""Service configuration loaded from REQBOARD_* environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class BoardSettings(BaseSettings):
    """Board service settings.

    All fields are read from environment variables with the ``REQBOARD_``
    prefix.  For example, ``REQBOARD_LOG_LEVEL=DEBUG`` maps to ``log_level``.
    """

    model_config = SettingsConfigDict(
        env_prefix="REQBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"
    log_json: bool = False
    """Emit one JSON object per log line instead of the coloured format."""

    # -- Data ------------------------------------------------------------------
    seed_demo_data: bool = True
    """Populate the in-memory store with a demo workspace at startup."""

    # -- Server ----------------------------------------------------------------
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> BoardSettings:
    """Return a cached settings instance.

    Call ``get_settings.cache_clear()`` in tests to force a re-read after
    overriding env vars.
    """
    return BoardSettings()
