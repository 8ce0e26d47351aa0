"""Settings loading and the ``reqboard`` command line."""

from __future__ import annotations

import os

import pytest
from click.testing import CliRunner

from reqboard.cli import main
from reqboard.server.settings import BoardSettings, get_settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("REQBOARD_"):
            monkeypatch.delenv(key)
    settings = BoardSettings(_env_file=None)

    assert settings.log_level == "INFO"
    assert settings.log_json is False
    assert settings.seed_demo_data is True
    assert settings.port == 8000


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REQBOARD_PORT", "9100")
    monkeypatch.setenv("REQBOARD_SEED_DEMO_DATA", "false")
    monkeypatch.setenv("REQBOARD_LOG_JSON", "1")

    settings = get_settings()
    assert settings.port == 9100
    assert settings.seed_demo_data is False
    assert settings.log_json is True
    assert get_settings() is settings


def test_serve_invokes_uvicorn(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr("uvicorn.run", lambda app, **kwargs: calls.append({"app": app, **kwargs}))
    # Registered so teardown removes the value the command writes.
    monkeypatch.setenv("REQBOARD_SEED_DEMO_DATA", "true")

    result = CliRunner().invoke(main, ["serve", "--port", "9001", "--no-seed"])

    assert result.exit_code == 0, result.output
    assert calls == [
        {"app": "reqboard.server.app:app", "host": "0.0.0.0", "port": 9001, "reload": False, "log_level": "warning"}
    ]
    assert os.environ["REQBOARD_SEED_DEMO_DATA"] == "false"
    assert get_settings().seed_demo_data is False
