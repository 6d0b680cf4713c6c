import logging

import pytest

from spotify_oauth.core import config as config_mod


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep each test away from real settings files and SPOTIFY_* variables."""
    monkeypatch.chdir(tmp_path)
    for key in ("SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET", "SPOTIFY_REDIRECT_URI", "SPOTIFY_RESPONSE_TYPE"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config_mod, "USER_SETTINGS_FILE", tmp_path / "user" / "settings.toml")
    monkeypatch.setattr(config_mod, "USER_SECRETS_FILE", tmp_path / "user" / ".secrets.toml")
    config_mod.reset_settings()

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    config_mod.reset_settings()


@pytest.fixture
def spotify_env(monkeypatch):
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "abc123")
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "s3cr3t")
    monkeypatch.setenv("SPOTIFY_REDIRECT_URI", "http://localhost:8888/callback")
