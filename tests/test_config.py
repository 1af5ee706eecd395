"""Tests for settings loading."""

from qbittorrent_client.models import ApiLevel
from qbittorrent_client.utils.config import Settings


def test_defaults(monkeypatch):
    """Defaults target a local Web UI over the V2 API."""
    for name in ("QBITTORRENT_URL", "API_LEVEL", "REQUEST_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.qbittorrent_url == "http://localhost:8080"
    assert settings.api_level == ApiLevel.V2
    assert settings.request_timeout == 30.0


def test_environment_overrides(monkeypatch):
    """Settings are read from the environment, case-insensitively."""
    monkeypatch.setenv("QBITTORRENT_URL", "http://nas:8081")
    monkeypatch.setenv("api_level", "legacy")
    monkeypatch.setenv("REQUEST_TIMEOUT", "5")

    settings = Settings(_env_file=None)

    assert settings.qbittorrent_url == "http://nas:8081"
    assert settings.api_level == ApiLevel.LEGACY
    assert settings.request_timeout == 5.0
