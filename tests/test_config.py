"""Tests for settings and relay config loading."""

import pytest
from pydantic import ValidationError

from relay.config import Settings
from relay.models.config import RelayConfig
from relay.router import load_relay_config

RELAY_YAML = """
auth_secret: "sh!"
allowed_origins:
  - cause-for-hope.raisely.com
campaigns:
  830a1280-6e17-11ea-858b-f7d7d2f43749: test-token
"""


def test_load_relay_config(tmp_path):
    path = tmp_path / "relay.yaml"
    path.write_text(RELAY_YAML, encoding="utf-8")

    config = load_relay_config(path)

    assert config.auth_secret == "sh!"
    assert config.allowed_origins == ["cause-for-hope.raisely.com"]
    assert config.token_for("830a1280-6e17-11ea-858b-f7d7d2f43749") == "test-token"
    assert config.token_for("unknown") is None
    assert config.streamlabs_url == "https://streamlabs.com"


def test_load_missing_relay_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_relay_config(tmp_path / "missing.yaml")


def test_empty_relay_config_is_invalid(tmp_path):
    path = tmp_path / "relay.yaml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_relay_config(path)


def test_allowed_origins_must_not_be_empty():
    with pytest.raises(ValidationError):
        RelayConfig(auth_secret="sh!", allowed_origins=[])


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("RELAY_CONFIG", "/etc/relay/relay.yaml")
    monkeypatch.setenv("RELAY_PORT", "8080")

    settings = Settings(_env_file=None)

    assert str(settings.config_path) == "/etc/relay/relay.yaml"
    assert settings.port == 8080
    assert settings.log_level == "INFO"


@pytest.mark.parametrize("value,expected", [("debug", "DEBUG"), (" Warning ", "WARNING"), ("INFO", "INFO")])
def test_log_level_is_normalised(monkeypatch, value, expected):
    monkeypatch.setenv("RELAY_LOG_LEVEL", value)
    assert Settings(_env_file=None).log_level == expected


def test_unknown_log_level_is_rejected(monkeypatch):
    monkeypatch.setenv("RELAY_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
