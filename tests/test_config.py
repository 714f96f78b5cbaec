"""Tests for configuration management."""

import dataclasses
from pathlib import Path

import pytest

from openai_helper.core.config import ClientConfig
from openai_helper.core.notify import NotificationMethod
from openai_helper.core.settings import Settings, get_settings

ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "GPT_MODEL",
    "OPENAI_AUDIO_PATH",
    "OPENAI_LOG_PATH",
    "NOTIFICATION_METHOD",
    "AUDIO_PLAYER",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the developer's environment and the settings cache."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_loads_from_env(monkeypatch, tmp_path):
    """Test that settings can be loaded from environment variables."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-live")
    monkeypatch.setenv("GPT_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("OPENAI_AUDIO_PATH", str(tmp_path / "audio"))
    monkeypatch.setenv("OPENAI_LOG_PATH", str(tmp_path / "requests.log"))
    monkeypatch.setenv("NOTIFICATION_METHOD", "Desktop")

    settings = Settings(_env_file=None)
    assert settings.openai_api_key == "sk-live"
    assert settings.gpt_model == "gpt-4o-mini"
    assert settings.openai_audio_path == tmp_path / "audio"
    assert settings.openai_log_path == tmp_path / "requests.log"
    assert settings.notification_method is NotificationMethod.DESKTOP


def test_settings_loads_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("OPENAI_API_KEY=sk-from-file\nLOG_LEVEL=debug\n")

    settings = Settings(_env_file=env_file)
    assert settings.openai_api_key == "sk-from-file"
    assert settings.log_level == "DEBUG"


def test_settings_requires_api_key():
    """A missing API key fails validation."""
    with pytest.raises(ValueError, match="OPENAI_API_KEY is required"):
        Settings(_env_file=None)

    with pytest.raises(ValueError, match="OPENAI_API_KEY is required"):
        Settings(_env_file=None, openai_api_key="   ")


def test_get_settings_wraps_errors(monkeypatch):
    monkeypatch.chdir(Path(__file__).parent)
    with pytest.raises(ValueError, match="Failed to load configuration"):
        get_settings()


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-cached")
    assert get_settings() is get_settings()


def test_settings_validates_base_url():
    with pytest.raises(ValueError, match="http or https"):
        Settings(_env_file=None, openai_api_key="sk", openai_base_url="ftp://api.openai.com")


def test_settings_validates_timeout():
    with pytest.raises(ValueError, match="Timeout must be positive"):
        Settings(_env_file=None, openai_api_key="sk", request_timeout_s=0)


def test_settings_validates_log_level():
    with pytest.raises(ValueError, match="log_level must be one of"):
        Settings(_env_file=None, openai_api_key="sk", log_level="LOUD")


def test_settings_rejects_unknown_notification_method():
    with pytest.raises(ValueError):
        Settings(_env_file=None, openai_api_key="sk", notification_method="pager")


def test_to_client_config(tmp_path):
    settings = Settings(
        _env_file=None,
        openai_api_key="sk",
        gpt_model="gpt-4.1",
        openai_audio_path=tmp_path / "audio",
        openai_log_path=tmp_path / "req.log",
        notification_method="none",
        audio_player="mpg123 -q",
        request_timeout_s=60,
    )
    config = settings.to_client_config()

    assert config.api_key == "sk"
    assert config.model == "gpt-4.1"
    assert config.audio_dir == tmp_path / "audio"
    assert config.log_path == tmp_path / "req.log"
    assert config.notification_method is NotificationMethod.NONE
    assert config.audio_player == "mpg123 -q"
    assert config.timeout_s == 60
    assert settings.get_log_level() == 20


def test_client_config_defaults():
    config = ClientConfig(api_key="sk")
    assert config.model == "gpt-4o"
    assert config.tts_model == "tts-1-hd"
    assert config.voice == "alloy"
    assert config.notification_method is NotificationMethod.CONSOLE
    assert config.log_path is None


def test_client_config_is_read_only():
    config = ClientConfig(api_key="sk")
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.model = "other"


@pytest.mark.parametrize(
    "base_url",
    ["https://api.openai.com", "https://api.openai.com/"],
)
def test_endpoint_joins_paths(base_url):
    config = ClientConfig(api_key="sk", base_url=base_url)
    assert config.endpoint("/v1/files") == "https://api.openai.com/v1/files"
