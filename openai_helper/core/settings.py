"""Configuration management - loads environment variables into typed settings."""

import logging
from functools import lru_cache
from pathlib import Path
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from openai_helper.core.config import DEFAULT_AUDIO_DIR, DEFAULT_LOG_PATH, ClientConfig
from openai_helper.core.notify import NotificationMethod


class Settings(BaseSettings):
    """Helper settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API access
    openai_api_key: str | None = Field(
        default=None,
        validate_default=True,
        description="Bearer token for the API (required)",
    )
    openai_base_url: str = Field(
        default="https://api.openai.com",
        description="Base URL of the API host",
    )
    gpt_model: str = Field(
        default="gpt-4o",
        description="Chat model used for chat and structured requests",
    )

    # Timeout Configuration
    request_timeout_s: float = Field(
        default=300.0,
        description="Total timeout for API requests (seconds)",
    )
    connect_timeout_s: float = Field(
        default=10.0,
        description="Connection timeout for API requests (seconds)",
    )

    # Output locations
    openai_audio_path: Path = Field(
        default=DEFAULT_AUDIO_DIR,
        description="Directory where generated speech files are written",
    )
    openai_log_path: Path = Field(
        default=DEFAULT_LOG_PATH,
        description="Append-only request log file",
    )

    # Local collaborators
    notification_method: NotificationMethod = Field(
        default=NotificationMethod.CONSOLE,
        description="Where failures are surfaced: console, desktop or none",
    )
    audio_player: str = Field(
        default="afplay",
        description="Command used to play generated speech (must be in PATH)",
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )

    @field_validator("openai_api_key")
    @classmethod
    def validate_api_key(cls, v: str | None) -> str:
        """Validate the API key is present."""
        if v is None or not v.strip():
            raise ValueError(
                "OPENAI_API_KEY is required. Please set OPENAI_API_KEY in your environment or .env file."
            )
        return v.strip()

    @field_validator("openai_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"URL must use http or https scheme, got {v}")
        if not parsed.netloc:
            raise ValueError(f"URL must have a valid host, got {v}")
        return v

    @field_validator("request_timeout_s", "connect_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v

    @field_validator("notification_method", mode="before")
    @classmethod
    def normalize_notification_method(cls, v):
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got {v}")
        return v.upper()

    def get_log_level(self) -> int:
        """Convert log level string to logging constant."""
        return getattr(logging, self.log_level, logging.INFO)

    def to_client_config(self) -> ClientConfig:
        """Freeze these settings into a ``ClientConfig``."""
        return ClientConfig(
            api_key=self.openai_api_key,
            model=self.gpt_model,
            base_url=self.openai_base_url,
            audio_dir=self.openai_audio_path.expanduser(),
            log_path=self.openai_log_path.expanduser(),
            notification_method=self.notification_method,
            audio_player=self.audio_player,
            timeout_s=self.request_timeout_s,
            connect_timeout_s=self.connect_timeout_s,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the settings singleton.

    Settings are loaded from environment variables and .env file on first call.
    Subsequent calls return the cached instance.

    Raises:
        ValueError: If required settings are missing or invalid.

    Returns:
        Settings: The validated settings instance.
    """
    try:
        return Settings()
    except Exception as e:
        raise ValueError(
            f"Failed to load configuration: {e}\n"
            "Please check your environment and .env file and ensure OPENAI_API_KEY is set."
        ) from e
