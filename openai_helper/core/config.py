"""Simple configuration for core library usage."""

from dataclasses import dataclass, field
from pathlib import Path

from openai_helper.core.notify import NotificationMethod

DEFAULT_AUDIO_DIR = Path.home() / "Local Resources" / "API Logs" / "OpenAI Whisper"
DEFAULT_LOG_PATH = Path.home() / "Local Resources" / "API Logs" / "openai_requests.log"


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for a ``HelperClient``.

    This is the explicit, read-only form of the settings; build it directly
    for library usage or via ``Settings.to_client_config()`` from the
    environment.

    Args:
        api_key: Bearer token sent with every request
        model: Chat model used for chat and structured requests
        tts_model: Text-to-speech model
        voice: Text-to-speech voice
        base_url: Base URL of the API host
        audio_dir: Directory where generated speech is written
        log_path: Append-only request log file (None disables it)
        notification_method: Where failures are surfaced
        audio_player: Command used to play generated speech
        notify_command: Command used for desktop notifications
        timeout_s: Total timeout for API requests in seconds
        connect_timeout_s: Connection timeout for API requests in seconds
        file_purpose: Purpose sent with uploaded files
        schema_name: Name given to constructed structured-output schemas
    """

    api_key: str | None
    model: str = "gpt-4o"
    tts_model: str = "tts-1-hd"
    voice: str = "alloy"
    base_url: str = "https://api.openai.com"
    audio_dir: Path = field(default_factory=lambda: DEFAULT_AUDIO_DIR)
    log_path: Path | None = None
    notification_method: NotificationMethod = NotificationMethod.CONSOLE
    audio_player: str = "afplay"
    notify_command: str = "osascript"
    timeout_s: float = 300.0
    connect_timeout_s: float = 10.0
    file_purpose: str = "assistants"
    schema_name: str = "structured_output"

    def endpoint(self, path: str) -> str:
        """Join an API path onto the base URL."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
