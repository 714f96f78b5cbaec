"""High-level client API for the OpenAI helper library."""

import json
import logging
import subprocess
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import httpx

from openai_helper.core.audio import play_audio
from openai_helper.core.config import ClientConfig
from openai_helper.core.exceptions import (
    ApiResponseError,
    ConfigurationError,
    HelperError,
    InvalidResponseError,
)
from openai_helper.core.logging import generate_request_id, request_id_var, setup_request_log
from openai_helper.core.messages import build_messages
from openai_helper.core.notify import Notifier
from openai_helper.core.schema import FieldSpec, build_response_format, parse_structured_output
from openai_helper.core.transport import post_json, post_multipart

logger = logging.getLogger(__name__)

SPEECH_PATH = "/v1/audio/speech"
CHAT_PATH = "/v1/chat/completions"
FILES_PATH = "/v1/files"

Messages = list[Mapping[str, Any]]
Fields = Mapping[Any, FieldSpec | Mapping[str, Any]]


def _error_message(response: httpx.Response) -> str:
    """Pull ``error.message`` out of an error response, or describe the status."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = body["error"].get("message")
        if message:
            return message
    return f"HTTP {response.status_code} from API"


def _check_status(response: httpx.Response) -> None:
    if response.status_code >= 400:
        raise ApiResponseError(_error_message(response), status_code=response.status_code)


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, ValueError) as e:
        logger.error(f"Failed to parse API response: {e}")
        raise InvalidResponseError("API returned invalid JSON") from e


class HelperClient:
    """Synchronous client for chat, structured output, speech and file uploads.

    Every operation is one blocking request. Failures are reported once
    through the configured notifier and the operation returns None.

    Raises:
        ConfigurationError: From the constructor if no API key is configured
    """

    def __init__(self, config: ClientConfig, notifier: Notifier | None = None):
        if not config.api_key:
            raise ConfigurationError(
                "No API key configured. Please set OPENAI_API_KEY or pass api_key in your ClientConfig."
            )
        self.config = config
        self.notifier = notifier or Notifier(config.notification_method, config.notify_command)
        setup_request_log(config.log_path)

    @classmethod
    def from_env(cls) -> "HelperClient":
        """Build a client from environment settings."""
        from openai_helper.core.settings import get_settings

        return cls(get_settings().to_client_config())

    def _fail(self, error: HelperError) -> None:
        self.notifier.notify_error(error.title, error.message)

    def _begin_call(self) -> None:
        request_id_var.set(generate_request_id())

    def generate_speech(
        self,
        text: str,
        output_file_name: str = "output.mp3",
        autoplay: bool = True,
    ) -> Path | None:
        """Synthesize speech, save it under the audio directory and optionally play it.

        Returns:
            Path of the written audio file, or None on failure.
        """
        self._begin_call()
        request_body = {
            "model": self.config.tts_model,
            "voice": self.config.voice,
            "input": text,
        }

        try:
            response = post_json(SPEECH_PATH, request_body, self.config)
            _check_status(response)
        except HelperError as e:
            self._fail(e)
            return None

        output_path = Path(self.config.audio_dir) / output_file_name
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(response.content)
        except OSError as e:
            self.notifier.notify_error("Text-to-Speech Error", f"Could not write {output_path}: {e}")
            return None

        logger.info("Audio saved to %s", output_path)

        if autoplay:
            self.play_audio(output_path)
        return output_path

    def play_audio(self, path: Path) -> bool:
        """Play an audio file with the configured player; False if playback failed."""
        try:
            play_audio(Path(path), self.config.audio_player)
        except (OSError, subprocess.CalledProcessError) as e:
            self.notifier.notify_error("Audio Playback Error", f"{self.config.audio_player}: {e}")
            return False
        return True

    def chat_completion(self, messages: Messages, **openai_params: Any) -> dict[str, Any] | None:
        """Send a chat completion request and return the decoded response.

        API-reported errors are returned as-is so extraction can report them.
        """
        self._begin_call()
        request_body: dict[str, Any] = {
            "model": self.config.model,
            "messages": list(messages),
            **openai_params,
        }

        try:
            response = post_json(CHAT_PATH, request_body, self.config)
            body = _decode_json(response)
        except HelperError as e:
            self._fail(e)
            return None

        if not isinstance(body, dict):
            self._fail(InvalidResponseError("API response is not a JSON object"))
            return None
        return body

    def extract_structured_output(self, response: Any) -> dict[str, Any] | None:
        """Return the structured output object from a chat response, or None."""
        try:
            return parse_structured_output(response)
        except HelperError as e:
            self._fail(e)
            return None

    def strict_structured_request(self, messages: Messages, fields: Fields) -> dict[str, Any] | None:
        """
        Ask the chat model for output that matches a strict schema.

        Args:
            messages: Messages; ``image_files`` and ``text_files`` are inlined
            fields: Mapping of output field name to ``{"type", "description"}``

        Returns:
            The decoded structured output, or None on any failure
        """
        try:
            response_format = build_response_format(fields, self.config.schema_name)
            outgoing = build_messages(messages)
        except (OSError, UnicodeDecodeError) as e:
            self.notifier.notify_error("File Read Error", str(e))
            return None

        response = self.chat_completion(outgoing, response_format=response_format)
        if response is None:
            return None
        return self.extract_structured_output(response)

    def upload_file(self, file_path: str | Path, purpose: str | None = None) -> str | None:
        """Upload a local file and return the identifier the API assigned to it."""
        self._begin_call()
        file_path = Path(file_path)
        data = {"purpose": purpose or self.config.file_purpose}

        try:
            with file_path.open("rb") as fh:
                response = post_multipart(FILES_PATH, data, {"file": (file_path.name, fh)}, self.config)
            body = _decode_json(response)
            if isinstance(body, dict) and body.get("error"):
                error = body["error"]
                message = error.get("message") if isinstance(error, dict) else str(error)
                raise ApiResponseError(message or "Unknown API error", status_code=response.status_code)
            _check_status(response)
            try:
                file_id = body["id"]
            except (KeyError, TypeError) as e:
                raise InvalidResponseError("Upload response has no file id") from e
        except OSError as e:
            self.notifier.notify_error("File Upload Error", str(e))
            return None
        except HelperError as e:
            self._fail(e)
            return None

        logger.info("Uploaded %s as %s", file_path, file_id)
        return file_id

    def send_message_with_file(
        self,
        messages: Messages,
        file_id: str,
        **openai_params: Any,
    ) -> dict[str, Any] | None:
        """Send a chat request that references a previously uploaded file.

        An error payload from the API is reported and yields None.
        """
        response = self.chat_completion(messages, file_ids=[file_id], **openai_params)
        if response is None:
            return None

        error = response.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            self._fail(ApiResponseError(message or "Unknown API error"))
            return None
        return response

    def perform_request(
        self,
        messages: Messages,
        fields: Fields,
        file_path: str | Path | None = None,
    ) -> dict[str, Any] | None:
        """Run a structured request, attaching an uploaded file when one is given."""
        if file_path is None:
            return self.strict_structured_request(messages, fields)

        try:
            response_format = build_response_format(fields, self.config.schema_name)
            outgoing = build_messages(messages)
        except (OSError, UnicodeDecodeError) as e:
            self.notifier.notify_error("File Read Error", str(e))
            return None

        file_id = self.upload_file(file_path)
        if file_id is None:
            return None

        response = self.send_message_with_file(outgoing, file_id, response_format=response_format)
        if response is None:
            return None
        return self.extract_structured_output(response)
