"""OpenAI Helper - small synchronous client for the OpenAI HTTP API.

Wraps chat completions with strict structured output, text-to-speech with
local playback, and file uploads. Failures are surfaced through a
notification side channel and operations return None.

Usage:
    >>> from openai_helper import ClientConfig, HelperClient
    >>>
    >>> client = HelperClient(ClientConfig(api_key="sk-..."))
    >>> result = client.strict_structured_request(
    ...     [{"role": "user", "content": "Name a colour."}],
    ...     {"colour": {"type": "string", "description": "A colour name"}},
    ... )
    >>> print(result)
"""

__version__ = "0.1.0"

# Public library API exports
from openai_helper.core.client import HelperClient
from openai_helper.core.config import ClientConfig
from openai_helper.core.logging import setup_logging
from openai_helper.core.messages import build_message
from openai_helper.core.notify import NotificationMethod, Notifier
from openai_helper.core.schema import (
    FieldSpec,
    build_response_format,
    build_strict_schema,
    parse_structured_output,
)
from openai_helper.core.settings import Settings, get_settings

# Export exceptions for library users
from openai_helper.core.exceptions import (
    ApiResponseError,
    ConfigurationError,
    HelperError,
    InvalidResponseError,
    SchemaValidationError,
    UpstreamError,
    UpstreamTimeoutError,
    UpstreamUnreachableError,
)

__all__ = [
    "__version__",
    # Configuration
    "ClientConfig",
    "Settings",
    "get_settings",
    "NotificationMethod",
    "setup_logging",
    # Client
    "HelperClient",
    "Notifier",
    # Schema and messages
    "FieldSpec",
    "build_strict_schema",
    "build_response_format",
    "parse_structured_output",
    "build_message",
    # Exceptions
    "HelperError",
    "ApiResponseError",
    "ConfigurationError",
    "InvalidResponseError",
    "SchemaValidationError",
    "UpstreamError",
    "UpstreamTimeoutError",
    "UpstreamUnreachableError",
]
