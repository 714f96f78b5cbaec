"""Custom exceptions for the OpenAI helper core library.

These never leave ``HelperClient`` operations: they are caught at the call
site and routed to the notifier. Only ``ConfigurationError`` reaches callers,
from the client constructor.
"""


class HelperError(Exception):
    """Base exception for all helper errors."""

    title = "OpenAI Helper Error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(HelperError):
    """Raised when required configuration is missing or invalid."""

    title = "Configuration Error"


class UpstreamError(HelperError):
    """Base class for transport-level errors."""

    title = "API Request Failed"

    def __init__(self, message: str, upstream: str | None = None):
        self.upstream = upstream
        super().__init__(message)


class UpstreamUnreachableError(UpstreamError):
    """Raised when the API host is unreachable."""

    pass


class UpstreamTimeoutError(UpstreamError):
    """Raised when a request to the API times out."""

    pass


class ApiResponseError(HelperError):
    """Raised when the API reports an error payload or an error status."""

    title = "API Error"

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class InvalidResponseError(HelperError):
    """Raised when the API response body is not what was expected."""

    title = "Invalid Response"


class SchemaValidationError(HelperError):
    """Raised when structured output does not decode to a JSON object."""

    title = "Schema Validation Failed"
