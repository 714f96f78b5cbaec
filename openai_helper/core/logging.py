"""Logging setup with call ID support and the append-only request log."""

import logging
import sys
import uuid
from contextvars import ContextVar
from pathlib import Path

# Context variable to hold the current call ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

REQUEST_LOGGER_NAME = "openai_helper.requests"

logger = logging.getLogger(__name__)


class RequestIDFilter(logging.Filter):
    """Inject request_id from contextvars into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("-")  # type: ignore[attr-defined]
        return True


def generate_request_id() -> str:
    """Generate a short unique request ID."""
    return uuid.uuid4().hex[:12]


def setup_logging(level: str = "INFO") -> None:
    """Configure console logging for the application.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    fmt = "%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s - %(message)s"

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    handler.addFilter(RequestIDFilter())

    root = logging.getLogger()
    root.setLevel(numeric_level)
    # Remove existing handlers to avoid duplicates on reload
    root.handlers.clear()
    root.addHandler(handler)

    # Quiet down noisy libraries
    logging.getLogger("httpx").setLevel(max(numeric_level, logging.WARNING))
    logging.getLogger("httpcore").setLevel(max(numeric_level, logging.WARNING))


def setup_request_log(log_path: Path | None) -> logging.Logger:
    """Attach the append-only request log file to the request logger.

    Each entry is one timestamped plaintext line. Passing None detaches any
    previous file so request entries go nowhere. A path that cannot be opened
    is logged as a warning and treated like None.
    """
    request_logger = logging.getLogger(REQUEST_LOGGER_NAME)
    request_logger.setLevel(logging.INFO)
    request_logger.propagate = False

    for handler in list(request_logger.handlers):
        request_logger.removeHandler(handler)
        handler.close()

    if log_path is None:
        request_logger.addHandler(logging.NullHandler())
        return request_logger

    log_path = Path(log_path)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    except OSError as e:
        logger.warning("Request log disabled, cannot open %s: %s", log_path, e)
        request_logger.addHandler(logging.NullHandler())
        return request_logger

    handler.setFormatter(logging.Formatter("%(asctime)s [%(request_id)s] %(message)s"))
    handler.addFilter(RequestIDFilter())
    request_logger.addHandler(handler)
    return request_logger
