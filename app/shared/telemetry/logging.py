"""Logging configuration for the application."""

import logging
import sys
from contextvars import ContextVar

from app.core.config import get_settings

# Third-party loggers that log every store request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "google.auth")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"

# Set by RequestIDMiddleware for the duration of each HTTP request.
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


class RequestIDLogFilter(logging.Filter):
    """Set record.request_id from the current request ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout with the request ID on every line. HTTP client
    loggers are raised to WARNING unless debugging, so each Firestore call
    does not produce a log line.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())
    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=[handler])
    if not settings.debug:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
