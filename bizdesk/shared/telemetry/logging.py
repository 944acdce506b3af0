"""Logging configuration for the application."""

import logging
import sys

from bizdesk.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"


class RequestIDFilter(logging.Filter):
    """Attach the current request ID (or "-") to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        from bizdesk.middleware.request_id import request_id_var

        record.request_id = request_id_var.get()
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout. Safe to call more than once.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDFilter())
    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=[handler])
    # httpx logs every request at INFO; keep it for debug runs only.
    logging.getLogger("httpx").setLevel(log_level if settings.debug else logging.WARNING)
