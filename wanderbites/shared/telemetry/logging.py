"""Logging configuration for the application."""

import logging
import sys

from wanderbites.core.config import get_settings
from wanderbites.shared.context import RequestContextLogFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout; each line carries the request ID ("-" outside
    a request). httpx request lines are kept at WARNING so the Cosmic read
    key (a query parameter) never reaches the logs.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextLogFilter())
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[handler],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

