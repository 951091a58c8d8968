"""
Logging setup for processes embedding photostore.

Modules log through ``logging.getLogger(__name__)``; this only configures the
root handler once.
"""

import logging
import sys

from photostore.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_handler: logging.Handler | None = None


def setup_logging(log_level: str | None = None) -> logging.Logger:
    """
    Configure the root logger and return the package logger.

    Args:
        log_level: Level name; defaults to ``Settings.log_level``
    """
    global _handler

    if log_level is None:
        log_level = get_settings().log_level

    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(_handler)

    # SQL echo is handled by the engine; keep the sqlalchemy loggers quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return logging.getLogger("photostore")
