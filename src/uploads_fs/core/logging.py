"""Logging configuration."""

import logging
import sys

from uploads_fs.core.config import get_settings

# Third-party loggers that log every request line at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str | None = None) -> None:
    """Configure application logging.

    Args:
        level: Log level name overriding LOG_LEVEL from settings.
    """
    level_name = (level or get_settings().log_level).upper()
    numeric_level = getattr(logging, level_name)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    if numeric_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get logger instance for module."""
    return logging.getLogger(name)
