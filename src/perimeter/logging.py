# src/perimeter/logging.py
"""
Logging helpers for Perimeter.

The library only ever logs through the ``perimeter`` logger hierarchy and never
touches the root logger. Applications opt into output with configure_logging().
"""

from __future__ import annotations

import logging
from typing import Optional, Union

ROOT_LOGGER_NAME = "perimeter"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``perimeter`` namespace."""
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def log_exception(logger: logging.Logger, message: str, exc: BaseException) -> None:
    """
    Log a handled exception.

    The one-line summary goes out at WARNING; the traceback only at DEBUG so
    normal runs stay quiet.
    """
    logger.warning("%s: %s", message, exc)
    logger.debug("%s (traceback)", message, exc_info=exc)


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Attach a stream handler to the ``perimeter`` logger.

    Args:
        level: Logging level name or number. Defaults to the configured
            ``log_level`` setting (PERIMETER_LOG_LEVEL).

    Returns:
        The package logger.
    """
    if level is None:
        from perimeter.config.settings import load_settings

        level = load_settings().log_level

    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    has_stream = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.NullHandler)
        for h in logger.handlers
    )
    if not has_stream:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)

    return logger
