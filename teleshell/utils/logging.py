"""Loguru setup for the gateway process.

python-telegram-bot and httpx log through the standard :mod:`logging` module;
their records are forwarded to loguru and tagged with the emitting logger's
name as ``component``.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

LOG_FORMAT = (
    "<green>[{time:DD MMM YY HH:mm zz}]</green> "
    "<level>[{level: <5}]</level> "
    "<cyan>{extra[component]}</cyan> {message}"
)

# Standard-library loggers used by the transport stack.
LIBRARY_LOGGERS = ("telegram", "httpx")


class InterceptHandler(logging.Handler):
    """Forward standard logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find the caller outside the logging module so loguru reports it.
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(component=record.name).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(debug: bool = False) -> None:
    """Replace loguru's default sink and route library logging into it."""
    level = "DEBUG" if debug else "INFO"
    logger.remove()
    logger.configure(extra={"component": "teleshell"})
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, colorize=True)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)
