"""Logging configuration using loguru.

uvicorn, httpx and anything else using stdlib ``logging`` is routed into
loguru, so the service writes one stream in one format: coloured text for a
terminal, or one JSON object per line when ``REQBOARD_LOG_JSON`` is set.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable

from loguru import logger

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[origin]}</cyan> - "
    "<level>{message}</level>"
)

# Chatty below WARNING; request lines are already covered by router logs.
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def _tag_origin(record: dict) -> None:
    """Fill ``extra.origin``: the stdlib logger name, or module:function:line."""
    record["extra"].setdefault("origin", f"{record['name']}:{record['function']}:{record['line']}")


class _StdlibBridge(logging.Handler):
    """Forward stdlib records to loguru, tagged with their logger name."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.bind(origin=record.name).opt(exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO", *, json: bool = False, quiet: Iterable[str] = QUIET_LOGGERS) -> None:
    """Make loguru the only sink.  Call once per process, at startup."""
    level = level.upper()

    logger.remove()
    logger.configure(patcher=_tag_origin)
    if json:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=TEXT_FORMAT)

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info("Logging initialised (level={}, json={})", level, json)
