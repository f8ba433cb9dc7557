from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


_CONFIGURED = False

# Loggers owned by the server stack that should share our JSON handler.
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def configure_logging(level: int = logging.INFO) -> None:
    """Route structlog and stdlib records through one JSON handler on stdout.

    Idempotent; later calls only adjust the level.
    """

    global _CONFIGURED
    if _CONFIGURED:
        _set_levels(level)
        return

    pre_chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=pre_chain,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logging.getLogger().handlers = [handler]
    for name in _SERVER_LOGGERS:
        logger = logging.getLogger(name)
        logger.handlers = [handler]
        logger.propagate = False

    _set_levels(level)
    _CONFIGURED = True


def flush_logging() -> None:
    """Flush every root handler; used right before the process is torn down."""

    for handler in logging.getLogger().handlers:
        handler.flush()


def _set_levels(level: int) -> None:
    logging.getLogger().setLevel(level)
    for name in _SERVER_LOGGERS:
        logging.getLogger(name).setLevel(level)
