"""The one place allowed to kill the process.

Only the chaos crash handler calls :func:`abort_process`. The default capability is
``os.abort()``: SIGABRT, no cleanup, no exception a caller could catch.
"""

from __future__ import annotations

import os
from typing import Callable

import structlog

from devops_helper.observability.logging import flush_logging


AbortHandler = Callable[[str], None]


def _os_abort(reason: str) -> None:
    _ = reason
    os.abort()


_handler: AbortHandler | None = None


def set_abort_handler(handler: AbortHandler | None) -> None:
    global _handler
    _handler = handler


def get_abort_handler() -> AbortHandler:
    return _handler or _os_abort


def abort_process(reason: str) -> None:
    structlog.get_logger("chaos").critical("process_abort", reason=reason, pid=os.getpid())
    flush_logging()
    get_abort_handler()(reason)
