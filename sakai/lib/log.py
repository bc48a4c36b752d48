"""Structlog processors and exception hooks."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import structlog
from litestar.exceptions import HTTPException
from litestar.logging.config import (
    default_structlog_processors,
    default_structlog_standard_lib_processors,
)
from litestar.status_codes import HTTP_500_INTERNAL_SERVER_ERROR

if TYPE_CHECKING:
    from litestar.types import Scope
    from structlog.typing import Processor

logger = structlog.get_logger()


def is_tty() -> bool:
    return bool(sys.stderr.isatty() or sys.stdout.isatty())


def structlog_processors(as_json: bool = True) -> list[Processor]:
    """Processors for structlog-native loggers."""
    return default_structlog_processors(as_json=as_json)


def stdlib_logger_processors(as_json: bool = True) -> list[Processor]:
    """Processors for stdlib loggers rendered through structlog."""
    return default_structlog_standard_lib_processors(as_json=as_json)


async def after_exception_hook_handler(exc: Exception, _scope: Scope) -> None:
    """Log server-side request failures with their type."""
    if isinstance(exc, HTTPException) and exc.status_code < HTTP_500_INTERNAL_SERVER_ERROR:
        return
    logger.error("Application error", exc_type=type(exc).__name__, error=str(exc))
