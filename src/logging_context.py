"""Refresh ID logging context for tracing one dashboard recomputation.

Provides a refresh_id-aware logger that attaches a correlation ID to every
log message, so the fetch, resolve, and aggregate steps of a single board
refresh can be followed across modules.

Usage:
    from src.logging_context import get_refresh_logger, set_refresh_id

    set_refresh_id("REFRESH-abc123")
    logger = get_refresh_logger(__name__)
    logger.info("Computing status")  # record carries refresh_id=REFRESH-abc123
"""

import logging
import uuid
from contextvars import ContextVar

_refresh_id: ContextVar[str] = ContextVar("refresh_id", default="NO_REFRESH_ID")


def set_refresh_id(refresh_id: str) -> None:
    """Set the correlation ID for the current async context."""
    _refresh_id.set(refresh_id)


def get_refresh_id() -> str:
    """Retrieve the current correlation ID."""
    return _refresh_id.get()


def new_refresh_id() -> str:
    """Generate, set, and return a fresh correlation ID."""
    refresh_id = f"REFRESH-{uuid.uuid4().hex[:8]}"
    set_refresh_id(refresh_id)
    return refresh_id


class RefreshIdFilter(logging.Filter):
    """Injects refresh_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.refresh_id = _refresh_id.get()  # type: ignore[attr-defined]
        return True


def get_refresh_logger(name: str) -> logging.Logger:
    """Return a logger with the RefreshIdFilter attached.

    The filter adds ``refresh_id`` to each record so formatters can
    include ``%(refresh_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, RefreshIdFilter) for f in logger.filters):
        logger.addFilter(RefreshIdFilter())
    return logger
