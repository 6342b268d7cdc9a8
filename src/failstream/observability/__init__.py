"""Observability module for failstream.

Structured logging for fault injection and stream lifecycle events.

Example:
    >>> from failstream.observability import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.debug("failstream.fault.injected", count=2, limit=2)
"""

from failstream.observability.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    reset_logging,
)

__all__ = [
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "reset_logging",
]
