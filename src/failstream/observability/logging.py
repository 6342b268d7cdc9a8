"""Structured logging for failstream.

failstream is imported by test suites, so it never configures logging on its
own. Loggers returned by ``get_logger`` are structlog loggers bound to the
stdlib logger of the same name, with a private processor chain: events flow
through the ``failstream`` stdlib logger hierarchy and obey whatever levels
and handlers the importing application has set up. Global structlog
configuration and the root logger are left untouched.

Events carry a dict message (``record.msg``), so they can be rendered by a
``structlog.stdlib.ProcessorFormatter`` or inspected directly in tests with
``caplog``.

``configure_logging`` is an opt-in helper that attaches a console or JSON
handler to the ``failstream`` logger only.

Environment Variables:
    FAILSTREAM_LOG_FORMAT: "json" or "console" (used by configure_logging)
    FAILSTREAM_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR (used by configure_logging)

Example:
    >>> from failstream.observability.logging import configure_logging
    >>> configure_logging(log_format="json", log_level="DEBUG")
    >>> # ... run the failing test, then
    >>> reset_logging()
"""

import logging
import os
import sys
from typing import Any

import structlog
from structlog.typing import Processor

from failstream.models.constants import (
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    ENV_LOG_FORMAT,
    ENV_LOG_LEVEL,
    LOGGER_NAMESPACE,
)

# Handler installed by configure_logging, if any
_handler: logging.Handler | None = None

_EVENT_PROCESSORS: list[Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger routed through the stdlib logger ``name``.

    Nothing is configured as a side effect; events below the stdlib logger's
    effective level are dropped before any processing.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_EVENT_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=False,
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """Attach a rendering handler to the ``failstream`` logger.

    Calling it again replaces the previously installed handler. The root
    logger and other libraries' loggers are not modified.

    Args:
        log_format: "json" or "console". Defaults to env var or "console"
        log_level: Minimum level. Defaults to env var or "INFO"
    """
    global _handler

    log_format = (log_format or os.environ.get(ENV_LOG_FORMAT, DEFAULT_LOG_FORMAT)).lower()
    log_level = (log_level or os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)).upper()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_format),
            ],
        )
    )

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    if _handler is not None:
        package_logger.removeHandler(_handler)
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, log_level))
    _handler = handler


def reset_logging() -> None:
    """Remove the handler installed by configure_logging and clear the level."""
    global _handler

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    if _handler is not None:
        package_logger.removeHandler(_handler)
        _handler = None
    package_logger.setLevel(logging.NOTSET)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables included in all subsequent failstream events.

    Useful for tagging every injected fault with the running test id.

    Example:
        >>> bind_context(test_id="test_close_handshake")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
