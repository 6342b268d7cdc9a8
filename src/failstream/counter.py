"""Fault counter: decides which consultation of a stream fails.

A FaultCounter counts consultations made by fail streams. The consultation
numbered ``limit`` fails with the configured error, and so does every
consultation after it: once reached, the threshold stays reached.

Counters may be shared by several FailStream instances (for example the two
legs of a connection) so that they draw from one common budget. A shared
counter must outlive every stream referencing it.

This implementation is NOT thread-safe. Streams sharing a counter must be
driven from a single thread (the usual event-loop test model), or callers
must add their own locking.
"""

from __future__ import annotations

from failstream.errors import InjectedFaultError, error_code
from failstream.models.config import FaultCounterConfig
from failstream.models.constants import MIN_FAULT_LIMIT
from failstream.observability import get_logger

logger = get_logger(__name__)


class FaultCounter:
    """Countdown policy that injects a fixed error on the Nth consultation.

    Two check forms are provided for the two synchronous call-site
    conventions:

    - ``fail()`` raises the configured error when the limit is reached.
    - ``try_fail()`` returns the configured error, or None.

    Example:
        >>> counter = FaultCounter(2)
        >>> counter.try_fail() is None
        True
        >>> counter.try_fail()
        InjectedFaultError('Injected fault')
    """

    def __init__(self, limit: int, error: BaseException | None = None) -> None:
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ValueError(f"limit must be an int, got {type(limit).__name__}")
        if limit < MIN_FAULT_LIMIT:
            raise ValueError(f"limit must be >= {MIN_FAULT_LIMIT}, got {limit}")
        self._limit = limit
        self._count = 0
        self._error = error if error is not None else InjectedFaultError(limit=limit)

    @classmethod
    def from_config(cls, config: FaultCounterConfig) -> FaultCounter:
        """Build a fresh counter from a declarative plan."""
        return cls(config.limit, error=config.error)

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def count(self) -> int:
        """Number of consultations counted so far (saturates at limit)."""
        return self._count

    @property
    def error(self) -> BaseException:
        return self._error

    @property
    def triggered(self) -> bool:
        """True once the limit has been reached."""
        return self._count >= self._limit

    def fail(self) -> None:
        """Consult the counter, raising the configured error on failure."""
        error = self.try_fail()
        if error is not None:
            raise error

    def try_fail(self) -> BaseException | None:
        """Consult the counter.

        Returns:
            The configured error if this consultation fails, else None.
        """
        if self._count < self._limit:
            self._count += 1
        if self._count < self._limit:
            return None
        logger.debug(
            "failstream.fault.injected",
            count=self._count,
            limit=self._limit,
            error_code=error_code(self._error),
        )
        return self._error

    def reset(self) -> None:
        """Rewind the consultation count to zero."""
        self._count = 0

    def __repr__(self) -> str:
        return f"FaultCounter(limit={self._limit}, count={self._count})"


__all__ = ["FaultCounter"]
