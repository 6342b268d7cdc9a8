"""Pytest fixtures and context managers for failstream tests.

Fixtures (use with pytest):
    fault_counter: Fresh FaultCounter with limit 1.
    recording_stream: RecordingStream that reports 10-byte reads.
    memory_stream: Empty MemoryStream.
    fail_stream_factory: Builds FailStreams over fresh RecordingStreams.

Context managers:
    fault_plan(): Yields a FaultCounter to share; an existing one is reset on exit.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

import pytest

from failstream.counter import FaultCounter
from failstream.memory import MemoryStream
from failstream.stream import FailStream
from failstream.testing.mocks import RecordingStream

DEFAULT_READ_BYTES = 10


@pytest.fixture
def fault_counter() -> FaultCounter:
    """Create a FaultCounter that fails on its first consultation."""
    return FaultCounter(1)


@pytest.fixture
def recording_stream() -> RecordingStream:
    """Create a RecordingStream reporting DEFAULT_READ_BYTES per read."""
    return RecordingStream(read_bytes=DEFAULT_READ_BYTES)


@pytest.fixture
def memory_stream() -> MemoryStream:
    """Create an empty MemoryStream bound lazily to the running loop."""
    return MemoryStream()


@pytest.fixture
def fail_stream_factory() -> Callable[..., FailStream]:
    """Return a factory for FailStreams.

    The factory takes a limit or a shared FaultCounter and an optional
    wrapped stream; by default each FailStream wraps a fresh RecordingStream.

    Example:
        >>> stream = fail_stream_factory(3)
        >>> stream.next_layer.calls
        []
    """

    def factory(counter: FaultCounter | int, next_layer: Any = None, **kwargs: Any) -> FailStream:
        if next_layer is None:
            next_layer = RecordingStream(read_bytes=DEFAULT_READ_BYTES)
        return FailStream(counter, next_layer, **kwargs)

    return factory


@contextmanager
def fault_plan(
    counter: FaultCounter | int, error: BaseException | None = None
) -> Iterator[FaultCounter]:
    """Context manager that provides a counter to share between streams.

    Given a limit, a fresh counter is built. Given an existing counter, it is
    yielded as is and reset on exit, so the same plan can drive the next scope
    (for example each iteration of a fail loop).

    Example:
        >>> plan = FaultCounter(3)
        >>> for _ in range(2):
        ...     with fault_plan(plan) as counter:
        ...         a = FailStream(counter, RecordingStream())
        ...         b = FailStream(counter, RecordingStream())
    """
    if not isinstance(counter, FaultCounter):
        yield FaultCounter(counter, error=error)
        return

    if error is not None:
        raise TypeError("error= only applies to a new counter; configure the existing one")
    try:
        yield counter
    finally:
        counter.reset()


__all__ = [
    "DEFAULT_READ_BYTES",
    "fail_stream_factory",
    "fault_counter",
    "fault_plan",
    "memory_stream",
    "recording_stream",
]
