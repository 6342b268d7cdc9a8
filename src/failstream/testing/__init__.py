"""failstream testing utilities.

This package provides pytest fixtures, a recording mock stream, and custom
assertions for tests that drive protocol code through fail streams.

Modules:
    fixtures: Pytest fixtures (fault_counter, recording_stream, memory_stream,
              fail_stream_factory) and the fault_plan context manager.
    mocks: RecordingStream, a mock layered stream recording every call.
    assertions: assert_fault_injected, assert_untouched, assert_not_inline.

Example:
    >>> from failstream.testing import RecordingStream, assert_untouched
    >>> # conftest.py
    >>> pytest_plugins = ["failstream.testing.fixtures"]
"""

from failstream.testing.assertions import (
    assert_fault_injected,
    assert_not_inline,
    assert_untouched,
)
from failstream.testing.mocks import RecordingStream

__all__ = [
    "RecordingStream",
    "assert_fault_injected",
    "assert_not_inline",
    "assert_untouched",
]
