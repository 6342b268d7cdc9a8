"""Shared pytest fixtures for failstream tests.

This module provides common fixtures used across multiple test modules,
reducing duplication and ensuring consistency in test data.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from failstream.observability import clear_context

# Load failstream.testing fixtures (fault_counter, recording_stream, memory_stream, ...)
pytest_plugins = ["failstream.testing.fixtures"]

SAMPLE_PAYLOAD = b"0123456789"


@pytest.fixture(autouse=True)
def _isolate_log_context() -> Iterator[None]:
    """Clear structlog context variables bound by a test."""
    yield
    clear_context()


@pytest.fixture
def sample_payload() -> bytes:
    """Ten bytes of deterministic input."""
    return SAMPLE_PAYLOAD


@pytest.fixture
def read_buffer() -> bytearray:
    """A 16-byte destination buffer for reads."""
    return bytearray(16)
