"""Constants for failstream.

This module defines package-wide constants used across the codebase.
"""

# Error codes
DEFAULT_FAULT_CODE = "failstream:test/fail_error"
"""Code of the default error injected when a counter reaches its limit."""

STREAM_CLOSED_CODE = "failstream:stream/closed"
END_OF_STREAM_CODE = "failstream:stream/eof"

# Fault counter defaults
MIN_FAULT_LIMIT = 0
"""Smallest accepted counter limit.

A limit of 0 behaves like a limit of 1: the very first consultation fails.
"""

# Environment variable names
ENV_LOG_FORMAT = "FAILSTREAM_LOG_FORMAT"
ENV_LOG_LEVEL = "FAILSTREAM_LOG_LEVEL"

# Logging defaults
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "console"

LOGGER_NAMESPACE = "failstream"
"""Parent stdlib logger of every failstream logger."""
