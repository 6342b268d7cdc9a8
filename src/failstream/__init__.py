"""failstream: fault-injecting decorator for layered streams.

Wrap any transport in a FailStream so that a chosen consultation, counted
across reads, writes and teardowns, fails with a chosen error while every
earlier call behaves exactly like the real transport.

Example:
    >>> from failstream import FailStream, MemoryStream
    >>> stream = FailStream(3, MemoryStream, data=b"hello")
"""

from failstream.counter import FaultCounter
from failstream.errors import (
    EndOfStreamError,
    FailStreamError,
    InjectedFaultError,
    StreamClosedError,
)
from failstream.layers import (
    IOResult,
    LayeredStream,
    async_teardown,
    get_lowest_layer,
    teardown,
)
from failstream.memory import MemoryStream, memory_pair
from failstream.models import FaultCounterConfig, Role
from failstream.stream import FailStream

__version__ = "0.1.0"

__all__ = [
    "EndOfStreamError",
    "FailStream",
    "FailStreamError",
    "FaultCounter",
    "FaultCounterConfig",
    "IOResult",
    "InjectedFaultError",
    "LayeredStream",
    "MemoryStream",
    "Role",
    "StreamClosedError",
    "async_teardown",
    "get_lowest_layer",
    "memory_pair",
    "teardown",
]
