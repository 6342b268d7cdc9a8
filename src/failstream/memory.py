"""Deterministic in-memory transport.

MemoryStream is a lowest-layer stream backed by byte buffers. Reads consume
bytes from an input buffer and writes append to an output buffer, so
protocol tests can script exactly what the peer sends and inspect exactly
what was written. Two streams can be connected with ``memory_pair`` so that
bytes written on one end become readable on the other.

Call counters (``read_calls``, ``write_calls``, ``teardown_calls``) let tests
assert that a decorator above did, or did not, touch the transport.

Deferred operations perform the transfer immediately and post the
completion handler to the event loop, so handlers never run inline.
"""

from __future__ import annotations

import asyncio

from failstream.errors import EndOfStreamError, StreamClosedError
from failstream.layers import (
    Handler,
    IOResult,
    ReadBuffers,
    TeardownHandler,
    WriteBuffers,
    async_completion,
    buffer_views,
    post,
)
from failstream.models.enums import Role
from failstream.observability import get_logger

logger = get_logger(__name__)


class MemoryStream:
    """In-memory layered stream.

    Args:
        loop: Event loop for completions. Defaults to the running loop at the
            time of the first deferred operation.
        data: Initial input bytes available to reads.
        read_size: Cap on bytes returned per read, to model partial reads.
        write_size: Cap on bytes accepted per write, to model partial writes.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        data: bytes = b"",
        read_size: int | None = None,
        write_size: int | None = None,
    ) -> None:
        self._loop = loop
        self._input = bytearray(data)
        self._output = bytearray()
        self._read_size = read_size
        self._write_size = write_size
        self._peer: MemoryStream | None = None
        self._closed = False
        self.teardown_role: Role | None = None
        self.read_calls = 0
        self.write_calls = 0
        self.teardown_calls = 0

    @property
    def next_layer(self) -> MemoryStream:
        return self

    @property
    def lowest_layer(self) -> MemoryStream:
        return self

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def output(self) -> bytes:
        """All bytes written so far."""
        return bytes(self._output)

    @property
    def pending(self) -> int:
        """Input bytes not yet read."""
        return len(self._input)

    def get_executor(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def feed(self, data: bytes) -> None:
        """Append bytes to the input buffer."""
        self._input.extend(data)

    def connect(self, peer: MemoryStream) -> None:
        """Route this stream's writes into ``peer``'s input, and back."""
        self._peer = peer
        peer._peer = self

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            logger.debug("failstream.memory.closed", pending=len(self._input))

    def _read(self, buffers: ReadBuffers) -> IOResult:
        self.read_calls += 1
        if self._closed:
            return IOResult(0, StreamClosedError("read"))
        views = buffer_views(buffers)
        capacity = sum(v.nbytes for v in views)
        if capacity == 0:
            return IOResult(0)
        if not self._input:
            return IOResult(0, EndOfStreamError())
        n = min(capacity, len(self._input))
        if self._read_size is not None:
            n = min(n, self._read_size)
        offset = 0
        for view in views:
            if offset >= n:
                break
            chunk = min(view.nbytes, n - offset)
            view[:chunk] = self._input[offset : offset + chunk]
            offset += chunk
        del self._input[:n]
        return IOResult(n)

    def _write(self, buffers: WriteBuffers) -> IOResult:
        self.write_calls += 1
        if self._closed:
            return IOResult(0, StreamClosedError("write"))
        data = b"".join(v.tobytes() for v in buffer_views(buffers))
        if self._write_size is not None:
            data = data[: self._write_size]
        self._output.extend(data)
        if self._peer is not None and not self._peer.closed:
            self._peer.feed(data)
        return IOResult(len(data))

    def read_some(self, buffers: ReadBuffers) -> int:
        return self._read(buffers).raise_for_error()

    def try_read_some(self, buffers: ReadBuffers) -> IOResult:
        return self._read(buffers)

    def async_read_some(
        self, buffers: ReadBuffers, handler: Handler | None = None
    ) -> asyncio.Future[int] | None:
        loop = self.get_executor()
        complete, result = async_completion(loop, handler)
        outcome = self._read(buffers)
        post(loop, complete, outcome.error, outcome.bytes_transferred)
        return result

    def write_some(self, buffers: WriteBuffers) -> int:
        return self._write(buffers).raise_for_error()

    def try_write_some(self, buffers: WriteBuffers) -> IOResult:
        return self._write(buffers)

    def async_write_some(
        self, buffers: WriteBuffers, handler: Handler | None = None
    ) -> asyncio.Future[int] | None:
        loop = self.get_executor()
        complete, result = async_completion(loop, handler)
        outcome = self._write(buffers)
        post(loop, complete, outcome.error, outcome.bytes_transferred)
        return result

    def teardown(self, role: Role) -> BaseException | None:
        self.teardown_calls += 1
        if self._closed:
            return StreamClosedError("teardown")
        self.teardown_role = Role(role)
        self.close()
        return None

    def async_teardown(
        self, role: Role, handler: TeardownHandler | None = None
    ) -> asyncio.Future[None] | None:
        loop = self.get_executor()
        complete, result = async_completion(loop, handler)
        post(loop, complete, self.teardown(role))
        return result

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"MemoryStream({state}, pending={len(self._input)}, written={len(self._output)})"


def memory_pair(
    loop: asyncio.AbstractEventLoop | None = None,
) -> tuple[MemoryStream, MemoryStream]:
    """Create two connected MemoryStreams (client end, server end)."""
    client = MemoryStream(loop)
    server = MemoryStream(loop)
    client.connect(server)
    return client, server


__all__ = ["MemoryStream", "memory_pair"]
