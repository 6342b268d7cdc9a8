"""Layered stream capability interface.

A layered stream is any object that provides the operation set below. Each
I/O operation comes in three forms, one per invocation contract:

- strict: ``read_some(buffers) -> int`` raises on error.
- explicit: ``try_read_some(buffers) -> IOResult`` returns the error.
- deferred: ``async_read_some(buffers, handler)`` schedules
  ``handler(error, bytes_transferred)`` on the stream's event loop. The
  handler is never invoked inside the submitting call. Passing
  ``handler=None`` returns an ``asyncio.Future`` instead.

Layers expose ``next_layer`` (the stream they wrap, or themselves) and
``lowest_layer`` (the innermost transport), plus ``get_executor()`` returning
the event loop that runs completions.

Teardown is the out-of-band shutdown hook used by protocols such as
WebSocket before closing the transport. Use the free functions
``teardown(role, stream)`` and ``async_teardown(role, stream, handler)``;
they dispatch to the stream's own hooks and fall back to ``close()``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, Union, runtime_checkable

from failstream.models.enums import Role
from failstream.observability import get_logger

logger = get_logger(__name__)

ReadBuffers = Union[bytearray, memoryview, Sequence[Union[bytearray, memoryview]]]
WriteBuffers = Union[bytes, bytearray, memoryview, Sequence[Union[bytes, bytearray, memoryview]]]

Handler = Callable[[Union[BaseException, None], int], None]
TeardownHandler = Callable[[Union[BaseException, None]], None]


@dataclass(frozen=True, slots=True)
class IOResult:
    """Outcome of an explicit-contract operation.

    Attributes:
        bytes_transferred: Bytes read or written (0 on error)
        error: The error, or None on success
    """

    bytes_transferred: int = 0
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> int:
        """Return bytes_transferred, or raise the error if one is set."""
        if self.error is not None:
            raise self.error
        return self.bytes_transferred


@runtime_checkable
class LayeredStream(Protocol):
    """Operations a stream must provide to be wrapped by FailStream."""

    @property
    def next_layer(self) -> Any: ...

    @property
    def lowest_layer(self) -> Any: ...

    def get_executor(self) -> asyncio.AbstractEventLoop: ...

    def read_some(self, buffers: ReadBuffers) -> int: ...

    def try_read_some(self, buffers: ReadBuffers) -> IOResult: ...

    def async_read_some(
        self, buffers: ReadBuffers, handler: Handler | None = None
    ) -> asyncio.Future[int] | None: ...

    def write_some(self, buffers: WriteBuffers) -> int: ...

    def try_write_some(self, buffers: WriteBuffers) -> IOResult: ...

    def async_write_some(
        self, buffers: WriteBuffers, handler: Handler | None = None
    ) -> asyncio.Future[int] | None: ...

    def teardown(self, role: Role) -> BaseException | None: ...

    def async_teardown(
        self, role: Role, handler: TeardownHandler | None = None
    ) -> asyncio.Future[None] | None: ...


def buffer_views(buffers: Any) -> list[memoryview]:
    """Return byte views over a buffer or a sequence of buffers."""
    if isinstance(buffers, (bytes, bytearray, memoryview)):
        return [memoryview(buffers).cast("B")]
    if isinstance(buffers, Sequence):
        return [memoryview(b).cast("B") for b in buffers]
    raise TypeError(
        f"expected a bytes-like object or a sequence of them, got {type(buffers).__name__}"
    )


def buffer_size(buffers: Any) -> int:
    """Total size in bytes of a buffer or a sequence of buffers."""
    return sum(v.nbytes for v in buffer_views(buffers))


def get_lowest_layer(stream: Any) -> Any:
    """Return the innermost transport of a stream stack.

    Streams without a ``lowest_layer`` attribute are their own lowest layer.
    """
    return getattr(stream, "lowest_layer", stream)


def async_completion(
    loop: asyncio.AbstractEventLoop,
    handler: Callable[..., None] | None,
) -> tuple[Callable[..., None], asyncio.Future[Any] | None]:
    """Resolve a completion handler for a deferred operation.

    If ``handler`` is given it is returned unchanged with no result. If it is
    None, a future is created on ``loop`` and a handler that resolves it is
    returned together with the future. The future resolves to the first
    non-error argument, or fails with the error.
    """
    if handler is not None:
        return handler, None

    future: asyncio.Future[Any] = loop.create_future()

    def complete(error: BaseException | None, *args: Any) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(args[0] if args else None)

    return complete, future


def post(loop: asyncio.AbstractEventLoop, handler: Callable[..., None], *args: Any) -> None:
    """Schedule ``handler(*args)`` to run later on ``loop``, never inline."""
    loop.call_soon(handler, *args)


def teardown(role: Role, stream: Any) -> BaseException | None:
    """Tear down ``stream`` for ``role``.

    Dispatches to ``stream.teardown(role)``. Streams without a teardown hook
    are closed with ``close()``.

    Returns:
        The error reported by the stream, or None on success.

    Raises:
        TypeError: If the stream has neither a teardown hook nor close().
    """
    hook = getattr(stream, "teardown", None)
    if hook is not None:
        return hook(Role(role))
    close = getattr(stream, "close", None)
    if close is None:
        raise TypeError(f"{type(stream).__name__} has no teardown hook and no close()")
    logger.debug("failstream.stream.teardown", role=Role(role).value, fallback="close")
    try:
        close()
    except Exception as exc:
        return exc
    return None


def async_teardown(
    role: Role,
    stream: Any,
    handler: TeardownHandler | None = None,
) -> asyncio.Future[None] | None:
    """Tear down ``stream`` for ``role`` asynchronously.

    Dispatches to ``stream.async_teardown(role, handler)``. Streams without an
    async hook are torn down synchronously and the handler is posted to the
    stream's event loop.

    Returns:
        A future when ``handler`` is None, otherwise None.
    """
    hook = getattr(stream, "async_teardown", None)
    if hook is not None:
        return hook(Role(role), handler)
    loop = stream.get_executor()
    complete, result = async_completion(loop, handler)
    post(loop, complete, teardown(role, stream))
    return result


__all__ = [
    "Handler",
    "IOResult",
    "LayeredStream",
    "ReadBuffers",
    "Role",
    "TeardownHandler",
    "WriteBuffers",
    "async_completion",
    "async_teardown",
    "buffer_size",
    "buffer_views",
    "get_lowest_layer",
    "post",
    "teardown",
]
