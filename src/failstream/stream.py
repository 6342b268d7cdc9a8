"""Fault-injecting stream decorator.

FailStream wraps a layered stream and consults a FaultCounter before every
I/O operation. Until the counter's limit is reached each call is forwarded
unchanged to the wrapped stream. From then on the call fails with the
configured error, using the same invocation contract as the wrapped
operation:

- strict calls (``read_some``) raise,
- explicit calls (``try_read_some``) return ``IOResult(0, error)``,
- deferred calls (``async_read_some``) post ``handler(error, 0)`` to the
  wrapped stream's event loop.

A failing explicit or deferred call never touches the wrapped stream.

Example:
    >>> stream = FailStream(2, MemoryStream, data=b"0123456789")
    >>> stream.try_read_some(bytearray(10))
    IOResult(bytes_transferred=10, error=None)
    >>> stream.try_read_some(bytearray(10)).error
    InjectedFaultError('Injected fault')
"""

from __future__ import annotations

import asyncio
from typing import Any, NoReturn

from failstream.counter import FaultCounter
from failstream.layers import (
    Handler,
    IOResult,
    ReadBuffers,
    TeardownHandler,
    WriteBuffers,
    async_completion,
    async_teardown,
    get_lowest_layer,
    post,
    teardown,
)
from failstream.models.enums import Role
from failstream.observability import get_logger

logger = get_logger(__name__)


class FailStream:
    """A stream wrapper that fails on the Nth operation.

    The counter is either private, built from an int limit, or shared, passed
    in as a FaultCounter. A shared counter is held by reference and must
    outlive the stream. Reads, writes and teardowns, sync or async, all
    consume the same budget.

    The wrapped stream is passed as an instance, or as a class followed by its
    constructor arguments to build it in place. The FailStream owns it either
    way.

    FailStream instances cannot be copied or pickled: a copy would either
    split ownership of the wrapped stream or silently alias a shared counter.

    Attributes:
        counter: The active FaultCounter (private or shared)
    """

    __slots__ = ("_counter", "_next_layer")

    def __init__(
        self,
        counter: FaultCounter | int,
        next_layer: Any,
        *args: Any,
        error: BaseException | None = None,
        **kwargs: Any,
    ) -> None:
        if isinstance(counter, FaultCounter):
            if error is not None:
                raise TypeError("error= only applies to a private counter; configure the shared one")
            self._counter = counter
        else:
            self._counter = FaultCounter(counter, error=error)

        if isinstance(next_layer, type):
            self._next_layer = next_layer(*args, **kwargs)
        elif args or kwargs:
            raise TypeError("constructor arguments given but next_layer is already an instance")
        else:
            self._next_layer = next_layer

    @property
    def counter(self) -> FaultCounter:
        return self._counter

    @property
    def next_layer(self) -> Any:
        """The wrapped stream."""
        return self._next_layer

    @property
    def lowest_layer(self) -> Any:
        """The innermost transport, found by asking the wrapped stream.

        A wrapped transport without ``lowest_layer`` is itself the lowest layer.
        """
        return get_lowest_layer(self._next_layer)

    def get_executor(self) -> asyncio.AbstractEventLoop:
        """The wrapped stream's event loop."""
        return self._next_layer.get_executor()

    def read_some(self, buffers: ReadBuffers) -> int:
        self._counter.fail()
        return self._next_layer.read_some(buffers)

    def try_read_some(self, buffers: ReadBuffers) -> IOResult:
        error = self._counter.try_fail()
        if error is not None:
            return IOResult(0, error)
        return self._next_layer.try_read_some(buffers)

    def async_read_some(
        self, buffers: ReadBuffers, handler: Handler | None = None
    ) -> asyncio.Future[int] | None:
        error = self._counter.try_fail()
        if error is not None:
            return self._post_failure(handler, error, 0)
        return self._next_layer.async_read_some(buffers, handler)

    def write_some(self, buffers: WriteBuffers) -> int:
        self._counter.fail()
        return self._next_layer.write_some(buffers)

    def try_write_some(self, buffers: WriteBuffers) -> IOResult:
        error = self._counter.try_fail()
        if error is not None:
            return IOResult(0, error)
        return self._next_layer.try_write_some(buffers)

    def async_write_some(
        self, buffers: WriteBuffers, handler: Handler | None = None
    ) -> asyncio.Future[int] | None:
        error = self._counter.try_fail()
        if error is not None:
            return self._post_failure(handler, error, 0)
        return self._next_layer.async_write_some(buffers, handler)

    def teardown(self, role: Role) -> BaseException | None:
        """Teardown hook; see ``failstream.layers.teardown``."""
        role = Role(role)
        error = self._counter.try_fail()
        if error is not None:
            return error
        logger.debug("failstream.stream.teardown", role=role.value)
        return teardown(role, self._next_layer)

    def async_teardown(
        self, role: Role, handler: TeardownHandler | None = None
    ) -> asyncio.Future[None] | None:
        """Deferred teardown hook; see ``failstream.layers.async_teardown``."""
        role = Role(role)
        error = self._counter.try_fail()
        if error is not None:
            return self._post_failure(handler, error)
        logger.debug("failstream.stream.teardown", role=role.value, deferred=True)
        return async_teardown(role, self._next_layer, handler)

    def _post_failure(
        self, handler: Any, error: BaseException, *args: Any
    ) -> asyncio.Future[Any] | None:
        loop = self.get_executor()
        complete, result = async_completion(loop, handler)
        post(loop, complete, error, *args)
        return result

    def __copy__(self) -> NoReturn:
        raise TypeError("FailStream cannot be copied")

    def __deepcopy__(self, memo: dict[int, Any]) -> NoReturn:
        raise TypeError("FailStream cannot be copied")

    def __reduce_ex__(self, protocol: Any) -> NoReturn:
        raise TypeError("FailStream cannot be pickled")

    def __repr__(self) -> str:
        return f"FailStream({self._counter!r}, {self._next_layer!r})"


__all__ = ["FailStream"]
