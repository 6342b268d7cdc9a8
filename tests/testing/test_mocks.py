"""Unit tests for RecordingStream (failstream.testing.mocks)."""

import pytest

from failstream.layers import IOResult
from failstream.models import Role
from failstream.testing.mocks import RecordingStream


class TestRecordingStream:
    """Tests for RecordingStream pre-set results and call recording."""

    def test_read_reports_preset_bytes(self) -> None:
        stream = RecordingStream(read_bytes=10)
        buf = bytearray(4)

        assert stream.read_some(buf) == 10
        assert stream.calls == [("read_some", buf)]

    def test_write_defaults_to_data_length(self) -> None:
        stream = RecordingStream()

        assert stream.try_write_some([b"ab", b"cde"]) == IOResult(5)

    def test_write_bytes_override(self) -> None:
        stream = RecordingStream(write_bytes=2)

        assert stream.write_some(b"abcdef") == 2

    def test_failure_is_one_shot(self) -> None:
        stream = RecordingStream(read_bytes=3)
        stream.set_failure(ConnectionResetError("reset"))

        with pytest.raises(ConnectionResetError):
            stream.read_some(bytearray(3))

        assert stream.read_some(bytearray(3)) == 3

    def test_teardown_records_role(self) -> None:
        stream = RecordingStream()

        assert stream.teardown(Role.SERVER) is None
        assert stream.calls_for("teardown") == [("teardown", Role.SERVER)]

    def test_layers_are_self(self) -> None:
        stream = RecordingStream()

        assert stream.next_layer is stream
        assert stream.lowest_layer is stream

    def test_calls_for_filters(self) -> None:
        stream = RecordingStream()
        stream.write_some(b"a")
        stream.try_read_some(bytearray(1))
        stream.write_some(b"b")

        assert stream.calls_for("write_some") == [("write_some", b"a"), ("write_some", b"b")]

    def test_clear(self) -> None:
        stream = RecordingStream()
        stream.write_some(b"a")
        stream.set_failure(OSError())

        stream.clear()

        assert stream.calls == []
        assert stream.write_some(b"b") == 1

    async def test_async_failure_delivered_to_future(self) -> None:
        stream = RecordingStream()
        stream.set_failure(TimeoutError("slow"))

        with pytest.raises(TimeoutError):
            await stream.async_write_some(b"x")

    async def test_async_teardown_future(self) -> None:
        stream = RecordingStream()

        assert await stream.async_teardown(Role.CLIENT) is None
        assert stream.calls == [("async_teardown", Role.CLIENT)]
