from dataclasses import dataclass
from typing import Optional

import pytest

from iohooks import (
    EOF,
    HookedReader,
    InjectedError,
    ReadFunc,
    ReadResult,
    bytes_reader,
    new_hooked_reader,
    recording,
)
from iohooks.types import HookCallback

AN_ERROR = InjectedError("An Error")


@dataclass
class Step:
    read: int
    data: bytes
    error: Optional[BaseException] = None


@dataclass
class HookCase:
    name: str
    threshold: int
    callback: Optional[HookCallback]
    steps: list[Step]


HOOK_CASES = [
    HookCase(
        "no-callback",
        -1,
        None,
        [Step(5, b"hello"), Step(20, b" world"), Step(20, b"", EOF)],
    ),
    HookCase(
        "distant",
        100,
        lambda i: (-1, AN_ERROR),
        [Step(20, b"hello world"), Step(20, b"", EOF)],
    ),
    HookCase(
        "one-shot",
        5,
        lambda i: (-1, AN_ERROR),
        [Step(10, b"hello", AN_ERROR), Step(20, b" world"), Step(20, b"", EOF)],
    ),
    HookCase(
        "one-shot-at-eof",
        11,
        lambda i: (-1, AN_ERROR),
        [Step(11, b"hello world", AN_ERROR), Step(20, b"", EOF)],
    ),
    HookCase(
        "recurring-noerror",
        5,
        lambda i: (5, None),
        [
            Step(10, b"hello"),
            Step(20, b" worl"),
            Step(20, b"d"),
            Step(20, b"", EOF),
        ],
    ),
]


@pytest.mark.parametrize("case", HOOK_CASES, ids=lambda c: c.name)
def test_hooked_reader(case: HookCase):
    callback = recording(case.callback) if case.callback is not None else None
    reader = new_hooked_reader(bytes_reader(b"hello world"), case.threshold, callback)

    expected_calls: list[int] = []
    for step in case.steps:
        remain = reader.remaining

        buffer = bytearray(step.read)
        count, error = reader.read(buffer)

        # If the read reached the boundary, the callback must have run.
        if 0 <= remain <= count:
            expected_calls.append(len(expected_calls) + 1)
        if callback is not None:
            assert callback.calls == expected_calls

        assert error is step.error
        assert count == len(step.data)
        assert bytes(buffer[:count]) == step.data


def test_hello_world_scenario():
    reader = new_hooked_reader(
        bytes_reader(b"hello world"), 5, lambda i: (-1, AN_ERROR)
    )

    buf = bytearray(10)
    assert reader.read(buf) == (5, AN_ERROR)
    assert buf[:5] == b"hello"

    buf = bytearray(20)
    assert reader.read(buf) == (6, None)
    assert buf[:6] == b" world"

    assert reader.read(bytearray(20)) == (0, EOF)


def test_exact_size_read_fires_in_same_call():
    callback = recording(lambda i: (-1, AN_ERROR))
    reader = HookedReader(bytes_reader(b"abcdefgh"), 4, callback)

    count, error = reader.read(bytearray(4))

    assert (count, error) == (4, AN_ERROR)
    assert callback.calls == [1]


def test_read_is_truncated_at_boundary():
    reader = HookedReader(bytes_reader(b"abcdefgh"), 3, lambda i: (-1, None))
    buf = bytearray(b"........")

    assert reader.read(buf) == (3, None)
    assert buf == bytearray(b"abc.....")


def test_small_read_does_not_fire():
    callback = recording(lambda i: (-1, AN_ERROR))
    reader = HookedReader(bytes_reader(b"abcdefgh"), 4, callback)

    assert reader.read(bytearray(3)) == (3, None)
    assert reader.remaining == 1
    assert callback.calls == []

    assert reader.read(bytearray(3)) == (1, AN_ERROR)
    assert callback.calls == [1]


def test_zero_threshold_fires_on_first_read():
    callback = recording(lambda i: (-1, AN_ERROR))
    reader = HookedReader(bytes_reader(b"hello"), 0, callback)

    buf = bytearray(4)
    assert reader.read(buf) == (0, AN_ERROR)
    assert callback.calls == [1]

    assert reader.read(buf) == (4, None)
    assert buf == bytearray(b"hell")


def one_byte_reader(data: bytes) -> ReadFunc:
    """A reader that never produces more than one byte per call."""
    pos = 0

    def read(buf):
        nonlocal pos
        if pos >= len(data):
            return ReadResult(0, EOF)
        if len(buf) == 0:
            return ReadResult(0, None)
        buf[0] = data[pos]
        pos += 1
        return ReadResult(1, None)

    return ReadFunc(read)


def test_short_reads_accumulate_to_boundary():
    callback = recording(lambda i: (-1, AN_ERROR))
    reader = HookedReader(one_byte_reader(b"abcdef"), 4, callback)

    results = [reader.read(bytearray(10)) for _ in range(4)]

    assert results == [(1, None), (1, None), (1, None), (1, AN_ERROR)]
    assert callback.calls == [1]
    assert reader.remaining == -1


def test_underlying_error_takes_precedence_at_boundary():
    boom = OSError("boom")
    callback = recording(lambda i: (-1, AN_ERROR))

    def read(buf):
        buf[:3] = b"abc"
        return ReadResult(3, boom)

    reader = HookedReader(ReadFunc(read), 3, callback)

    count, error = reader.read(bytearray(10))

    assert count == 3
    assert error is boom
    assert callback.calls == []
    assert reader.remaining == 0
    assert reader.invocation_count == 0


def test_underlying_error_passed_through_before_boundary():
    boom = OSError("boom")
    callback = recording(lambda i: (-1, AN_ERROR))
    reader = HookedReader(ReadFunc(lambda buf: ReadResult(2, boom)), 10, callback)

    result = reader.read(bytearray(5))

    assert result == (2, boom)
    assert result[1] is boom
    assert reader.remaining == 8
    assert callback.calls == []


def test_result_returned_unchanged_below_threshold():
    sentinel = ReadResult(1, None)
    reader = HookedReader(ReadFunc(lambda buf: sentinel), 10, lambda i: (-1, None))
    assert reader.read(bytearray(2)) is sentinel


def test_passthrough_result_returned_unchanged():
    sentinel = ReadResult(7, AN_ERROR)
    reader = HookedReader(ReadFunc(lambda buf: sentinel), -1, None)
    assert reader.read(bytearray(2)) is sentinel


def test_indices_are_monotonic_across_boundaries():
    callback = recording(lambda i: (2, None))
    reader = HookedReader(bytes_reader(b"abcdefgh"), 2, callback)

    chunks = []
    while True:
        buf = bytearray(100)
        count, error = reader.read(buf)
        if error is EOF:
            break
        assert error is None
        chunks.append(bytes(buf[:count]))

    assert chunks == [b"ab", b"cd", b"ef", b"gh"]
    assert callback.calls == [1, 2, 3, 4]
    assert reader.invocation_count == 4


def test_callback_threshold_replaces_counter():
    first = InjectedError("first")
    second = InjectedError("second")
    steps = {1: (3, first), 2: (0, second), 3: (-1, None)}
    callback = recording(lambda i: steps[i])
    reader = HookedReader(bytes_reader(b"0123456789"), 2, callback)

    assert reader.read(bytearray(100)) == (2, first)
    assert reader.remaining == 3
    assert reader.read(bytearray(100)) == (3, second)
    assert reader.remaining == 0
    # A zero threshold fires again on the next read, without consuming data.
    assert reader.read(bytearray(100)) == (0, None)
    assert reader.enabled is False
    assert reader.read(bytearray(100)) == (5, None)
    assert callback.calls == [1, 2, 3]


@pytest.mark.parametrize(
    "chunks",
    [[1] * 12, [3, 3, 3, 3], [5, 20], [0, 4, 0, 100]],
    ids=["ones", "threes", "mixed", "with-empty"],
)
def test_negative_threshold_is_transparent(chunks: list[int]):
    data = b"hello world!"
    direct = bytes_reader(data)
    hooked = HookedReader(bytes_reader(data), -5, None)

    for size in chunks:
        direct_buf, hooked_buf = bytearray(size), bytearray(size)
        direct_result = direct.read(direct_buf)
        hooked_result = hooked.read(hooked_buf)
        assert hooked_result == direct_result
        assert hooked_buf == direct_buf

    assert hooked.invocation_count == 0


def test_callback_required_when_enabled():
    with pytest.raises(TypeError):
        HookedReader(bytes_reader(b""), 3, None)


def test_callback_may_raise():
    def callback(index):
        raise RuntimeError("from callback")

    reader = HookedReader(bytes_reader(b"abc"), 1, callback)
    with pytest.raises(RuntimeError, match="from callback"):
        reader.read(bytearray(2))


def test_callback_invocation_is_logged(caplog: pytest.LogCaptureFixture):
    reader = HookedReader(bytes_reader(b"abc"), 1, lambda i: (-1, None))
    reader.read(bytearray(2))
    assert "Hook callback #1 returned next=-1" in caplog.text
    assert "Hook disabled after 1 calls" in caplog.text


def test_repr_shows_state():
    reader = HookedReader(bytes_reader(b"abc"), 2, lambda i: (-1, None))
    assert "remaining=2" in repr(reader)
    assert "calls=0" in repr(reader)
