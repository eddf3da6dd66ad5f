"""A reader that runs a callback after a given number of bytes have been read."""

from __future__ import annotations

import logging
from typing import Optional

from iohooks.types import HookCallback, ReadResult, Reader, WritableBuffer

logger = logging.getLogger(__name__)


class HookedReader:
    """
    Wraps a :class:`Reader` and calls a function once a number of bytes have been
    read from it.

    This is useful for interacting with code performing IO, e.g. injecting an error
    into the result of a read at a precise offset, or signalling another thread
    that the consumer has reached a given point of the stream (for example to
    trigger a graceful shutdown).

    The callback receives a counter starting at 1, incremented on each call, so that
    different actions can be taken on each invocation. It returns a tuple
    ``(next, error)``: ``next`` is the number of further bytes to read before the
    callback runs again (negative disables it), and ``error`` is returned as the
    error of the read that triggered it. For example ``(-1, EOF)`` produces a
    one-shot end of stream, and ``(20, EOF)`` a recurring one every 20 bytes.

    A read never crosses more than one boundary: when the buffer is large enough to
    reach it, the read is truncated to end exactly at the boundary.

    Not safe for concurrent reads on the same instance.
    """

    def __init__(
        self,
        inner: Reader,
        threshold: int,
        callback: Optional[HookCallback],
    ):
        """
        Args:
            inner: The reader to wrap. It should not be read from directly
                afterwards.
            threshold: Number of bytes to read before the first call of
                ``callback``. A negative value disables the callback entirely.
            callback: Function called at each boundary. May be None only when
                ``threshold`` is negative.
        """
        if threshold >= 0 and not callable(callback):
            raise TypeError(f"callback must be callable, got {callback!r}")
        self._inner = inner
        self._remaining = threshold
        self._callback = callback
        self._calls = 0

    @property
    def remaining(self) -> int:
        """Bytes left before the next callback; negative when disabled."""
        return self._remaining

    @property
    def invocation_count(self) -> int:
        return self._calls

    @property
    def enabled(self) -> bool:
        return self._remaining >= 0

    def read(self, buf: WritableBuffer, /) -> ReadResult:
        if self._remaining < 0:
            return self._inner.read(buf)

        if len(buf) < self._remaining:
            result = self._inner.read(buf)
            count, _ = result
            self._remaining -= count
            return result

        count, error = self._inner.read(memoryview(buf)[: self._remaining])
        self._remaining -= count
        if error is not None:
            # The inner reader's own error wins over the callback.
            return ReadResult(count, error)
        if self._remaining > 0:
            return ReadResult(count, None)

        assert self._callback is not None
        self._calls += 1
        next_threshold, error = self._callback(self._calls)
        logger.debug(
            "Hook callback #%d returned next=%d, error=%r",
            self._calls,
            next_threshold,
            error,
        )
        if next_threshold < 0:
            logger.debug("Hook disabled after %d calls", self._calls)
        self._remaining = next_threshold
        return ReadResult(count, error)

    def __repr__(self) -> str:
        return (
            f"HookedReader({self._inner!r}, remaining={self._remaining}, "
            f"calls={self._calls})"
        )


def new_hooked_reader(
    inner: Reader, threshold: int, callback: Optional[HookCallback]
) -> HookedReader:
    """Create a reader that calls ``callback`` after reading ``threshold`` bytes.

    See :class:`HookedReader` for the callback contract.
    """
    return HookedReader(inner, threshold, callback)
