"""Bridges between Python binary streams and result-style readers."""

from __future__ import annotations

import io
import logging
from typing import IO, Any, BinaryIO, Optional

from iohooks.exceptions import EOF, is_eof
from iohooks.hooked import HookedReader
from iohooks.types import (
    HookCallback,
    ReadResult,
    Reader,
    SeekResult,
    StatResult,
    WritableBuffer,
)

logger = logging.getLogger(__name__)

# Exceptions raised by Python streams that are turned into returned errors.
_CAUGHT_EXCEPTIONS = (OSError, ValueError, EOFError)


class StreamReader:
    """
    Adapts a Python binary stream to the :class:`Reader`, :class:`Seeker` and
    :class:`Closer` capabilities.

    Exceptions raised by the stream are returned as the error of the result. An
    empty read into a non-empty buffer is reported as ``(0, EOF)``.
    """

    def __init__(self, stream: IO[bytes] | io.IOBase):
        self._stream = stream

    def read(self, buf: WritableBuffer, /) -> ReadResult:
        if len(buf) == 0:
            return ReadResult(0, None)
        try:
            readinto = getattr(self._stream, "readinto", None)
            if readinto is not None:
                n = readinto(buf)
            else:
                data = self._stream.read(len(buf))
                n = len(data)
                buf[:n] = data
        except _CAUGHT_EXCEPTIONS as e:
            return ReadResult(0, e)

        # None means a non-blocking stream had nothing available.
        if n is None:
            return ReadResult(0, None)
        if n == 0:
            return ReadResult(0, EOF)
        return ReadResult(n, None)

    def seek(self, offset: int, whence: int = io.SEEK_SET, /) -> SeekResult:
        try:
            return SeekResult(self._stream.seek(offset, whence), None)
        except _CAUGHT_EXCEPTIONS as e:
            return SeekResult(offset, e)

    def close(self) -> Optional[BaseException]:
        try:
            self._stream.close()
        except _CAUGHT_EXCEPTIONS as e:
            return e
        return None

    def __repr__(self) -> str:
        return f"StreamReader({self._stream!r})"


def bytes_reader(data: bytes) -> StreamReader:
    """Return a reader producing ``data``."""
    return StreamReader(io.BytesIO(data))


class ReaderIO(io.RawIOBase, BinaryIO):
    """
    Exposes a result-style reader as a regular Python binary stream.

    Errors returned by the wrapped object are raised. When a read returns both
    data and an error, the data is returned first and the error is raised by the
    next read. End of stream is reported as an empty read, the way Python streams
    do it, rather than raised. A read returning no bytes and no error is retried,
    so only an end-of-stream error ends the stream.
    """

    def __init__(self, inner: Reader):
        super().__init__()
        self._inner = inner
        self._pending: Optional[BaseException] = None

    @property
    def inner(self) -> Reader:
        return self._inner

    def readinto(self, b: bytearray | memoryview) -> int:  # type: ignore[override]
        if self.closed:
            raise ValueError("I/O operation on closed file.")

        if self._pending is not None:
            error, self._pending = self._pending, None
            if is_eof(error):
                return 0
            raise error

        count, error = self._inner.read(b)
        # A hook firing on an empty read is not end of stream; read again.
        while count == 0 and error is None and len(b) > 0:
            count, error = self._inner.read(b)
        if error is None:
            return count
        if count > 0:
            logger.debug("Deferring %r after reading %d bytes", error, count)
            self._pending = error
            return count
        if is_eof(error):
            return 0
        raise error

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        seek = getattr(self._inner, "seek", None)
        if seek is None:
            raise io.UnsupportedOperation("seek not supported")
        new_offset, error = seek(offset, whence)
        if error is not None:
            raise error
        return new_offset

    def tell(self) -> int:
        return self.seek(0, io.SEEK_CUR)

    def stat(self) -> Any:
        stat = getattr(self._inner, "stat", None)
        if stat is None:
            raise io.UnsupportedOperation("stat not supported")
        result: StatResult = stat()
        info, error = result
        if error is not None:
            raise error
        return info

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:  # pragma: no cover - trivial
        return False

    def seekable(self) -> bool:
        return callable(getattr(self._inner, "seek", None))

    def close(self) -> None:
        if self.closed:
            return
        error = None
        close = getattr(self._inner, "close", None)
        if close is not None:
            error = close()
        super().close()
        if error is not None:
            raise error

    def __repr__(self) -> str:
        return f"ReaderIO({self._inner!r})"


def hook_binaryio(
    stream: IO[bytes] | io.IOBase,
    threshold: int,
    callback: Optional[HookCallback],
) -> ReaderIO:
    """Wrap a Python binary stream so that ``callback`` runs after ``threshold`` bytes.

    Errors returned by the callback are raised from the stream's read methods.
    """
    return ReaderIO(HookedReader(StreamReader(stream), threshold, callback))
