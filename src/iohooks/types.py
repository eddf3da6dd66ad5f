"""Capability protocols and result types shared by the iohooks modules."""

from __future__ import annotations

import io
from datetime import datetime
from typing import Callable, NamedTuple, Optional, Protocol, Union, runtime_checkable

WritableBuffer = Union[bytearray, memoryview]


class ReadResult(NamedTuple):
    """Number of bytes written into the buffer, and the error that came with them."""

    count: int
    error: Optional[BaseException] = None


class SeekResult(NamedTuple):
    offset: int
    error: Optional[BaseException] = None


@runtime_checkable
class FileInfo(Protocol):
    """Metadata returned by :meth:`StatProvider.stat`."""

    @property
    def name(self) -> str: ...

    @property
    def size(self) -> int: ...

    @property
    def mode(self) -> int: ...

    @property
    def mod_time(self) -> datetime: ...

    @property
    def is_dir(self) -> bool: ...


class StatResult(NamedTuple):
    info: Optional[FileInfo]
    error: Optional[BaseException] = None


@runtime_checkable
class Reader(Protocol):
    def read(self, buf: WritableBuffer, /) -> ReadResult: ...


@runtime_checkable
class Seeker(Protocol):
    def seek(self, offset: int, whence: int = io.SEEK_SET, /) -> SeekResult: ...


@runtime_checkable
class Closer(Protocol):
    def close(self) -> Optional[BaseException]: ...


@runtime_checkable
class StatProvider(Protocol):
    def stat(self) -> StatResult: ...


HookCallback = Callable[[int], tuple[int, Optional[BaseException]]]
"""Called by a hooked reader with the 1-based invocation index.

Returns the number of bytes to read before the next call (negative disables
further calls) and an error to return from the triggering read, or None.
"""
