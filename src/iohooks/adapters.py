"""Wrap bare functions so they satisfy a single capability protocol."""

from __future__ import annotations

import io
import logging
from typing import Any, Callable, Optional

from iohooks.types import (
    Closer,
    ReadResult,
    Reader,
    SeekResult,
    Seeker,
    StatProvider,
    StatResult,
    WritableBuffer,
)

logger = logging.getLogger(__name__)


class ReadFunc:
    """Wraps up a function as a :class:`Reader`."""

    def __init__(self, fn: Callable[[WritableBuffer], ReadResult]):
        self._fn = fn

    def read(self, buf: WritableBuffer, /) -> ReadResult:
        return self._fn(buf)

    def __repr__(self) -> str:
        return f"ReadFunc({self._fn!r})"


class SeekFunc:
    """Wraps up a function as a :class:`Seeker`."""

    def __init__(self, fn: Callable[[int, int], SeekResult]):
        self._fn = fn

    def seek(self, offset: int, whence: int = io.SEEK_SET, /) -> SeekResult:
        return self._fn(offset, whence)

    def __repr__(self) -> str:
        return f"SeekFunc({self._fn!r})"


class CloseFunc:
    """Wraps up a function as a :class:`Closer`."""

    def __init__(self, fn: Callable[[], Optional[BaseException]]):
        self._fn = fn

    def close(self) -> Optional[BaseException]:
        return self._fn()

    def __repr__(self) -> str:
        return f"CloseFunc({self._fn!r})"


class StatFunc:
    """Wraps up a function as a :class:`StatProvider`."""

    def __init__(self, fn: Callable[[], StatResult]):
        self._fn = fn

    def stat(self) -> StatResult:
        return self._fn()

    def __repr__(self) -> str:
        return f"StatFunc({self._fn!r})"


def _coerce(obj: Any, method: str, adapter: type) -> Any:
    if callable(getattr(obj, method, None)):
        return obj
    if callable(obj):
        logger.debug("Adapting %r with %s", obj, adapter.__name__)
        return adapter(obj)
    raise TypeError(
        f"{obj!r} has no {method}() method and is not callable"
    )


def as_reader(obj: Reader | Callable[[WritableBuffer], ReadResult]) -> Reader:
    """Return ``obj`` if it can read, otherwise wrap it in :class:`ReadFunc`.

    Objects with a ``read`` attribute are always used as objects, including
    :class:`unittest.mock.Mock` instances, which have every attribute. To use a
    ``Mock`` as a bare function, wrap it explicitly: ``ReadFunc(Mock(...))``.
    The same applies to the other ``as_*`` helpers.
    """
    return _coerce(obj, "read", ReadFunc)


def as_seeker(obj: Seeker | Callable[[int, int], SeekResult]) -> Seeker:
    return _coerce(obj, "seek", SeekFunc)


def as_closer(obj: Closer | Callable[[], Optional[BaseException]]) -> Closer:
    return _coerce(obj, "close", CloseFunc)


def as_stat_provider(obj: StatProvider | Callable[[], StatResult]) -> StatProvider:
    return _coerce(obj, "stat", StatFunc)
