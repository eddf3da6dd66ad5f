"""A file-like object assembled from independently mockable capabilities."""

from __future__ import annotations

import io
import stat as stat_module
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from iohooks.adapters import as_closer, as_reader, as_seeker, as_stat_provider
from iohooks.config import ZERO_TIME, get_default_config
from iohooks.exceptions import EOF
from iohooks.types import ReadResult, SeekResult, StatResult, WritableBuffer


@dataclass(frozen=True)
class MockFileInfo:
    """Plain value implementing :class:`iohooks.types.FileInfo`."""

    name: str = ""
    """Base name of the file."""

    size: int = 0
    """Length in bytes."""

    mode: int = 0
    """Permission bits, e.g. ``0o644``."""

    mod_time: datetime = field(default=ZERO_TIME)

    is_dir: bool = False

    def sys(self) -> Any:
        return None

    # os.stat_result-like view -----------------------------------------
    @property
    def st_size(self) -> int:
        return self.size

    @property
    def st_mode(self) -> int:
        file_type = stat_module.S_IFDIR if self.is_dir else stat_module.S_IFREG
        return file_type | self.mode

    @property
    def st_mtime(self) -> float:
        mod_time = self.mod_time
        if mod_time.tzinfo is None:
            mod_time = mod_time.replace(tzinfo=timezone.utc)
        return mod_time.timestamp()


@dataclass
class MockFile:
    """
    A reader, seeker, closer and stat provider bundled into one file-like object,
    each of which can be given as an object or as a bare function.

    When a member is None its operation does nothing useful: ``read`` only
    returns ``(0, EOF)``, ``seek`` returns the requested offset (as if ``whence``
    was always ``SEEK_SET``), ``close`` returns no error and ``stat`` returns a
    dummy :class:`MockFileInfo` of length 0.

    Results of the delegates are returned as they are, without interpretation.

    A :class:`unittest.mock.Mock` delegate is used as an object: configure
    ``mock.read.return_value`` and friends, or wrap it in :class:`ReadFunc`,
    :class:`SeekFunc`, :class:`CloseFunc` or :class:`StatFunc` to use it as a
    function.
    """

    reader: Optional[Any] = None
    seeker: Optional[Any] = None
    closer: Optional[Any] = None
    stat_provider: Optional[Any] = None

    def read(self, buf: WritableBuffer, /) -> ReadResult:
        if self.reader is not None:
            return as_reader(self.reader).read(buf)
        return ReadResult(0, EOF)

    def seek(self, offset: int, whence: int = io.SEEK_SET, /) -> SeekResult:
        if self.seeker is not None:
            return as_seeker(self.seeker).seek(offset, whence)
        return SeekResult(offset, None)

    def close(self) -> Optional[BaseException]:
        if self.closer is not None:
            return as_closer(self.closer).close()
        return None

    def stat(self) -> StatResult:
        if self.stat_provider is not None:
            return as_stat_provider(self.stat_provider).stat()
        config = get_default_config()
        info = MockFileInfo(
            name=config.default_file_name,
            mode=config.default_file_mode,
            mod_time=config.default_file_mtime,
        )
        return StatResult(info, None)
