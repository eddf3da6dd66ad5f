"""Test instrumentation for code reading byte streams.

:class:`HookedReader` runs a callback after a given number of bytes have been read
from a stream, typically to inject an error. :class:`MockFile` is a file-like object
whose read, seek, close and stat operations can each be replaced by a function.
"""

from iohooks.adapters import (
    CloseFunc,
    ReadFunc,
    SeekFunc,
    StatFunc,
    as_closer,
    as_reader,
    as_seeker,
    as_stat_provider,
)
from iohooks.callbacks import notify, one_shot, recording, recurring, sequence
from iohooks.config import (
    IOHooksConfig,
    default_config,
    get_default_config,
    set_default_config,
    set_default_config_fields,
)
from iohooks.exceptions import (
    EOF,
    EndOfStreamError,
    HookTimeoutError,
    InjectedError,
    IOHooksError,
    is_eof,
)
from iohooks.hooked import HookedReader, new_hooked_reader
from iohooks.io_adapters import ReaderIO, StreamReader, bytes_reader, hook_binaryio
from iohooks.mock_file import MockFile, MockFileInfo
from iohooks.types import (
    Closer,
    FileInfo,
    HookCallback,
    ReadResult,
    Reader,
    SeekResult,
    Seeker,
    StatProvider,
    StatResult,
)

__all__ = [
    # Hooked reader
    "HookedReader",
    "new_hooked_reader",
    "one_shot",
    "recurring",
    "sequence",
    "notify",
    "recording",
    # Mock file
    "MockFile",
    "MockFileInfo",
    # Function adapters
    "ReadFunc",
    "SeekFunc",
    "CloseFunc",
    "StatFunc",
    "as_reader",
    "as_seeker",
    "as_closer",
    "as_stat_provider",
    # Python stream bridges
    "StreamReader",
    "ReaderIO",
    "bytes_reader",
    "hook_binaryio",
    # Types
    "Reader",
    "Seeker",
    "Closer",
    "StatProvider",
    "FileInfo",
    "HookCallback",
    "ReadResult",
    "SeekResult",
    "StatResult",
    # Exceptions
    "IOHooksError",
    "EndOfStreamError",
    "InjectedError",
    "HookTimeoutError",
    "EOF",
    "is_eof",
    # Configuration
    "IOHooksConfig",
    "get_default_config",
    "set_default_config",
    "set_default_config_fields",
    "default_config",
]
