class IOHooksError(Exception):
    """Base exception for all iohooks errors."""

    pass


class EndOfStreamError(IOHooksError, EOFError):
    """Signals that a reader has no more bytes to produce.

    Readers return the shared :data:`EOF` instance rather than raising it, so it
    can be compared by identity.
    """

    pass


EOF = EndOfStreamError("EOF")


class InjectedError(IOHooksError):
    """A failure injected by a hook callback."""

    def __init__(self, message: str = "injected error", index: int | None = None):
        super().__init__(message)
        self.index = index


class HookTimeoutError(IOHooksError, TimeoutError):
    """Returned by :func:`iohooks.notify` when it gives up waiting to be released."""

    pass


def is_eof(error: BaseException | None) -> bool:
    """Return True if ``error`` signals end of stream."""
    return isinstance(error, EndOfStreamError)
