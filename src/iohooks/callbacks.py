"""Ready-made callbacks for :class:`iohooks.HookedReader`."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from iohooks.exceptions import HookTimeoutError
from iohooks.types import HookCallback

logger = logging.getLogger(__name__)


def one_shot(error: Optional[BaseException]) -> HookCallback:
    """Return ``error`` from the first read reaching the boundary, then disable."""

    def callback(index: int) -> tuple[int, Optional[BaseException]]:
        return -1, error

    return callback


def recurring(every: int, error: Optional[BaseException] = None) -> HookCallback:
    """Return ``error`` each time another ``every`` bytes have been read."""
    if every < 1:
        raise ValueError("every must be at least 1")

    def callback(index: int) -> tuple[int, Optional[BaseException]]:
        return every, error

    return callback


def sequence(*steps: tuple[int, Optional[BaseException]]) -> HookCallback:
    """Return ``steps[i - 1]`` on the i-th call, and disable the hook afterwards."""

    def callback(index: int) -> tuple[int, Optional[BaseException]]:
        if index <= len(steps):
            return steps[index - 1]
        return -1, None

    return callback


def notify(
    event: threading.Event,
    *,
    wait: Optional[threading.Event] = None,
    next_threshold: int = -1,
    timeout: Optional[float] = None,
) -> HookCallback:
    """
    Set ``event`` when the boundary is reached, so that another thread knows how
    far the consumer has read.

    Args:
        event: Set on every call.
        wait: If given, the reading thread blocks inside the read until it is set.
        next_threshold: Returned as the next threshold; disables the hook by
            default.
        timeout: Maximum time to wait for ``wait``. When it elapses the hook is
            disabled and the read returns a :class:`HookTimeoutError`.
    """

    def callback(index: int) -> tuple[int, Optional[BaseException]]:
        logger.debug("Hook #%d reached, notifying", index)
        event.set()
        if wait is not None and not wait.wait(timeout):
            return -1, HookTimeoutError(
                f"hook #{index} not released after {timeout} seconds"
            )
        return next_threshold, None

    return callback


class recording:
    """Wraps a callback and records the indices it is called with."""

    def __init__(self, callback: HookCallback):
        self._callback = callback
        self.calls: list[int] = []

    def __call__(self, index: int) -> tuple[int, Optional[BaseException]]:
        self.calls.append(index)
        return self._callback(index)
