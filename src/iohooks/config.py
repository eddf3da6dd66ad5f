from __future__ import annotations

import contextvars
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

ZERO_TIME = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class IOHooksConfig:
    """Defaults used by :class:`iohooks.MockFile` when a capability is not set."""

    default_file_name: str = "dummyfile"
    default_file_mode: int = 0o644
    default_file_mtime: datetime = field(default=ZERO_TIME)


_default_config_var: contextvars.ContextVar[IOHooksConfig] = contextvars.ContextVar(
    "iohooks_default_config", default=IOHooksConfig()
)


def get_default_config() -> IOHooksConfig:
    """Return the current default configuration."""
    return _default_config_var.get()


def set_default_config(config: IOHooksConfig) -> None:
    """Set the default configuration for the current context."""
    _default_config_var.set(config)


def set_default_config_fields(**kwargs: Any) -> None:
    """Replace some fields of the default configuration."""
    config = get_default_config()
    config = replace(config, **kwargs)
    set_default_config(config)


@contextmanager
def default_config(config: IOHooksConfig | None = None, **kwargs: Any):
    """Temporarily use ``config`` as the default configuration."""
    if config is None:
        config = get_default_config()

    if kwargs:
        config = replace(config, **kwargs)

    token = _default_config_var.set(config)
    try:
        yield
    finally:
        _default_config_var.reset(token)
