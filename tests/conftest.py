import logging

import pytest

from iohooks.config import IOHooksConfig, default_config

logger = logging.getLogger(__name__)


@pytest.fixture(autouse=True)
def stock_config():
    """Run every test with the default configuration, whatever earlier tests set."""
    with default_config(IOHooksConfig()):
        yield


@pytest.fixture(autouse=True)
def debug_logging(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.DEBUG, logger="iohooks")
    yield
