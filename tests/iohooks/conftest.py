import pytest

from iohooks import InjectedError


@pytest.fixture
def an_error() -> InjectedError:
    return InjectedError("An Error")
