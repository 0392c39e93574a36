# type: ignore
import pytest

from bfemu.runtime.settings import Strategy


@pytest.fixture(params=list(Strategy), ids=lambda s: s.value)
def strategy(request):
    yield request.param
