import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def reset_approve_throttle():
    """Approve requests are rate limited through the default cache; start each test empty."""
    cache.clear()
    yield
