import pytest

from library import Library
from metrics import MetricsRegistry


@pytest.fixture
def metrics():
    return MetricsRegistry()


@pytest.fixture
def lib(metrics):
    # Fresh catalog per test; Library instances share nothing
    return Library(metrics)
