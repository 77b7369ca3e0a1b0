# tests/conftest.py
import pytest

from cyclering.core import log
from cyclering.core import metrics


@pytest.fixture(scope="session", autouse=True)
def _bootstrap_logging():
    # reads LOG_LEVEL / LOG_JSON / .env if available
    log.setup()
    yield


@pytest.fixture(autouse=True)
def _fresh_metrics():
    metrics.reset()
    yield
    metrics.reset()
