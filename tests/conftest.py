import os

import pytest


@pytest.fixture(autouse=True)
def set_debug_var():
    os.environ["TIMED_FUTURES_DEBUG"] = "1"
    yield
    del os.environ["TIMED_FUTURES_DEBUG"]


@pytest.fixture(scope="session", autouse=True)
def dump_metrics():
    yield

    try:
        import prometheus_client  # pylint: disable=import-error
    except Exception:
        return

    metrics = prometheus_client.generate_latest().decode("utf-8")
    print(metrics)
