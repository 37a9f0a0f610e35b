import os

import pytest

from gcplogs import bootstrap, timefmt


@pytest.fixture(autouse=True)
def clear_env():
    keys = [
        "GOOGLE_CLOUD_PROJECT",
        "GCPLOGS_LEVEL",
        "GCPLOGS_STREAM",
        "GCPLOGS_ENABLED",
    ]
    original = {key: os.getenv(key) for key in keys}
    for key in keys:
        if key in os.environ:
            del os.environ[key]
    yield
    for key, value in original.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


@pytest.fixture(autouse=True)
def reset_state():
    timefmt.default_cache().reset()
    yield
    bootstrap.shutdown()
    timefmt.default_cache().reset()
