"""
Pytest configuration and fixtures for gecho tests.

The app under test is always built through create_app with an explicit
logger writing into a StringIO, so no test depends on global log output.
"""
import io

import pytest
from fastapi.testclient import TestClient

from gecho.config import Settings
from gecho.logger import build_logger
from gecho.main import create_app

_ENV_VARS = ["GECHO_LISTEN", "GECHO_TIMEOUT", "GECHO_LOG_LEVEL"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep GECHO_* variables of the calling shell out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def log_stream():
    return io.StringIO()


@pytest.fixture
def logger(log_stream):
    return build_logger("DEBUG", log_stream, name="gecho.tests")


@pytest.fixture
def app(logger):
    return create_app(Settings(timeout=5), logger)


@pytest.fixture
def client(app):
    return TestClient(app, base_url="http://example.com")
