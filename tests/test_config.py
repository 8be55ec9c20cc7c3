import pytest
from pydantic import ValidationError

from gecho.config import Settings


def test_defaults():
    settings = Settings.from_env()
    assert settings.listen == ":8090"
    assert settings.host == "0.0.0.0"
    assert settings.port == 8090
    assert settings.timeout == 60
    assert settings.log_level == "INFO"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("GECHO_LISTEN", "127.0.0.1:9000")
    monkeypatch.setenv("GECHO_TIMEOUT", "5")
    monkeypatch.setenv("GECHO_LOG_LEVEL", "warn")
    settings = Settings.from_env()
    assert settings.host == "127.0.0.1"
    assert settings.port == 9000
    assert settings.timeout == 5
    assert settings.log_level == "WARNING"


def test_explicit_values_win_over_env(monkeypatch):
    monkeypatch.setenv("GECHO_LISTEN", "127.0.0.1:9000")
    settings = Settings.from_env(listen="[::1]:8080", timeout=None)
    assert settings.host == "::1"
    assert settings.port == 8080
    assert settings.timeout == 60


def test_empty_env_means_default(monkeypatch):
    monkeypatch.setenv("GECHO_LISTEN", "  ")
    assert Settings.from_env().listen == ":8090"


@pytest.mark.parametrize("listen", ["8090", "host:", "host:http", ":0", ":70000", "[::1"])
def test_invalid_listen(listen):
    with pytest.raises(ValidationError):
        Settings(listen=listen)


def test_invalid_timeout_and_level():
    with pytest.raises(ValidationError):
        Settings(timeout=0)
    with pytest.raises(ValidationError):
        Settings(log_level="loud")


def test_invalid_timeout_env(monkeypatch):
    monkeypatch.setenv("GECHO_TIMEOUT", "soon")
    with pytest.raises(ValueError, match="invalid_env:GECHO_TIMEOUT"):
        Settings.from_env()
