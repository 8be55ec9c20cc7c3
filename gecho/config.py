"""Process configuration for the echo server."""
from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from gecho.env import env_int, env_str
from gecho.service.netaddr import split_host_port

DEFAULT_LISTEN = ":8090"
DEFAULT_TIMEOUT = 60
DEFAULT_HOST = "0.0.0.0"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """Listen address, timeout and log level, read once at startup."""

    listen: str = DEFAULT_LISTEN
    timeout: int = Field(default=DEFAULT_TIMEOUT, gt=0)
    log_level: str = "INFO"

    @field_validator("listen")
    @classmethod
    def _validate_listen(cls, value: str) -> str:
        host, port = split_host_port(value.strip())
        if not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError("invalid_listen_address")
        if host.startswith("[") or host.endswith("]"):
            raise ValueError("invalid_listen_address")
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level == "WARN":
            level = "WARNING"
        if level not in LOG_LEVELS:
            raise ValueError("invalid_log_level")
        return level

    @property
    def host(self) -> str:
        host, _ = split_host_port(self.listen)
        return host or DEFAULT_HOST

    @property
    def port(self) -> int:
        _, port = split_host_port(self.listen)
        return int(port)

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        """Build settings from GECHO_* variables, then apply non-None overrides."""
        values = {
            "listen": env_str("GECHO_LISTEN", DEFAULT_LISTEN),
            "timeout": env_int("GECHO_TIMEOUT", DEFAULT_TIMEOUT),
            "log_level": env_str("GECHO_LOG_LEVEL", "INFO"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
