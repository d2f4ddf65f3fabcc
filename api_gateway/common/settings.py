"""
Application settings loaded from environment variables.
The gateway reads one fixed set of variables, each with a default, and freezes them into a
single `Settings` value that the composition root passes to every component.
Postgres fields are accepted so the gateway shares the config shape of the backing services.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEBUG_MODE: Final[str] = "debug"
TEST_MODE: Final[str] = "test"
RELEASE_MODE: Final[str] = "release"

ENVIRONMENT_MODES: Final[frozenset[str]] = frozenset({DEBUG_MODE, TEST_MODE, RELEASE_MODE})

DEFAULTS: Final[dict[str, str]] = {
    "SERVICE_NAME": "user_service",
    "ENVIRONMENT": DEBUG_MODE,
    "VERSION": "1.0",
    "POSTGRES_HOST": "localhost",
    "POSTGRES_PORT": "5432",
    "POSTGRES_USER": "new",
    "POSTGRES_PASSWORD": "1",
    "POSTGRES_DATABASE": "user_service",
    "POSTGRES_MAX_CONNECTIONS": "30",
    "USER_SERVICE_HOST": "localhost",
    "USER_SERVICE_PORT": "8081",
    "LOG_LEVEL": "debug",
    "HTTP_PORT": ":1234",
    "RPC_TIMEOUT_SECONDS": "30",
    "RPC_CONNECT_TIMEOUT_SECONDS": "5",
    "ALLOWED_ORIGINS": "*",
    "STATIC_DIR": "./static/images",
}


class Settings(BaseModel):
    """Typed runtime configuration."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    SERVICE_NAME: str
    ENVIRONMENT: str
    VERSION: str

    POSTGRES_HOST: str
    POSTGRES_PORT: int
    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    POSTGRES_DATABASE: str
    POSTGRES_MAX_CONNECTIONS: int

    USER_SERVICE_HOST: str
    USER_SERVICE_PORT: str

    LOG_LEVEL: str
    HTTP_PORT: str

    RPC_TIMEOUT_SECONDS: float = Field(gt=0)
    RPC_CONNECT_TIMEOUT_SECONDS: float = Field(gt=0)
    API_KEY: str | None = None
    ALLOWED_ORIGINS: tuple[str, ...] = ("*",)
    STATIC_DIR: str = "./static/images"

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, value: str) -> str:
        if value not in ENVIRONMENT_MODES:
            supported = ", ".join(sorted(ENVIRONMENT_MODES))
            raise ValueError(f"ENVIRONMENT must be one of: {supported}")
        return value

    @field_validator("HTTP_PORT")
    @classmethod
    def validate_http_port(cls, value: str) -> str:
        _split_listen_address(value)
        return value

    @property
    def user_service_target(self) -> str:
        return f"{self.USER_SERVICE_HOST}:{self.USER_SERVICE_PORT}"

    @property
    def listen_host(self) -> str:
        return _split_listen_address(self.HTTP_PORT)[0]

    @property
    def listen_port(self) -> int:
        return _split_listen_address(self.HTTP_PORT)[1]


def _split_listen_address(value: str) -> tuple[str, int]:
    """Split `host:port`, `:port`, or `port` into a bindable pair."""

    host, _, port_text = value.strip().rpartition(":")
    if not port_text.isdigit():
        raise ValueError(f"HTTP_PORT must end with a numeric port, got {value!r}")
    port = int(port_text)
    if not 0 < port < 65536:
        raise ValueError(f"HTTP_PORT is out of range: {value!r}")
    return host or "0.0.0.0", port


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def load_settings(*, load_env: bool = True) -> Settings:
    """Load and validate settings from an optional env file and the process environment."""

    if load_env:
        load_dotenv(os.getenv("ENV_FILE") or None)

    values: dict[str, object] = {key: os.getenv(key, default) for key, default in DEFAULTS.items()}
    values["ALLOWED_ORIGINS"] = _env_list("ALLOWED_ORIGINS", DEFAULTS["ALLOWED_ORIGINS"])
    values["API_KEY"] = os.getenv("API_KEY") or None

    try:
        return Settings.model_validate(values)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached accessor for application settings."""

    return load_settings()
