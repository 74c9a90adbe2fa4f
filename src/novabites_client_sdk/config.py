from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "https://novabites-production.up.railway.app"
DEFAULT_TIMEZONE = "America/Bogota"
DEFAULT_APP_URL = "http://localhost:3000"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 10.0
    retries: int = 2
    retry_backoff_seconds: float = 0.3
    max_connections: int = 10
    verify_ssl: bool = True
    timezone: str = DEFAULT_TIMEZONE
    app_url: str = DEFAULT_APP_URL

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


def _require(values: dict[str, str | None], required: Iterable[str]) -> None:
    missing = [key for key in required if not values.get(key)]
    if missing:
        raise ConfigError(f"Missing required config values: {', '.join(missing)}")


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def _read_timezone(name: str, default: str) -> str:
    raw = (os.getenv(name) or default).strip()
    try:
        ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: unknown time zone {raw!r}") from exc
    return raw


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("NOVABITES_ENV") or "prod").strip()
    env_key = env_name.upper()

    api_base_url = (
        (os.getenv(f"NOVABITES_API_BASE_URL_{env_key}") or "").strip()
        or (os.getenv("NOVABITES_API_BASE_URL") or "").strip()
        or DEFAULT_API_BASE_URL
    )
    _validate(
        api_base_url.startswith(("http://", "https://")),
        f"Invalid NOVABITES_API_BASE_URL: expected an http(s) URL, got {api_base_url!r}",
    )

    timeout_seconds = _read_float("NOVABITES_TIMEOUT_SECONDS", "10")
    _validate(
        timeout_seconds > 0,
        f"Invalid NOVABITES_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}",
    )

    connect_timeout_seconds = _read_float(
        "NOVABITES_CONNECT_TIMEOUT_SECONDS", str(min(timeout_seconds, 5.0))
    )
    _validate(
        connect_timeout_seconds > 0,
        (
            "Invalid NOVABITES_CONNECT_TIMEOUT_SECONDS: "
            f"expected > 0, got {connect_timeout_seconds}"
        ),
    )

    read_timeout_seconds = _read_float(
        "NOVABITES_READ_TIMEOUT_SECONDS",
        str(max(timeout_seconds, connect_timeout_seconds)),
    )
    _validate(
        read_timeout_seconds > 0,
        f"Invalid NOVABITES_READ_TIMEOUT_SECONDS: expected > 0, got {read_timeout_seconds}",
    )

    retries = _read_int("NOVABITES_RETRIES", "2")
    _validate(retries >= 0, f"Invalid NOVABITES_RETRIES: expected >= 0, got {retries}")

    retry_backoff_seconds = _read_float("NOVABITES_RETRY_BACKOFF_SECONDS", "0.3")
    _validate(
        retry_backoff_seconds >= 0,
        (
            "Invalid NOVABITES_RETRY_BACKOFF_SECONDS: "
            f"expected >= 0, got {retry_backoff_seconds}"
        ),
    )

    max_connections = _read_int("NOVABITES_MAX_CONNECTIONS", "10")
    _validate(
        max_connections >= 1,
        f"Invalid NOVABITES_MAX_CONNECTIONS: expected >= 1, got {max_connections}",
    )

    verify_ssl = _coerce_bool(os.getenv("NOVABITES_VERIFY_SSL"), True)
    timezone = _read_timezone("NOVABITES_TIMEZONE", DEFAULT_TIMEZONE)
    app_url = (os.getenv("NOVABITES_APP_URL") or DEFAULT_APP_URL).strip()

    _require({"NOVABITES_APP_URL": app_url}, ["NOVABITES_APP_URL"])

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout_seconds,
        read_timeout_seconds=read_timeout_seconds,
        retries=retries,
        retry_backoff_seconds=retry_backoff_seconds,
        max_connections=max_connections,
        verify_ssl=verify_ssl,
        timezone=timezone,
        app_url=app_url.rstrip("/"),
    )
