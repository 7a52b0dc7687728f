from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Iterable

from dotenv import load_dotenv

DEFAULT_SILENT_ERRORS = ("Invalid credentials", "User not found")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 30.0
    max_connections: int = 20
    verify_ssl: bool = True
    health_interval_seconds: float = 30.0
    health_timeout_seconds: float = 5.0
    silent_errors: tuple[str, ...] = field(default=DEFAULT_SILENT_ERRORS)
    storage_dir: str | None = None

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()

    @property
    def timeout(self) -> tuple[float, float]:
        return (self.connect_timeout_seconds, self.read_timeout_seconds)


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


def _read_list(name: str, default: Iterable[str]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return tuple(default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("SMARTSTOCK_ENV") or "dev").strip()
    env_key = env_name.upper()

    api_base_url = (
        (os.getenv(f"SMARTSTOCK_API_BASE_URL_{env_key}") or "").strip()
        or (os.getenv("SMARTSTOCK_API_BASE_URL") or "").strip()
    )

    timeout_seconds = _read_float("SMARTSTOCK_TIMEOUT_SECONDS", "30")
    _validate(
        timeout_seconds > 0,
        f"Invalid SMARTSTOCK_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}",
    )

    connect_timeout_seconds = _read_float(
        "SMARTSTOCK_CONNECT_TIMEOUT_SECONDS", str(min(timeout_seconds, 5.0))
    )
    _validate(
        connect_timeout_seconds > 0,
        (
            "Invalid SMARTSTOCK_CONNECT_TIMEOUT_SECONDS: "
            f"expected > 0, got {connect_timeout_seconds}"
        ),
    )

    read_timeout_seconds = _read_float(
        "SMARTSTOCK_READ_TIMEOUT_SECONDS",
        str(max(timeout_seconds, connect_timeout_seconds)),
    )
    _validate(
        read_timeout_seconds > 0,
        f"Invalid SMARTSTOCK_READ_TIMEOUT_SECONDS: expected > 0, got {read_timeout_seconds}",
    )

    max_connections = _read_int("SMARTSTOCK_MAX_CONNECTIONS", "20")
    _validate(
        max_connections >= 1,
        f"Invalid SMARTSTOCK_MAX_CONNECTIONS: expected >= 1, got {max_connections}",
    )

    health_interval_seconds = _read_float("SMARTSTOCK_HEALTH_INTERVAL_SECONDS", "30")
    _validate(
        health_interval_seconds > 0,
        (
            "Invalid SMARTSTOCK_HEALTH_INTERVAL_SECONDS: "
            f"expected > 0, got {health_interval_seconds}"
        ),
    )

    health_timeout_seconds = _read_float("SMARTSTOCK_HEALTH_TIMEOUT_SECONDS", "5")
    _validate(
        health_timeout_seconds > 0,
        (
            "Invalid SMARTSTOCK_HEALTH_TIMEOUT_SECONDS: "
            f"expected > 0, got {health_timeout_seconds}"
        ),
    )

    verify_ssl = _coerce_bool(os.getenv("SMARTSTOCK_VERIFY_SSL"), True)
    silent_errors = _read_list("SMARTSTOCK_SILENT_ERRORS", DEFAULT_SILENT_ERRORS)
    storage_dir = (os.getenv("SMARTSTOCK_STORAGE_DIR") or "").strip() or None

    values = {"SMARTSTOCK_API_BASE_URL": api_base_url}
    _require(values, ["SMARTSTOCK_API_BASE_URL"])

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout_seconds,
        read_timeout_seconds=read_timeout_seconds,
        max_connections=max_connections,
        verify_ssl=verify_ssl,
        health_interval_seconds=health_interval_seconds,
        health_timeout_seconds=health_timeout_seconds,
        silent_errors=silent_errors,
        storage_dir=storage_dir,
    )
