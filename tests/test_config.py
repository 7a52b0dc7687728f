from __future__ import annotations

import pytest

from smartstock_client.config import DEFAULT_SILENT_ERRORS, ConfigError, load_config

_ENV_KEYS = (
    "SMARTSTOCK_ENV",
    "SMARTSTOCK_API_BASE_URL",
    "SMARTSTOCK_API_BASE_URL_DEV",
    "SMARTSTOCK_API_BASE_URL_STAGING",
    "SMARTSTOCK_SILENT_ERRORS",
    "SMARTSTOCK_STORAGE_DIR",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_load_config_requires_base_url() -> None:
    with pytest.raises(ConfigError, match="SMARTSTOCK_API_BASE_URL"):
        load_config()


def test_load_config_profile(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SMARTSTOCK_ENV", "staging")
    monkeypatch.setenv("SMARTSTOCK_API_BASE_URL_STAGING", "https://staging.example.com/api/")
    cfg = load_config()
    assert cfg.api_base_url == "https://staging.example.com/api"
    assert cfg.env_name == "staging"
    assert cfg.normalized_env == "staging"


def test_load_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SMARTSTOCK_API_BASE_URL", "https://api.example.com")
    cfg = load_config()
    assert cfg.read_timeout_seconds == 30.0
    assert cfg.connect_timeout_seconds == 5.0
    assert cfg.health_interval_seconds == 30.0
    assert cfg.health_timeout_seconds == 5.0
    assert cfg.silent_errors == DEFAULT_SILENT_ERRORS
    assert cfg.storage_dir is None


def test_load_config_silent_errors_list(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SMARTSTOCK_API_BASE_URL", "https://api.example.com")
    monkeypatch.setenv("SMARTSTOCK_SILENT_ERRORS", "Invalid credentials, Account locked ,")
    cfg = load_config()
    assert cfg.silent_errors == ("Invalid credentials", "Account locked")


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("SMARTSTOCK_TIMEOUT_SECONDS", "0"),
        ("SMARTSTOCK_CONNECT_TIMEOUT_SECONDS", "0"),
        ("SMARTSTOCK_READ_TIMEOUT_SECONDS", "-1"),
        ("SMARTSTOCK_MAX_CONNECTIONS", "0"),
        ("SMARTSTOCK_HEALTH_INTERVAL_SECONDS", "0"),
        ("SMARTSTOCK_HEALTH_TIMEOUT_SECONDS", "0"),
    ],
)
def test_load_config_rejects_invalid_ranges(
    monkeypatch: pytest.MonkeyPatch,
    key: str,
    value: str,
) -> None:
    monkeypatch.setenv("SMARTSTOCK_API_BASE_URL", "https://api.example.com")
    monkeypatch.setenv(key, value)

    with pytest.raises(ConfigError, match=key):
        load_config()


@pytest.mark.parametrize("key", ["SMARTSTOCK_TIMEOUT_SECONDS", "SMARTSTOCK_MAX_CONNECTIONS"])
def test_load_config_rejects_invalid_types(monkeypatch: pytest.MonkeyPatch, key: str) -> None:
    monkeypatch.setenv("SMARTSTOCK_API_BASE_URL", "https://api.example.com")
    monkeypatch.setenv(key, "abc")

    with pytest.raises(ConfigError, match=key):
        load_config()
