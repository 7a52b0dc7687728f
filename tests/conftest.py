from __future__ import annotations

import pytest

from smartstock_client.auth_store import AuthStore
from smartstock_client.config import ClientConfig
from smartstock_client.http_client import HttpClient
from smartstock_client.models import Actor
from smartstock_client.notifications import RecordingNotifier
from smartstock_client.session_store import SessionStore

BASE_URL = "https://api.example.com"


@pytest.fixture
def config(tmp_path) -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE_URL, storage_dir=str(tmp_path))


@pytest.fixture
def storage(tmp_path) -> AuthStore:
    return AuthStore(base_dir=tmp_path)


@pytest.fixture
def store(storage: AuthStore) -> SessionStore:
    session_store = SessionStore(storage)
    session_store.rehydrate()
    return session_store


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def expired_calls() -> list[str]:
    return []


@pytest.fixture
def http(config: ClientConfig, store: SessionStore, notifier: RecordingNotifier, expired_calls: list[str]) -> HttpClient:
    return HttpClient(
        config=config,
        store=store,
        notifier=notifier,
        on_session_expired=lambda: expired_calls.append("login"),
    )


@pytest.fixture
def manager() -> Actor:
    return Actor(id="u-1", name="Maria Manager", email="maria@example.com", role="manager")


@pytest.fixture
def staff() -> Actor:
    return Actor(
        id="u-2",
        name="Sam Staff",
        email="sam@example.com",
        role="staff",
        department_id="D1",
        department_name="Electronics",
    )
