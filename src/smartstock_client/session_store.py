from __future__ import annotations

import logging
import threading
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .auth_store import AuthStore, StoredRecordError
from .migrations import CURRENT_VERSION, MigrationError, migrate_session_record
from .models import Actor, SessionData

logger = logging.getLogger(__name__)


class SessionStore:
    """Single source of truth for the signed-in actor and its credentials.

    Every mutation persists the new state through the ``AuthStore`` before
    returning. ``is_authenticated`` is derived from the actor and the access
    token and is never taken from storage.
    """

    def __init__(self, storage: AuthStore | None = None) -> None:
        self.storage = storage or AuthStore()
        self._lock = threading.RLock()
        self._actor: Actor | None = None
        self._access_token: str | None = None
        self._refresh_token: str | None = None
        self._rehydrated = False

    @property
    def actor(self) -> Actor | None:
        return self._actor

    @property
    def access_token(self) -> str | None:
        return self._access_token

    @property
    def refresh_token(self) -> str | None:
        return self._refresh_token

    @property
    def is_authenticated(self) -> bool:
        return self._actor is not None and self._access_token is not None

    def snapshot(self) -> SessionData:
        with self._lock:
            return SessionData(
                user=self._actor.model_copy() if self._actor else None,
                access_token=self._access_token,
                refresh_token=self._refresh_token,
                is_authenticated=self.is_authenticated,
            )

    def login(self, actor: Actor, access_token: str, refresh_token: str) -> None:
        with self._lock:
            self._actor = actor
            self._access_token = access_token
            self._refresh_token = refresh_token
            self._persist()
        logger.info("session_login", extra={"user_id": str(actor.id), "role": actor.role})

    def logout(self) -> None:
        with self._lock:
            was_authenticated = self.is_authenticated
            self._actor = None
            self._access_token = None
            self._refresh_token = None
            self._persist()
        if was_authenticated:
            logger.info("session_logout")

    def update_tokens(self, access_token: str, refresh_token: str | None = None) -> None:
        with self._lock:
            if self._actor is None:
                logger.debug("session_update_tokens_ignored")
                return
            self._access_token = access_token
            if refresh_token:
                self._refresh_token = refresh_token
            self._persist()

    def update_user(self, **changes: Any) -> None:
        with self._lock:
            if self._actor is None:
                return
            merged = {**self._actor.model_dump(), **changes}
            self._actor = Actor.model_validate(merged)
            self._persist()

    def rehydrate(self) -> SessionData:
        with self._lock:
            if self._rehydrated:
                return self.snapshot()
            self._rehydrated = True
            try:
                record = self.storage.read()
            except StoredRecordError:
                logger.warning("session_rehydrate_corrupt", exc_info=True)
                self._discard_stored()
                return self.snapshot()
            except OSError:
                logger.warning("session_rehydrate_storage_unavailable", exc_info=True)
                return self.snapshot()
            if record is None:
                return self.snapshot()
            try:
                canonical, migrated = migrate_session_record(record)
                data = SessionData.model_validate(canonical["state"])
            except (MigrationError, PydanticValidationError):
                logger.warning("session_rehydrate_invalid", exc_info=True)
                self._discard_stored()
                return self.snapshot()

            self._actor = data.user
            self._access_token = data.access_token
            self._refresh_token = data.refresh_token
            if migrated:
                logger.info("session_record_migrated", extra={"version": CURRENT_VERSION})
                try:
                    self._persist()
                except OSError:
                    logger.warning("session_record_write_back_failed", exc_info=True)
            logger.info("session_rehydrated", extra={"authenticated": self.is_authenticated})
            return self.snapshot()

    def _discard_stored(self) -> None:
        self._actor = None
        self._access_token = None
        self._refresh_token = None
        try:
            self.storage.clear()
        except OSError:
            logger.warning("session_store_clear_failed", exc_info=True)

    def _persist(self) -> None:
        state = self.snapshot().model_dump(by_alias=True, mode="json")
        self.storage.write({"version": CURRENT_VERSION, "state": state})
