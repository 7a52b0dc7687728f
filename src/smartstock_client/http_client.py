from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urljoin

import requests
from pydantic import ValidationError as PydanticValidationError
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import ApiError, BackendUnreachableError, SessionExpiredError, TransportError
from .models import RefreshResponse
from .notifications import (
    BACKEND_UNREACHABLE_MESSAGE,
    SESSION_EXPIRED_MESSAGE,
    LoggingNotifier,
    Notifier,
    is_silent,
)
from .session_store import SessionStore

logger = logging.getLogger(__name__)

REFRESH_PATH = "/auth/refresh"

Timeout = float | tuple[float, float]


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str
    refreshed: bool = False


class TokenRefresher:
    """Coalesces concurrent refresh attempts into one in-flight exchange.

    Callers hold the access token their request was sent with. If the store
    already carries a different token by the time a caller gets the lock,
    another caller refreshed first and the current token is reused.
    """

    def __init__(self, http: "HttpClient") -> None:
        self._http = http
        self._lock = threading.Lock()
        self.exchanges = 0

    def refresh(self, stale_token: str | None) -> str:
        store = self._http.store
        with self._lock:
            current = store.access_token
            if current is not None and current != stale_token:
                logger.info("token_refresh_coalesced")
                return current
            refresh_token = store.refresh_token
            if not refresh_token:
                # an earlier refresh failed while this caller was waiting
                raise _session_expired(None)
            self.exchanges += 1
            try:
                data = self._http.post_refresh(refresh_token)
                tokens = RefreshResponse.model_validate(data)
            except (ApiError, PydanticValidationError, ValueError) as exc:
                logger.warning("token_refresh_failed", extra={"error": type(exc).__name__})
                self._http.expire_session()
                raise _session_expired(exc) from exc
            store.update_tokens(tokens.access_token, tokens.refresh_token)
            logger.info("token_refresh_success")
            return tokens.access_token


def _session_expired(cause: Exception | None) -> SessionExpiredError:
    details = {"cause": type(cause).__name__} if cause is not None else None
    return SessionExpiredError(
        code="SESSION_EXPIRED",
        message=SESSION_EXPIRED_MESSAGE,
        details=details,
        status_code=401,
        raw_payload=None,
    )


@dataclass
class HttpClient:
    config: ClientConfig
    store: SessionStore
    notifier: Notifier | None = None
    on_session_expired: Callable[[], None] | None = None
    session: requests.Session | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
                max_retries=0,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)
        if self.notifier is None:
            self.notifier = LoggingNotifier()
        self.refresher = TokenRefresher(self)

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        authenticated: bool = True,
        notify_errors: bool = True,
        timeout: Timeout | None = None,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> dict[str, Any] | list[Any] | None:
        normalized_method = method.upper()
        url = self._build_url(path)
        started = time.monotonic()
        refreshed = False

        token = self.store.access_token if authenticated else None
        try:
            response = self._send(
                normalized_method, url, token=token, headers=headers,
                json_body=json_body, params=params, timeout=timeout,
            )
            if response.status_code == 401 and authenticated and self.store.refresh_token:
                new_token = self.refresher.refresh(stale_token=token)
                refreshed = True
                logger.info(
                    "request_retry_after_refresh",
                    extra={"method": normalized_method, "path": path},
                )
                response = self._send(
                    normalized_method, url, token=new_token, headers=headers,
                    json_body=json_body, params=params, timeout=timeout,
                )
        except SessionExpiredError:
            self._record_operation(module, operation, started, "session_expired", refreshed)
            raise
        except TransportError as exc:
            self._record_operation(module, operation, started, "unreachable", refreshed)
            if notify_errors:
                self._notify(exc.message)
            raise

        if response.ok:
            self._record_operation(module, operation, started, "success", refreshed)
            if not response.content:
                return None
            return response.json()

        error = self._error_from_response(response)
        self._record_operation(module, operation, started, "error", refreshed)
        logger.info(
            "request_failed",
            extra={"method": normalized_method, "path": path, "status": response.status_code},
        )
        if notify_errors and not is_silent(error, self.config.silent_errors):
            self._notify(error.message)
        raise error

    def post_refresh(self, refresh_token: str) -> dict[str, Any] | list[Any] | None:
        """Exchange a refresh credential for a new access credential.

        Sent without an ``Authorization`` header and never recovered.
        """
        response = self._send(
            "POST",
            self._build_url(REFRESH_PATH),
            token=None,
            json_body={"refreshToken": refresh_token},
        )
        if not response.ok:
            raise self._error_from_response(response)
        return response.json()

    def expire_session(self) -> None:
        """Logout cascade after an unrecoverable authentication failure."""
        logger.warning("session_expired")
        self.store.logout()
        self._notify(SESSION_EXPIRED_MESSAGE)
        if self.on_session_expired:
            self.on_session_expired()

    def _send(
        self,
        method: str,
        url: str,
        *,
        token: str | None,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        timeout: Timeout | None = None,
    ) -> requests.Response:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        try:
            return self.session.request(
                method=method,
                url=url,
                headers=request_headers,
                json=json_body,
                params=params,
                timeout=timeout if timeout is not None else self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as exc:
            logger.warning("backend_unreachable", extra={"url": url, "error": type(exc).__name__})
            raise BackendUnreachableError(
                code="BACKEND_UNREACHABLE",
                message=BACKEND_UNREACHABLE_MESSAGE,
                details={"type": type(exc).__name__, "reason": str(exc)},
                status_code=0,
                raw_payload=None,
            ) from exc

    def _error_from_response(self, response: requests.Response) -> ApiError:
        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text} if response.text else {}
        if not isinstance(payload, dict):
            payload = {"details": payload}
        return map_error(response.status_code, payload)

    def _notify(self, message: str) -> None:
        if self.notifier is not None:
            self.notifier.error(message)

    def _record_operation(
        self, module: str, operation: str, started: float, result: str, refreshed: bool
    ) -> None:
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            refreshed=refreshed,
        )
