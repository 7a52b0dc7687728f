from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"


class AuthError(ApiError):
    """Authentication failed or the access credential was rejected."""


class SessionExpiredError(AuthError):
    """The access credential expired and could not be refreshed."""


class PermissionDeniedError(ApiError):
    """The backend refused the action for the current actor."""


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class ConflictError(ApiError):
    """409 or conflict-style errors."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class BackendUnreachableError(TransportError):
    """The backend did not answer at all (connection refused, DNS, timeout)."""


class ActionDeniedError(Exception):
    """Raised locally when the authorization predicate denies an action."""

    def __init__(self, action: str, reason: str) -> None:
        self.action = action
        self.reason = reason
        super().__init__(f"{action} denied: {reason}")
