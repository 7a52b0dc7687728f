from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Protocol

from .error_mapper import error_message
from .exceptions import ApiError

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = "Session expired. Please login again."
BACKEND_UNREACHABLE_MESSAGE = (
    "Cannot reach the SmartStock server. Check that the backend is running and try again."
)


class Notifier(Protocol):
    def error(self, message: str) -> None: ...


@dataclass
class LoggingNotifier:
    """Default sink: user-visible notifications go to the log."""

    name: str = "smartstock_client.notify"

    def error(self, message: str) -> None:
        logging.getLogger(self.name).error(message)


@dataclass
class RecordingNotifier:
    messages: list[str] = field(default_factory=list)

    def error(self, message: str) -> None:
        self.messages.append(message)


def is_silent(error: ApiError, silent_errors: Iterable[str]) -> bool:
    """True when callers handle this error inline and no notification is wanted."""
    payload = error.raw_payload if isinstance(error.raw_payload, dict) else None
    message = error_message(payload) or error.message
    return message in set(silent_errors)


@dataclass(frozen=True)
class UserFacingError:
    message: str
    details: str | None = None

    @property
    def technical_details(self) -> str | None:
        if self.details:
            return self.details
        return None


def to_user_facing_error(exc: ApiError) -> UserFacingError:
    primary = exc.message.strip() or "Request failed"
    details = f"{exc.code} (HTTP {exc.status_code})"
    if exc.details:
        details = f"{details}: {exc.details}"
    return UserFacingError(message=primary, details=details)
