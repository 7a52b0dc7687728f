from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable

from ..exceptions import ApiError
from .base import BaseClient

logger = logging.getLogger(__name__)


@dataclass
class HealthClient(BaseClient):
    module: str = "health"

    def health(self, timeout: float | None = None) -> dict:
        return self._request(
            "GET",
            "/health",
            authenticated=False,
            notify_errors=False,
            timeout=timeout,
            operation="health",
        ) or {}


class HealthMonitor:
    """Polls the health endpoint on a fixed interval from a daemon thread.

    Each check is bounded by ``timeout_seconds``; ``stop`` wakes the thread
    immediately instead of waiting out the interval.
    """

    def __init__(
        self,
        client: HealthClient,
        *,
        interval_seconds: float,
        timeout_seconds: float,
        on_change: Callable[[bool], None] | None = None,
    ) -> None:
        self.client = client
        self.interval_seconds = interval_seconds
        self.timeout_seconds = timeout_seconds
        self.on_change = on_change
        self.reachable: bool | None = None
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def check(self) -> bool:
        try:
            self.client.health(timeout=self.timeout_seconds)
        except ApiError as exc:
            logger.warning("health_check_failed", extra={"code": exc.code})
            reachable = False
        except ValueError:
            # answered with a non-JSON body; the server is still up
            reachable = True
        else:
            reachable = True
        if reachable != self.reachable:
            self.reachable = reachable
            logger.info("health_status_changed", extra={"reachable": reachable})
            if self.on_change:
                self.on_change(reachable)
        return reachable

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="smartstock-health", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        while not self._stop.is_set():
            self.check()
            if self._stop.wait(self.interval_seconds):
                break
