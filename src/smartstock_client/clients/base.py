from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..http_client import HttpClient


@dataclass
class BaseClient:
    http: HttpClient
    module: str = "unknown"

    def _request(self, method: str, path: str, **kwargs: Any):
        kwargs.setdefault("module", self.module)
        return self.http.request(method, path, **kwargs)


def unwrap(payload: Any, key: str) -> Any:
    """Return ``payload[key]`` when the backend wraps a single entity."""
    if isinstance(payload, dict) and isinstance(payload.get(key), dict):
        return payload[key]
    return payload
