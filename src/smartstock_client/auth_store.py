from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir

logger = logging.getLogger(__name__)

STORAGE_KEY = "smartstock-auth"


class StoredRecordError(ValueError):
    pass


@dataclass
class AuthStore:
    """Durable storage for the single namespaced session record."""

    app_name: str = "smartstock"
    key: str = STORAGE_KEY
    base_dir: str | Path | None = None

    def _path(self) -> Path:
        base = Path(self.base_dir) if self.base_dir else Path(user_data_dir(self.app_name, "SmartStock"))
        base.mkdir(parents=True, exist_ok=True)
        return base / f"{self.key}.json"

    def write(self, record: dict[str, Any]) -> None:
        path = self._path()
        path.write_text(json.dumps(record, indent=2))
        try:
            path.chmod(0o600)
        except OSError:
            logger.debug("session_store_chmod_unsupported", extra={"path": str(path)})

    def read(self) -> dict[str, Any] | None:
        path = self._path()
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            raise StoredRecordError(f"Unreadable session record at {path}") from exc
        if not isinstance(data, dict):
            raise StoredRecordError(f"Session record at {path} is not a JSON object")
        return data

    def clear(self) -> None:
        path = self._path()
        if path.exists():
            path.unlink()
