"""Versioned migrations for the persisted session record.

The stored record has the shape ``{"version": N, "state": {...}}``. Records
written before versioning was introduced are bare ``state`` mappings and are
treated as version 0. Each step takes the state at version ``N`` and returns it
at ``N + 1``; ``migrate_session_record`` applies every pending step once and
reports whether anything changed so the caller can write the canonical shape
back.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Mapping

CURRENT_VERSION = 1

_LEGACY_USER_FIELDS = {
    "department_id": "departmentId",
    "department_name": "departmentName",
}


class MigrationError(ValueError):
    pass


def _structured_department_fields(state: dict[str, Any]) -> dict[str, Any]:
    user = state.get("user")
    if not isinstance(user, dict):
        return state
    for legacy_key, current_key in _LEGACY_USER_FIELDS.items():
        if legacy_key not in user:
            continue
        legacy_value = user.pop(legacy_key)
        if user.get(current_key) in (None, "") and legacy_value not in (None, ""):
            user[current_key] = legacy_value
    return state


_STEPS: dict[int, Callable[[dict[str, Any]], dict[str, Any]]] = {
    0: _structured_department_fields,
}


def _split_record(record: Mapping[str, Any]) -> tuple[int, dict[str, Any]]:
    if "state" in record and isinstance(record.get("state"), Mapping):
        version = record.get("version", 0)
        if isinstance(version, bool) or not isinstance(version, int) or version < 0:
            raise MigrationError(f"Unsupported session record version: {version!r}")
        return version, copy.deepcopy(dict(record["state"]))
    return 0, copy.deepcopy(dict(record))


def migrate_session_record(record: Mapping[str, Any]) -> tuple[dict[str, Any], bool]:
    """Return ``(canonical_record, migrated)`` for a stored session record."""
    if not isinstance(record, Mapping):
        raise MigrationError("Session record must be a JSON object")
    version, state = _split_record(record)
    if version > CURRENT_VERSION:
        raise MigrationError(
            f"Session record version {version} is newer than supported {CURRENT_VERSION}"
        )
    migrated = version != CURRENT_VERSION
    while version < CURRENT_VERSION:
        state = _STEPS[version](state)
        version += 1
    return {"version": CURRENT_VERSION, "state": state}, migrated
