from __future__ import annotations

import pytest

from smartstock_client.migrations import CURRENT_VERSION, MigrationError, migrate_session_record


def test_unversioned_record_is_migrated() -> None:
    record = {"user": {"id": "u-1", "department_id": "D1", "department_name": "Toys"}, "accessToken": "a"}

    canonical, migrated = migrate_session_record(record)

    assert migrated
    assert canonical["version"] == CURRENT_VERSION
    assert canonical["state"]["user"] == {"id": "u-1", "departmentId": "D1", "departmentName": "Toys"}
    assert record["user"]["department_id"] == "D1"


def test_structured_field_wins_over_legacy_value() -> None:
    record = {"version": 0, "state": {"user": {"departmentId": "D2", "department_id": "D1"}}}

    canonical, _ = migrate_session_record(record)

    assert canonical["state"]["user"] == {"departmentId": "D2"}


def test_current_record_is_untouched() -> None:
    record = {"version": CURRENT_VERSION, "state": {"user": None, "accessToken": None}}

    canonical, migrated = migrate_session_record(record)

    assert not migrated
    assert canonical == record


@pytest.mark.parametrize("version", [CURRENT_VERSION + 1, -1, "1"])
def test_unsupported_versions_are_rejected(version: object) -> None:
    with pytest.raises(MigrationError):
        migrate_session_record({"version": version, "state": {}})
