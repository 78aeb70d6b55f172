"""
Summary: Verify sqlite persistence of scan history payloads.
Why: The durable tier is what makes diffs incremental across sessions.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Generator

import pytest
from pytest_mock import MockerFixture

from projscan.platform.db.daos.scan_history_dao import ScanHistoryDAO
from projscan.platform.db.db_manager import DatabaseManager
from projscan.shared.errors import DurableStoreError


@pytest.fixture
def dao() -> Generator[ScanHistoryDAO, None, None]:
    manager = DatabaseManager(":memory:")
    manager.connect()
    assert manager.conn is not None
    yield ScanHistoryDAO(manager.conn)
    manager.close()


def test_put_get_and_overwrite(dao: ScanHistoryDAO) -> None:
    assert dao.get("scan:p1") is None

    dao.put("scan:p1", b"first")
    dao.put("scan:p1", b"second")

    assert dao.get("scan:p1") == b"second"


def test_delete_missing_key_is_noop(dao: ScanHistoryDAO) -> None:
    dao.put("scan:p1", b"x")

    dao.delete("scan:p1")
    dao.delete("scan:p1")

    assert dao.get("scan:p1") is None


def test_list_keys_treats_prefix_literally(dao: ScanHistoryDAO) -> None:
    for key in ("scan:a", "scan:b", "scanXc", "other:scan:d", "scan_%:e"):
        dao.put(key, b"-")

    assert dao.list_keys("scan:") == ["scan:a", "scan:b"]
    assert dao.list_keys("scan_%") == ["scan_%:e"]
    assert len(dao.list_keys()) == 5


def test_sqlite_errors_become_durable_store_errors(mocker: MockerFixture) -> None:
    conn = mocker.MagicMock(spec=sqlite3.Connection)
    conn.cursor.return_value.execute.side_effect = sqlite3.OperationalError("disk I/O error")
    dao = ScanHistoryDAO(conn)

    with pytest.raises(DurableStoreError):
        _ = dao.get("scan:p1")
    with pytest.raises(DurableStoreError):
        dao.put("scan:p1", b"x")
    with pytest.raises(DurableStoreError):
        dao.delete("scan:p1")
    with pytest.raises(DurableStoreError):
        _ = dao.list_keys("scan:")

    assert conn.rollback.call_count == 2
