from __future__ import annotations

import sqlite3

import pytest

from timesheet.container import build_container, build_kv_store
from timesheet.core.enums import AttendanceStatus
from timesheet.storage.connection import DBConfig, DatabaseConnection
from timesheet.storage.key_value import SQLiteKeyValueStore


def test_sqlite_store_get_set_remove(tmp_path):
    store = SQLiteKeyValueStore(DatabaseConnection(DBConfig(path=str(tmp_path / "kv.sqlite3"))))

    assert store.get("k") is None
    store.set("k", "первий")
    store.set("k", "другий")
    assert store.get("k") == "другий"
    store.remove("k")
    assert store.get("k") is None


def test_dataset_persists_across_containers(tmp_path, clock, fixed_now):
    path = str(tmp_path / "data" / "timesheet.sqlite3")

    first = build_container(kv_store=build_kv_store(backend="sqlite", path=path), clock=clock)
    worker = first.attendance_service.add_worker("Іван", "Order picker")
    first.attendance_service.mark_attendance(worker.id, fixed_now.date(), "First shift", AttendanceStatus.PRESENT)

    second = build_container(kv_store=build_kv_store(backend="sqlite", path=path), clock=clock)

    assert second.store.snapshot() == first.store.snapshot()
    # three seeded workers plus the new one
    assert len(second.store.workers()) == 4


def test_sqlite_set_many_writes_all_pairs_in_one_transaction(tmp_path):
    store = SQLiteKeyValueStore(DatabaseConnection(DBConfig(path=str(tmp_path / "kv.sqlite3"))))
    store.set("workers", "old workers")
    store.set("records", "old records")

    store.set_many([("workers", "new workers"), ("records", "new records")])
    assert (store.get("workers"), store.get("records")) == ("new workers", "new records")

    # the second value violates NOT NULL, so the first write is rolled back too
    with pytest.raises(sqlite3.IntegrityError):
        store.set_many([("workers", "newest workers"), ("records", None)])

    assert (store.get("workers"), store.get("records")) == ("new workers", "new records")
