from __future__ import annotations

import base64
import json
from datetime import date, time

import pytest

from timesheet.core.constants import APP_NAME, BACKUP_FORMAT_VERSION, LAST_SYNC_KEY, WORK_RECORDS_KEY
from timesheet.core.enums import AttendanceStatus, SyncStatus
from timesheet.core.exceptions import SyncFormatError
from timesheet.sync.codec import decode_sync_code, encode_sync_code, parse_dataset


@pytest.fixture
def populated(container):
    service = container.attendance_service
    worker = service.add_worker("Марія Коваленко", "Комплектувальник", "+380671234567")
    service.mark_attendance(
        worker.id,
        date(2026, 2, 2),
        "First shift",
        AttendanceStatus.PRESENT,
        arrival_time=time(8, 0),
        departure_time=time(17, 0),
        notes="Зміна без зауважень",
    )
    service.mark_attendance(worker.id, date(2026, 2, 3), "Second shift", AttendanceStatus.VACATION)
    return container


def test_sync_code_round_trip_reproduces_entities(populated, clock):
    from timesheet.container import build_container
    from timesheet.storage.key_value import InMemoryKeyValueStore

    code = populated.sync_service.generate_sync_code()
    other = build_container(kv_store=InMemoryKeyValueStore(), clock=clock, seed_default_workers=False)

    result = other.sync_service.import_sync_code(code)

    assert result.status == SyncStatus.SUCCESS
    assert other.store.snapshot() == populated.store.snapshot()


def test_sync_code_is_printable_and_keeps_non_ascii(populated):
    code = populated.sync_service.generate_sync_code()

    assert code.isascii()
    payload = decode_sync_code(code)
    assert payload["workers"][0]["name"] == "Марія Коваленко"
    assert payload["version"] == BACKUP_FORMAT_VERSION
    assert payload["appName"] == APP_NAME


def test_sync_code_tolerates_line_breaks():
    code = encode_sync_code({"workers": [], "workRecords": []})
    wrapped = "\n".join(code[i : i + 8] for i in range(0, len(code), 8))

    assert decode_sync_code(f"  {wrapped}\n") == {"workers": [], "workRecords": []}


def test_missing_work_records_leaves_state_untouched(populated, kv_store):
    before = populated.store.snapshot()
    stored_before = kv_store.get(WORK_RECORDS_KEY)
    code = base64.b64encode(json.dumps({"workers": []}).encode("utf-8")).decode("ascii")

    result = populated.sync_service.import_sync_code(code)

    assert result.status == SyncStatus.ERROR
    assert populated.store.snapshot() == before
    assert kv_store.get(WORK_RECORDS_KEY) == stored_before
    assert kv_store.get(LAST_SYNC_KEY) is None


@pytest.mark.parametrize("code", ["not base64 at all!", base64.b64encode(b"{broken").decode("ascii")])
def test_undecodable_code_is_a_format_error(populated, code):
    before = populated.store.snapshot()

    result = populated.sync_service.import_sync_code(code)

    assert result.status == SyncStatus.ERROR
    assert populated.store.snapshot() == before


def test_bad_entry_means_nothing_is_applied(populated):
    before = populated.store.snapshot()
    payload = {
        "workers": [{"id": "9", "name": "X", "position": "Y", "phone": "", "createdAt": "2026-01-01T00:00:00"}],
        "workRecords": [{"id": "r", "workerId": "9", "date": "2026-02-30", "shift": "First shift",
                         "status": "present", "createdAt": "2026-01-01T00:00:00"}],
    }

    result = populated.sync_service.import_sync_code(encode_sync_code(payload))

    assert result.status == SyncStatus.ERROR
    assert populated.store.snapshot() == before


def test_parse_dataset_rejects_non_objects():
    with pytest.raises(SyncFormatError):
        parse_dataset([1, 2, 3])


def test_import_fully_replaces_current_data(populated):
    payload = {
        "workers": [
            {"id": "1", "name": "Іван Петренко", "position": "Order picker", "phone": "",
             "createdAt": "2025-06-01T10:00:00.000Z"},
        ],
        "workRecords": [],
        "timestamp": "2025-06-01T10:00:00.000Z",
    }

    result = populated.sync_service.import_sync_code(encode_sync_code(payload))

    assert result.status == SyncStatus.SUCCESS
    assert [w.id for w in populated.store.workers()] == ["1"]
    assert populated.store.records() == []
    assert populated.sync_service.last_sync_time() is not None


def test_backup_file_round_trip(populated, clock):
    from timesheet.container import build_container
    from timesheet.storage.key_value import InMemoryKeyValueStore

    backup = populated.sync_service.export_backup()
    other = build_container(kv_store=InMemoryKeyValueStore(), clock=clock, seed_default_workers=False)

    result = other.sync_service.import_backup(backup.content)

    assert backup.filename == "atlant_backup_2026-02-02.json"
    assert json.loads(backup.content.decode("utf-8"))["version"] == BACKUP_FORMAT_VERSION
    assert result.status == SyncStatus.SUCCESS
    assert other.store.snapshot() == populated.store.snapshot()


def test_export_backup_records_last_sync(populated, fixed_now):
    populated.sync_service.export_backup()

    assert populated.sync_service.last_sync_time() == fixed_now


def test_clear_all_data(populated, kv_store):
    populated.sync_service.export_backup()

    populated.sync_service.clear_all_data()

    assert populated.store.workers() == []
    assert populated.store.records() == []
    assert kv_store.get(LAST_SYNC_KEY) is None


@pytest.mark.parametrize(
    "content",
    [
        b"{broken",
        json.dumps({"workers": []}).encode("utf-8"),
        b"\xff\xfe\x00garbage",
    ],
    ids=["invalid-json", "missing-work-records", "not-utf8"],
)
def test_bad_backup_file_leaves_state_untouched(populated, kv_store, content):
    before = populated.store.snapshot()
    stored_before = kv_store.get(WORK_RECORDS_KEY)

    result = populated.sync_service.import_backup(content)

    assert result.status == SyncStatus.ERROR
    assert populated.store.snapshot() == before
    assert kv_store.get(WORK_RECORDS_KEY) == stored_before
    assert kv_store.get(LAST_SYNC_KEY) is None


def test_import_accepts_ukrainian_status_labels_and_shift_names(container):
    # shape written by the Ukrainian-language tracker: no version, localized values
    payload = {
        "workers": [
            {"id": "1", "name": "Іван Петренко", "position": "Комплектувальник", "phone": "+380501234567",
             "createdAt": "2025-06-01T10:00:00.000Z"},
        ],
        "workRecords": [
            {"id": "1717236000000", "workerId": "1", "date": "2025-06-02", "shift": "Перша зміна",
             "status": "присутній", "arrivalTime": "08:00", "lunchBreak": 60,
             "createdAt": "2025-06-02T08:00:00.000Z"},
            {"id": "1717236000001", "workerId": "1", "date": "2025-06-07", "shift": "Субота",
             "status": "лікарняний", "createdAt": "2025-06-07T09:00:00.000Z"},
        ],
        "timestamp": "2025-06-07T10:00:00.000Z",
    }
    code = base64.b64encode(json.dumps(payload, ensure_ascii=False).encode("utf-8")).decode("ascii")

    result = container.sync_service.import_sync_code(code)

    assert result.status == SyncStatus.SUCCESS
    first = container.attendance_service.get_record("1", date(2025, 6, 2), "First shift")
    assert first.status == AttendanceStatus.PRESENT
    assert first.arrival_time == time(8, 0)
    saturday = container.attendance_service.get_record("1", date(2025, 6, 7), "Saturday")
    assert saturday.status == AttendanceStatus.SICK_LEAVE
    assert container.attendance_service.worked_hours(first).total_minutes == 8 * 60
