"""Conversion between domain entities and their JSON (camelCase) form.

The same representation is used by local storage, sync codes and backup
files, so a dataset written by one channel reads back through any other.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..common.datetime_utils import (
    format_clock_time,
    parse_iso_date,
    parse_iso_timestamp,
    parse_optional_clock_time,
    to_iso_timestamp,
)
from ..core.constants import DEFAULT_LUNCH_BREAK_MINUTES, LOCALIZED_SHIFT_NAMES, LOCALIZED_STATUS_LABELS
from ..core.enums import AttendanceStatus
from ..workers.model import Worker
from .model import WorkRecord


def worker_to_dict(worker: Worker) -> dict[str, Any]:
    return {
        "id": worker.id,
        "name": worker.name,
        "position": worker.position,
        "phone": worker.phone,
        "createdAt": to_iso_timestamp(worker.created_at),
    }


def worker_from_dict(data: Mapping[str, Any]) -> Worker:
    return Worker(
        id=str(data["id"]),
        name=str(data["name"]),
        position=str(data.get("position") or ""),
        phone=str(data.get("phone") or ""),
        created_at=parse_iso_timestamp(str(data["createdAt"])),
    )


def record_to_dict(record: WorkRecord) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": record.id,
        "workerId": record.worker_id,
        "date": record.work_date.isoformat(),
        "shift": record.shift,
        "status": record.status.value,
    }
    if record.arrival_time is not None:
        out["arrivalTime"] = format_clock_time(record.arrival_time)
    if record.departure_time is not None:
        out["departureTime"] = format_clock_time(record.departure_time)
    out["lunchBreak"] = record.lunch_break
    if record.notes:
        out["notes"] = record.notes
    out["createdAt"] = to_iso_timestamp(record.created_at)
    return out


def record_from_dict(data: Mapping[str, Any]) -> WorkRecord:
    """Build a record; Ukrainian status labels and shift names are accepted too."""
    lunch_break = data.get("lunchBreak")
    shift = str(data["shift"])
    status = data["status"]
    return WorkRecord(
        id=str(data["id"]),
        worker_id=str(data["workerId"]),
        work_date=parse_iso_date(str(data["date"])),
        shift=LOCALIZED_SHIFT_NAMES.get(shift, shift),
        status=AttendanceStatus(LOCALIZED_STATUS_LABELS.get(status, status)),
        arrival_time=parse_optional_clock_time(data.get("arrivalTime")),
        departure_time=parse_optional_clock_time(data.get("departureTime")),
        lunch_break=DEFAULT_LUNCH_BREAK_MINUTES if lunch_break is None else int(lunch_break),
        notes=data.get("notes") or None,
        created_at=parse_iso_timestamp(str(data["createdAt"])),
    )
