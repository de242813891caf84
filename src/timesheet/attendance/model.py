from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import NamedTuple, Optional

from ..core.constants import DEFAULT_LUNCH_BREAK_MINUTES
from ..core.enums import AttendanceStatus
from ..workers.model import Worker


class SlotKey(NamedTuple):
    """One attendance slot: a worker on a date in a shift."""

    worker_id: str
    work_date: date
    shift: str


@dataclass(frozen=True)
class WorkRecord:
    """Domain entity: attendance entry for a (worker, date, shift) slot."""

    id: str
    worker_id: str
    work_date: date
    shift: str
    status: AttendanceStatus
    created_at: datetime
    arrival_time: Optional[time] = None
    departure_time: Optional[time] = None
    lunch_break: int = DEFAULT_LUNCH_BREAK_MINUTES
    notes: Optional[str] = None

    @property
    def slot(self) -> SlotKey:
        return SlotKey(self.worker_id, self.work_date, self.shift)


@dataclass(frozen=True)
class WorkedDuration:
    hours: int
    minutes: int
    total_minutes: int


@dataclass(frozen=True)
class Dataset:
    """Whole persisted state: what sync/backup moves between devices."""

    workers: tuple[Worker, ...]
    work_records: tuple[WorkRecord, ...]
