from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local, truncate_to_minute
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LUNCH_BREAK_MINUTES
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..payroll.calculator.base import WorkedHoursCalculator
from ..payroll.calculator.standard_calculator import StandardWorkedHoursCalculator
from ..shifts.model import ShiftSchedule
from ..shifts.repository import ShiftRepository
from ..workers.model import Worker
from .model import SlotKey, WorkedDuration, WorkRecord
from .store import AttendanceStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SheetEntry:
    """Read-model: one cell of the daily attendance sheet."""

    worker: Worker
    shift: ShiftSchedule
    record: Optional[WorkRecord]
    worked: WorkedDuration


class AttendanceService:
    def __init__(
        self,
        store: AttendanceStore,
        shifts: ShiftRepository,
        *,
        calculator: WorkedHoursCalculator | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._store = store
        self._shifts = shifts
        self._calculator = calculator or StandardWorkedHoursCalculator()
        self._clock = clock
        self._last_id = 0

    def _new_id(self) -> str:
        """Millisecond timestamp id, bumped when two ids land in the same millisecond.

        Callers hold the store lock until the new entity is stored.
        """
        candidate = int(self._clock().timestamp() * 1000)
        candidate = max(candidate, self._last_id + 1)
        while self._store.has_worker_id(str(candidate)) or self._store.has_record_id(str(candidate)):
            candidate += 1
        self._last_id = candidate
        return str(candidate)

    # workers

    def list_workers(self) -> Sequence[Worker]:
        return self._store.workers()

    def get_worker(self, worker_id: str) -> Worker:
        worker = self._store.get_worker(worker_id)
        if not worker:
            raise NotFoundError(f"Worker {worker_id} does not exist")
        return worker

    def add_worker(self, name: str, position: str, phone: str = "") -> Worker:
        name = require_non_empty(name, "Name")
        position = require_non_empty(position, "Position")
        with self._store.lock:
            worker = Worker(
                id=self._new_id(),
                name=name,
                position=position,
                phone=(phone or "").strip(),
                created_at=self._clock(),
            )
            self._store.add_worker(worker)
        logger.info("worker added: %s (%s)", worker.id, worker.name)
        return worker

    def delete_worker(self, worker_id: str) -> int:
        with self._store.lock:
            self.get_worker(worker_id)
            removed = self._store.remove_worker(worker_id)
        logger.info("worker deleted: %s (%d records removed)", worker_id, removed)
        return removed

    # attendance

    def mark_attendance(
        self,
        worker_id: str,
        work_date: date,
        shift: str,
        status: AttendanceStatus,
        *,
        arrival_time: Optional[time] = None,
        departure_time: Optional[time] = None,
        lunch_break: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> WorkRecord:
        """Create or update the single record of a (worker, date, shift) slot.

        Explicit values win over stored ones. Arrival is stamped with the
        current time only when the status means the worker showed up.
        """
        self._shifts.require(shift)
        if lunch_break is not None and lunch_break < 0:
            raise ValidationError("Lunch break must not be negative")

        with self._store.lock:
            self.get_worker(worker_id)
            record = self._merge_record(
                worker_id,
                work_date,
                shift,
                status,
                arrival_time=arrival_time,
                departure_time=departure_time,
                lunch_break=lunch_break,
                notes=notes,
            )
            self._store.put_record(record)
        logger.debug("attendance marked: %s %s %s -> %s", worker_id, work_date, shift, status.value)
        return record

    def _merge_record(
        self,
        worker_id: str,
        work_date: date,
        shift: str,
        status: AttendanceStatus,
        *,
        arrival_time: Optional[time],
        departure_time: Optional[time],
        lunch_break: Optional[int],
        notes: Optional[str],
    ) -> WorkRecord:
        now = self._clock()
        existing = self._store.get_record(SlotKey(worker_id, work_date, shift))

        if existing:
            arrival = arrival_time or existing.arrival_time
            if arrival is None and status.implies_presence:
                arrival = truncate_to_minute(now)
            record = WorkRecord(
                id=existing.id,
                worker_id=existing.worker_id,
                work_date=existing.work_date,
                shift=existing.shift,
                status=status,
                arrival_time=arrival,
                departure_time=departure_time or existing.departure_time,
                lunch_break=existing.lunch_break if lunch_break is None else lunch_break,
                notes=notes or existing.notes,
                created_at=existing.created_at,
            )
        else:
            arrival = None
            if status.implies_presence:
                arrival = arrival_time or truncate_to_minute(now)
            record = WorkRecord(
                id=self._new_id(),
                worker_id=worker_id,
                work_date=work_date,
                shift=shift,
                status=status,
                arrival_time=arrival,
                departure_time=departure_time,
                lunch_break=DEFAULT_LUNCH_BREAK_MINUTES if lunch_break is None else lunch_break,
                notes=notes or None,
                created_at=now,
            )
        return record

    def get_record(self, worker_id: str, work_date: date, shift: str) -> Optional[WorkRecord]:
        return self._store.get_record(SlotKey(worker_id, work_date, shift))

    def records_for_worker(self, worker_id: str) -> Sequence[WorkRecord]:
        return self._store.records_for_worker(worker_id)

    def records_for_date(self, work_date: date) -> Sequence[WorkRecord]:
        return self._store.records_for_date(work_date)

    def worked_hours(self, record: WorkRecord) -> WorkedDuration:
        return self._calculator.worked(record, self._shifts.require(record.shift))

    def day_sheet(self, work_date: date) -> Sequence[SheetEntry]:
        shifts = self._shifts.shifts_for_date(work_date)
        entries: list[SheetEntry] = []
        for worker in self._store.workers():
            for shift in shifts:
                record = self._store.get_record(SlotKey(worker.id, work_date, shift.name))
                worked = (
                    self._calculator.worked(record, shift)
                    if record
                    else WorkedDuration(hours=0, minutes=0, total_minutes=0)
                )
                entries.append(SheetEntry(worker=worker, shift=shift, record=record, worked=worked))
        return entries
