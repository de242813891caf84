from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..attendance.model import WorkRecord
from ..attendance.store import AttendanceStore
from ..core.enums import AttendanceStatus
from ..payroll.calculator.base import WorkedHoursCalculator, format_duration
from ..payroll.calculator.standard_calculator import StandardWorkedHoursCalculator
from ..shifts.repository import ShiftRepository


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class WorkerStats:
    total_days: int
    present_days: int
    absent_days: int
    late_days: int
    attendance_rate: int


@dataclass(frozen=True)
class DailySummary:
    work_date: date
    total_workers: int
    present: int
    absent: int
    late: int


@dataclass(frozen=True)
class DatasetInfo:
    workers: int
    records: int
    unique_days: int
    size_kb: int
    last_sync: Optional[datetime]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


def compute_worker_stats(records: Iterable[WorkRecord]) -> WorkerStats:
    """Counts per status and the share of records marked present (0-100)."""
    records = list(records)
    total = len(records)
    present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
    absent = sum(1 for r in records if r.status == AttendanceStatus.ABSENT)
    late = sum(1 for r in records if r.status == AttendanceStatus.LATE)
    rate = round_half_up(present / total * 100) if total > 0 else 0
    return WorkerStats(
        total_days=total,
        present_days=present,
        absent_days=absent,
        late_days=late,
        attendance_rate=rate,
    )


class StatisticsService:
    """Read-side aggregates; everything is recomputed from the store on each call."""

    def __init__(
        self,
        store: AttendanceStore,
        shifts: ShiftRepository,
        *,
        calculator: Optional[WorkedHoursCalculator] = None,
    ):
        self._store = store
        self._shifts = shifts
        self._calculator = calculator or StandardWorkedHoursCalculator()

    def worker_stats(self, worker_id: str) -> WorkerStats:
        return compute_worker_stats(self._store.records_for_worker(worker_id))

    def all_worker_stats(self) -> dict[str, WorkerStats]:
        return {w.id: self.worker_stats(w.id) for w in self._store.workers()}

    def average_attendance_rate(self) -> int:
        workers = self._store.workers()
        if not workers:
            return 0
        total = sum(self.worker_stats(w.id).attendance_rate for w in workers)
        return round_half_up(total / len(workers))

    def daily_summary(self, work_date: date) -> DailySummary:
        records = self._store.records_for_date(work_date)
        return DailySummary(
            work_date=work_date,
            total_workers=len(self._store.workers()),
            present=sum(1 for r in records if r.status == AttendanceStatus.PRESENT),
            absent=sum(1 for r in records if r.status == AttendanceStatus.ABSENT),
            late=sum(1 for r in records if r.status == AttendanceStatus.LATE),
        )

    def dataset_info(self) -> DatasetInfo:
        records = self._store.records()
        repository = self._store.repository
        return DatasetInfo(
            workers=len(self._store.workers()),
            records=len(records),
            unique_days=len({r.work_date for r in records}),
            size_kb=round_half_up(repository.stored_size() / 1024),
            last_sync=repository.get_last_sync(),
        )

    def worked_hours_report(self, *, start: date, end: date, worker_id: Optional[str] = None) -> ReportData:
        records: Sequence[WorkRecord] = sorted(
            (
                r
                for r in self._store.records()
                if start <= r.work_date <= end and (worker_id is None or r.worker_id == worker_id)
            ),
            key=lambda r: (r.work_date, r.worker_id, r.shift),
        )

        summary_map: dict[str, dict] = {}
        out_rows: list[dict] = []

        for r in records:
            worker = self._store.get_worker(r.worker_id)
            shift = self._shifts.get_by_name(r.shift)
            # records imported with a shift this catalog does not know count as zero
            minutes = self._calculator.worked_minutes(r, shift) if shift else 0
            name = worker.name if worker else r.worker_id

            out_rows.append(
                {
                    "worker_id": r.worker_id,
                    "name": name,
                    "work_date": r.work_date.isoformat(),
                    "shift": r.shift,
                    "status": r.status.value,
                    "arrival": r.arrival_time.strftime("%H:%M") if r.arrival_time else "-",
                    "departure": r.departure_time.strftime("%H:%M") if r.departure_time else "-",
                    "worked_hours": format_duration(minutes),
                    "notes": r.notes or "",
                }
            )

            s = summary_map.get(r.worker_id)
            if not s:
                s = {"worker_id": r.worker_id, "name": name, "total_minutes": 0}
                summary_map[r.worker_id] = s
            s["total_minutes"] += minutes

        summary = [
            {
                "worker_id": s["worker_id"],
                "name": s["name"],
                "total_minutes": s["total_minutes"],
                "total_hours": format_duration(s["total_minutes"]),
            }
            for s in summary_map.values()
        ]
        summary.sort(key=lambda x: x["total_minutes"], reverse=True)
        return ReportData(rows=out_rows, summary=summary)
