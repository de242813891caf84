from __future__ import annotations

from abc import ABC, abstractmethod

from ...attendance.model import WorkedDuration, WorkRecord
from ...shifts.model import ShiftSchedule


class WorkedHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked(self, record: WorkRecord, shift: ShiftSchedule) -> WorkedDuration:
        raise NotImplementedError

    def worked_minutes(self, record: WorkRecord, shift: ShiftSchedule) -> int:
        return self.worked(record, shift).total_minutes


def format_duration(total_minutes: int) -> str:
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"
