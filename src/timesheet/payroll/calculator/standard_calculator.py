from __future__ import annotations

from datetime import datetime

from ...attendance.model import WorkedDuration, WorkRecord
from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftSchedule
from .base import WorkedHoursCalculator

NOT_WORKED = frozenset({AttendanceStatus.ABSENT, AttendanceStatus.SICK_LEAVE, AttendanceStatus.VACATION})


class StandardWorkedHoursCalculator(WorkedHoursCalculator):
    """Standard rule: (departure - arrival) - lunch break, not below 0.

    Departure defaults to the shift end. Both times are wall-clock times on the
    record's date; a departure before arrival counts as zero.
    """

    def worked(self, record: WorkRecord, shift: ShiftSchedule) -> WorkedDuration:
        if record.arrival_time is None or record.status in NOT_WORKED:
            return WorkedDuration(hours=0, minutes=0, total_minutes=0)

        arrival = datetime.combine(record.work_date, record.arrival_time)
        departure = datetime.combine(record.work_date, record.departure_time or shift.end_time)

        span = max(0, int((departure - arrival).total_seconds() // 60))
        total = max(0, span - int(record.lunch_break))
        return WorkedDuration(hours=total // 60, minutes=total % 60, total_minutes=total)
