from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance mark for one worker on one shift."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    SICK_LEAVE = "sick-leave"
    VACATION = "vacation"

    @property
    def implies_presence(self) -> bool:
        return self in (AttendanceStatus.PRESENT, AttendanceStatus.LATE)


class SyncStatus(str, Enum):
    """Outcome of an import reported back to the caller."""

    SUCCESS = "success"
    ERROR = "error"
