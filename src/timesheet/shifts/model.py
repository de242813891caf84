from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time

WEEKDAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


@dataclass(frozen=True)
class ShiftSchedule:
    """Domain entity: a named work period with its applicable weekdays."""

    name: str
    start_time: time
    end_time: time
    days: tuple[str, ...]

    def applies_on(self, work_date: date) -> bool:
        return WEEKDAY_ABBREVIATIONS[work_date.weekday()] in self.days
