from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.exceptions import UnknownShiftError
from .model import ShiftSchedule

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri")

DEFAULT_SHIFTS: tuple[ShiftSchedule, ...] = (
    ShiftSchedule(name="First shift", start_time=time(8, 0), end_time=time(17, 0), days=WEEKDAYS),
    ShiftSchedule(name="Second shift", start_time=time(11, 0), end_time=time(20, 0), days=WEEKDAYS),
    ShiftSchedule(name="Saturday", start_time=time(9, 0), end_time=time(16, 0), days=("Sat",)),
)


class ShiftRepository(Protocol):
    def list_all(self) -> Sequence[ShiftSchedule]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[ShiftSchedule]:
        raise NotImplementedError

    def require(self, name: str) -> ShiftSchedule:
        raise NotImplementedError

    def shifts_for_date(self, work_date: date) -> Sequence[ShiftSchedule]:
        raise NotImplementedError


class StaticShiftCatalog(ShiftRepository):
    """Fixed, read-only shift configuration (never persisted)."""

    def __init__(self, shifts: Sequence[ShiftSchedule] = DEFAULT_SHIFTS):
        self._shifts = tuple(shifts)
        self._by_name = {s.name: s for s in self._shifts}

    def list_all(self) -> Sequence[ShiftSchedule]:
        return self._shifts

    def get_by_name(self, name: str) -> Optional[ShiftSchedule]:
        return self._by_name.get(name)

    def require(self, name: str) -> ShiftSchedule:
        shift = self._by_name.get(name)
        if shift is None:
            raise UnknownShiftError(name)
        return shift

    def shifts_for_date(self, work_date: date) -> Sequence[ShiftSchedule]:
        return [s for s in self._shifts if s.applies_on(work_date)]
