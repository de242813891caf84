from datetime import date, datetime, time

import pytest

from timesheet.attendance.model import WorkRecord
from timesheet.core.enums import AttendanceStatus
from timesheet.payroll.calculator.base import format_duration
from timesheet.payroll.calculator.standard_calculator import StandardWorkedHoursCalculator
from timesheet.shifts.model import ShiftSchedule

FIRST = ShiftSchedule(name="First shift", start_time=time(8, 0), end_time=time(17, 0), days=("Mon",))


def _record(status=AttendanceStatus.PRESENT, arrival=time(8, 0), departure=time(17, 0), lunch_break=60):
    return WorkRecord(
        id="r1",
        worker_id="w1",
        work_date=date(2025, 1, 6),
        shift="First shift",
        status=status,
        arrival_time=arrival,
        departure_time=departure,
        lunch_break=lunch_break,
        created_at=datetime(2025, 1, 6, 8, 0),
    )


def test_standard_calculator_subtracts_lunch_break():
    worked = StandardWorkedHoursCalculator().worked(_record(), FIRST)

    assert (worked.hours, worked.minutes, worked.total_minutes) == (8, 0, 480)


def test_departure_defaults_to_shift_end():
    worked = StandardWorkedHoursCalculator().worked(_record(arrival=time(9, 20), departure=None), FIRST)

    # 09:20 -> 17:00 is 460 minutes, minus 60
    assert (worked.hours, worked.minutes, worked.total_minutes) == (6, 40, 400)


@pytest.mark.parametrize(
    "status",
    [AttendanceStatus.ABSENT, AttendanceStatus.SICK_LEAVE, AttendanceStatus.VACATION],
)
def test_non_working_statuses_are_zero_even_with_times(status):
    worked = StandardWorkedHoursCalculator().worked(_record(status=status), FIRST)

    assert worked.total_minutes == 0
    assert (worked.hours, worked.minutes) == (0, 0)


def test_missing_arrival_is_zero():
    assert StandardWorkedHoursCalculator().worked_minutes(_record(arrival=None), FIRST) == 0


def test_late_status_counts_worked_time():
    worked = StandardWorkedHoursCalculator().worked(_record(status=AttendanceStatus.LATE, arrival=time(8, 45)), FIRST)

    assert worked.total_minutes == 435


def test_lunch_longer_than_span_floors_at_zero():
    assert StandardWorkedHoursCalculator().worked_minutes(_record(arrival=time(16, 30)), FIRST) == 0


def test_departure_before_arrival_never_negative():
    record = _record(arrival=time(22, 0), departure=time(6, 0), lunch_break=0)

    assert StandardWorkedHoursCalculator().worked_minutes(record, FIRST) == 0


def test_format_duration():
    assert format_duration(480) == "08:00"
    assert format_duration(605) == "10:05"
