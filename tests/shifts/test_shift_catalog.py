from datetime import date

import pytest

from timesheet.core.exceptions import UnknownShiftError
from timesheet.shifts.repository import StaticShiftCatalog


def test_catalog_has_three_fixed_shifts():
    names = [s.name for s in StaticShiftCatalog().list_all()]

    assert names == ["First shift", "Second shift", "Saturday"]


def test_unknown_shift_is_an_explicit_error():
    catalog = StaticShiftCatalog()

    assert catalog.get_by_name("Night shift") is None
    with pytest.raises(UnknownShiftError):
        catalog.require("Night shift")


def test_shifts_for_weekday_and_saturday():
    catalog = StaticShiftCatalog()

    monday = [s.name for s in catalog.shifts_for_date(date(2026, 2, 2))]
    saturday = [s.name for s in catalog.shifts_for_date(date(2026, 2, 7))]
    sunday = catalog.shifts_for_date(date(2026, 2, 8))

    assert monday == ["First shift", "Second shift"]
    assert saturday == ["Saturday"]
    assert list(sunday) == []
