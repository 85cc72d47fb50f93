from datetime import date, timedelta

import pytest

from payroll_engine.errors import ValidationError
from payroll_engine.services.calendar import month_bounds, month_name, working_days_in_month


def _count_non_sundays(year, month):
    day = date(year, month, 1)
    count = 0
    while day.month == month:
        if day.isoweekday() != 7:
            count += 1
        day += timedelta(days=1)
    return count


def test_known_months():
    assert working_days_in_month(3, 2026) == 26
    assert working_days_in_month(2, 2026) == 24
    assert working_days_in_month(1, 2026) == 27
    assert working_days_in_month(2, 2024) == 25


def test_matches_non_sunday_count():
    for year in (1999, 2000, 2023, 2024, 2026, 2100):
        for month in range(1, 13):
            days = working_days_in_month(month, year)
            assert days == _count_non_sundays(year, month)
            assert days >= 1


@pytest.mark.parametrize("month,year", [(0, 2026), (13, 2026), (5, 0), (None, 2026)])
def test_invalid_period(month, year):
    with pytest.raises(ValidationError):
        working_days_in_month(month, year)


def test_month_bounds_and_name():
    assert month_bounds(2, 2024) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_name(3) == "March"
    assert month_name(12) == "December"
