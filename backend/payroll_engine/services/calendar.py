import calendar
from datetime import date

from ..errors import ValidationError

# weekly rest day, Python weekday numbering (Monday=0)
REST_DAY = calendar.SUNDAY


def validate_period(month: int, year: int) -> None:
    if month is None or year is None:
        raise ValidationError("Month and year are required.")
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}")
    if not 1 <= year <= 9999:
        raise ValidationError(f"Invalid year: {year}")


def month_bounds(month: int, year: int) -> tuple[date, date]:
    validate_period(month, year)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def working_days_in_month(month: int, year: int) -> int:
    """Count the paid working days of a month: every day except Sunday."""
    validate_period(month, year)
    days_in_month = calendar.monthrange(year, month)[1]
    return sum(
        1 for d in range(1, days_in_month + 1)
        if date(year, month, d).weekday() != REST_DAY
    )


def month_name(month: int) -> str:
    validate_period(month, 1)
    return calendar.month_name[month]
