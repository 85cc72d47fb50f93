import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from ..errors import InvalidPeriodError

logger = logging.getLogger(__name__)

ALLOWANCE_FIELDS = ("hra", "transport_allowance", "medical_allowance", "other_allowances")
DEDUCTION_FIELDS = ("pf_deduction", "tax_deduction", "other_deductions")


@dataclass(frozen=True)
class SalaryComputation:
    working_days: int
    effective_days: float
    overtime_hours: float
    earned_basic: int
    total_allowances: int
    overtime_pay: int
    gross_salary: int
    total_deductions: float
    net_salary: float


def round_currency(value: float) -> int:
    """Round half-up to a whole currency unit."""
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _amount(structure, field: str) -> float:
    return getattr(structure, field, None) or 0


def _check_working_days(working_days: int) -> None:
    if working_days is None or working_days <= 0:
        raise InvalidPeriodError(f"Working days must be positive, got {working_days}")


def prorate(amount: float, working_days: int, effective_days: float) -> int:
    _check_working_days(working_days)
    return round_currency((amount / working_days) * effective_days)


def prorate_salary(
    structure,
    working_days: int,
    present_days: int,
    half_days: int,
    overtime_hours: float,
) -> SalaryComputation:
    """Turn a monthly salary structure into the pay earned for a period.

    Parameters
    ----------
    structure:
        Anything exposing the ``SalaryStructure`` amount attributes.
    working_days: int
        Paid working days of the month. Must be positive.
    present_days, half_days: int
        Attendance counts; a half day weighs 0.5.
    overtime_hours: float
        Overtime paid at ``structure.overtime_rate`` per hour.

    Basic pay and the allowance pool are prorated separately, each rounded
    once. Deductions are flat and never prorated.
    """
    _check_working_days(working_days)

    effective_days = present_days + half_days * 0.5
    daily_rate = _amount(structure, "basic_salary") / working_days
    earned_basic = round_currency(daily_rate * effective_days)

    allowance_pool = sum(_amount(structure, f) for f in ALLOWANCE_FIELDS)
    total_allowances = round_currency((allowance_pool / working_days) * effective_days)

    overtime_pay = round_currency((overtime_hours or 0) * _amount(structure, "overtime_rate"))
    gross_salary = earned_basic + total_allowances + overtime_pay

    total_deductions = sum(_amount(structure, f) for f in DEDUCTION_FIELDS)
    net_salary = gross_salary - total_deductions

    result = SalaryComputation(
        working_days=working_days,
        effective_days=effective_days,
        overtime_hours=overtime_hours or 0,
        earned_basic=earned_basic,
        total_allowances=total_allowances,
        overtime_pay=overtime_pay,
        gross_salary=gross_salary,
        total_deductions=total_deductions,
        net_salary=net_salary,
    )
    logger.debug("prorated salary: %s", result)
    return result


def prorate_allowance_lines(structure, working_days: int, effective_days: float) -> dict[str, int]:
    """Prorate each allowance on its own for display.

    The lines are rounded one by one, so their sum can differ from the
    pooled ``total_allowances`` of ``prorate_salary``.
    """
    return {
        f: prorate(_amount(structure, f), working_days, effective_days)
        for f in ALLOWANCE_FIELDS
    }
