"""Payroll pipeline: attendance and calendar in, stored record and payslip out.

Both entry points go through ``compute_payroll`` so the single-employee and
bulk paths can never drift apart.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models
from ..domain.payroll_run import PayrollRunItem, PayrollRunResult
from ..domain.payslip import Payslip
from ..errors import NotFoundError, PayrollError, PayrollRunError, PreconditionError, StoreError, ValidationError
from .attendance import AttendanceSummary, aggregate_attendance
from .calendar import validate_period, working_days_in_month
from .payslip import assemble_payslip
from .proration import prorate_salary
from .salary import latest_salary_structure
from .store import upsert_payroll_record

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    return datetime.now()


@dataclass
class PayrollOutcome:
    record: models.PayrollRecord
    summary: AttendanceSummary


def resolve_period(month: int | None, year: int | None, clock: Clock) -> tuple[int, int]:
    if month is None or year is None:
        now = clock()
        month = now.month if month is None else month
        year = now.year if year is None else year
    validate_period(month, year)
    return month, year


def find_employee(db: Session, key) -> models.Employee | None:
    """Look an employee up by internal id first, then by employee code."""
    key = str(key).strip()
    try:
        if key.isdigit():
            employee = db.get(models.Employee, int(key))
            if employee is not None:
                return employee
        return db.query(models.Employee).filter(models.Employee.employee_code == key).first()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to look up employee %s: %s", key, e, exc_info=True)
        raise StoreError(f"Could not look up employee {key}") from e


def compute_payroll(
    db: Session,
    employee: models.Employee,
    structure: models.SalaryStructure,
    month: int,
    year: int,
    clock: Clock,
) -> PayrollOutcome:
    working_days = working_days_in_month(month, year)
    summary = aggregate_attendance(db, employee.id, month, year, working_days)
    computation = prorate_salary(
        structure,
        working_days,
        summary.present_days,
        summary.half_days,
        summary.overtime_hours,
    )
    record = upsert_payroll_record(db, employee.id, month, year, computation, clock())
    return PayrollOutcome(record=record, summary=summary)


def generate_payslip(
    db: Session,
    emp_key,
    month: int | None = None,
    year: int | None = None,
    clock: Clock = system_clock,
) -> Payslip:
    if emp_key is None or not str(emp_key).strip():
        raise ValidationError("Employee ID (emp_id) is required.")
    month, year = resolve_period(month, year, clock)

    employee = find_employee(db, emp_key)
    if employee is None:
        raise NotFoundError(f"Employee not found with ID: {emp_key}")

    structure = latest_salary_structure(db, employee.id)
    if structure is None:
        raise PreconditionError(
            f"No salary structure found for employee {employee.employee_code}. Please set up salary first."
        )

    outcome = compute_payroll(db, employee, structure, month, year, clock)
    return assemble_payslip(employee, structure, outcome.record, outcome.summary)


def run_payroll(
    db: Session,
    month: int | None = None,
    year: int | None = None,
    clock: Clock = system_clock,
) -> PayrollRunResult:
    """Compute payroll for every active employee, one after another.

    Employees without a salary structure are skipped. Records are committed
    one employee at a time; if one fails the run stops and PayrollRunError
    reports the employees already done.
    """
    month, year = resolve_period(month, year, clock)
    try:
        employees = db.query(models.Employee).filter(
            models.Employee.status == models.EmployeeStatus.ACTIVE.value,
        ).order_by(models.Employee.employee_code).all()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to list active employees for %02d/%d: %s", month, year, e, exc_info=True)
        raise PayrollRunError(f"Payroll run for {month:02d}/{year} could not list active employees") from e

    results: list[PayrollRunItem] = []
    for employee in employees:
        # read up front: a failed query rolls back and expires employee
        code, name = employee.employee_code, employee.name
        try:
            structure = latest_salary_structure(db, employee.id)
            if structure is None:
                logger.info("Skipping employee %s: no salary structure", code)
                continue
            outcome = compute_payroll(db, employee, structure, month, year, clock)
        except PayrollError as e:
            logger.error(
                "Payroll run %02d/%d stopped at employee %s after %d employees: %s",
                month, year, code, len(results), e,
            )
            raise PayrollRunError(
                f"Payroll run for {month:02d}/{year} failed at employee {code} "
                f"after {len(results)} employees: {e}",
                completed=results,
            ) from e
        results.append(PayrollRunItem(
            employee_code=code,
            name=name,
            net_salary=outcome.record.net_salary,
        ))

    logger.info("Payroll generated for %d employees for %02d/%d", len(results), month, year)
    return PayrollRunResult(
        message=f"Payroll generated for {len(results)} employees.",
        month=month,
        year=year,
        processed=len(results),
        results=results,
    )
