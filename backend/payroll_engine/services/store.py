import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models
from ..errors import StoreError
from .proration import SalaryComputation

logger = logging.getLogger(__name__)


def find_payroll_record(db: Session, employee_id: int, month: int, year: int) -> models.PayrollRecord | None:
    return db.query(models.PayrollRecord).filter(
        models.PayrollRecord.employee_id == employee_id,
        models.PayrollRecord.month == month,
        models.PayrollRecord.year == year,
    ).first()


def _apply(record: models.PayrollRecord, computation: SalaryComputation, generated_at: datetime) -> None:
    record.working_days = computation.working_days
    record.present_days = computation.effective_days
    record.overtime_hours = computation.overtime_hours
    record.basic_salary = computation.earned_basic
    record.total_allowances = computation.total_allowances
    record.total_deductions = computation.total_deductions
    record.overtime_pay = computation.overtime_pay
    record.gross_salary = computation.gross_salary
    record.net_salary = computation.net_salary
    record.status = models.PayrollStatus.GENERATED.value
    record.generated_at = generated_at


def upsert_payroll_record(
    db: Session,
    employee_id: int,
    month: int,
    year: int,
    computation: SalaryComputation,
    generated_at: datetime,
) -> models.PayrollRecord:
    """Store the computation as the one record of (employee, month, year).

    An existing record keeps its id and is overwritten; otherwise a new one
    is inserted. The unique constraint on the key backs this up when two
    writers race, in which case the loser gets a StoreError.
    """
    try:
        record = find_payroll_record(db, employee_id, month, year)
        created = record is None
        if created:
            record = models.PayrollRecord(employee_id=employee_id, month=month, year=year)
            db.add(record)
        _apply(record, computation, generated_at)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(
            "Failed to store payroll for employee %s period %02d/%d: %s",
            employee_id, month, year, e, exc_info=True,
        )
        raise StoreError(f"Could not store payroll for employee {employee_id} for {month:02d}/{year}") from e

    logger.info(
        "Payroll %s %s for employee %s period %02d/%d. Net salary: %.2f",
        record.id, "generated" if created else "updated", employee_id, month, year, record.net_salary,
    )
    return record


def list_payroll_records(db: Session, month: int | None = None, year: int | None = None):
    query = db.query(
        models.PayrollRecord,
        models.Employee.name,
        models.Employee.employee_code,
    ).join(models.Employee, models.PayrollRecord.employee_id == models.Employee.id)
    if month:
        query = query.filter(models.PayrollRecord.month == month)
    if year:
        query = query.filter(models.PayrollRecord.year == year)
    return query.order_by(models.PayrollRecord.generated_at.desc()).all()
