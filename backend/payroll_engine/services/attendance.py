import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models
from ..errors import NotFoundError, StoreError, ValidationError
from .calendar import month_bounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceSummary:
    working_days: int
    present_days: int
    half_days: int
    overtime_hours: float

    @property
    def effective_days(self) -> float:
        return self.present_days + self.half_days * 0.5

    @property
    def absent_days(self) -> int:
        # display only; negative when the attendance data is inconsistent
        return self.working_days - self.present_days - self.half_days


def summarize_attendance(records: Iterable[models.AttendanceRecord], working_days: int) -> AttendanceSummary:
    present = half = 0
    overtime = 0.0
    for r in records:
        if r.status == models.AttendanceStatus.PRESENT.value:
            present += 1
        elif r.status == models.AttendanceStatus.HALF_DAY.value:
            half += 1
        # overtime is counted whatever the day's status
        overtime += r.overtime_hours or 0
    return AttendanceSummary(
        working_days=working_days,
        present_days=present,
        half_days=half,
        overtime_hours=overtime,
    )


def attendance_for_month(db: Session, employee_id: int, month: int, year: int) -> list[models.AttendanceRecord]:
    start, end = month_bounds(month, year)
    return db.query(models.AttendanceRecord).filter(
        models.AttendanceRecord.employee_id == employee_id,
        models.AttendanceRecord.date >= start,
        models.AttendanceRecord.date <= end,
    ).all()


def aggregate_attendance(db: Session, employee_id: int, month: int, year: int, working_days: int) -> AttendanceSummary:
    try:
        records = attendance_for_month(db, employee_id, month, year)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(
            "Failed to read attendance for employee %s period %02d/%d: %s",
            employee_id, month, year, e, exc_info=True,
        )
        raise StoreError(f"Could not read attendance for employee {employee_id} for {month:02d}/{year}") from e
    summary = summarize_attendance(records, working_days)
    logger.debug(
        "attendance employee=%s period=%02d/%d rows=%d present=%d half=%d overtime=%s",
        employee_id, month, year, len(records), summary.present_days, summary.half_days, summary.overtime_hours,
    )
    return summary


def list_attendance(
    db: Session,
    employee_id: int | None = None,
    month: int | None = None,
    year: int | None = None,
    limit: int = 500,
) -> list[models.AttendanceRecord]:
    query = db.query(models.AttendanceRecord)
    if employee_id is not None:
        query = query.filter(models.AttendanceRecord.employee_id == employee_id)
    if month and year:
        start, end = month_bounds(month, year)
        query = query.filter(models.AttendanceRecord.date >= start, models.AttendanceRecord.date <= end)
    return query.order_by(models.AttendanceRecord.date.desc()).limit(limit).all()


def log_attendance(
    db: Session,
    employee_id: int,
    day: date,
    status: str = models.AttendanceStatus.PRESENT.value,
    overtime_hours: float = 0,
    check_in: str | None = None,
    check_out: str | None = None,
    notes: str | None = None,
) -> models.AttendanceRecord:
    """Record one day of attendance; a second entry for the same day is rejected."""
    if employee_id is None or day is None:
        raise ValidationError("Employee and date are required.")
    if db.get(models.Employee, employee_id) is None:
        raise NotFoundError(f"Employee not found with ID: {employee_id}")
    if status not in {s.value for s in models.AttendanceStatus}:
        raise ValidationError(f"Invalid attendance status: {status}")
    if overtime_hours is not None and overtime_hours < 0:
        raise ValidationError("Overtime hours cannot be negative.")

    record = models.AttendanceRecord(
        employee_id=employee_id,
        date=day,
        status=status,
        check_in=check_in,
        check_out=check_out,
        overtime_hours=overtime_hours or 0,
        notes=notes,
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        exists = db.query(models.AttendanceRecord).filter_by(employee_id=employee_id, date=day).first()
        if exists is not None:
            raise ValidationError("Attendance already logged for this date.") from e
        logger.error("Failed to log attendance for employee %s on %s: %s", employee_id, day, e, exc_info=True)
        raise StoreError(f"Could not log attendance for employee {employee_id} on {day}") from e
    db.refresh(record)
    return record
