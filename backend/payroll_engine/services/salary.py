import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models
from ..errors import NotFoundError, StoreError

logger = logging.getLogger(__name__)

STRUCTURE_FIELDS = (
    "basic_salary",
    "hra",
    "transport_allowance",
    "medical_allowance",
    "other_allowances",
    "pf_deduction",
    "tax_deduction",
    "other_deductions",
    "overtime_rate",
)


def latest_salary_structure(db: Session, employee_id: int) -> models.SalaryStructure | None:
    """Return the employee's structure with the greatest effective_from, or None.

    Only one structure is ever current; it is applied to whatever period is
    being computed.
    """
    try:
        return db.query(models.SalaryStructure).filter(
            models.SalaryStructure.employee_id == employee_id,
        ).order_by(
            models.SalaryStructure.effective_from.desc(),
            models.SalaryStructure.id.desc(),
        ).first()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to read salary structure for employee %s: %s", employee_id, e, exc_info=True)
        raise StoreError(f"Could not read salary structure for employee {employee_id}") from e


def save_salary_structure(db: Session, employee_id: int, changes: dict, today: date) -> models.SalaryStructure:
    """Update the current structure in place, or create the first one.

    Fields missing from ``changes`` (or given as None) keep their stored
    value. A new structure takes its basic salary from the employee's base
    salary when none is given and becomes effective ``today``.
    """
    employee = db.get(models.Employee, employee_id)
    if employee is None:
        raise NotFoundError(f"Employee not found with ID: {employee_id}")

    structure = latest_salary_structure(db, employee_id)
    if structure is None:
        structure = models.SalaryStructure(employee_id=employee_id)
        for field in STRUCTURE_FIELDS:
            setattr(structure, field, changes.get(field) or 0)
        structure.basic_salary = changes.get("basic_salary") or employee.base_salary or 0
        structure.effective_from = changes.get("effective_from") or today
        db.add(structure)
    else:
        for field in STRUCTURE_FIELDS + ("effective_from",):
            if changes.get(field) is not None:
                setattr(structure, field, changes[field])

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to save salary structure for employee %s: %s", employee_id, e, exc_info=True)
        raise StoreError(f"Could not save salary structure for employee {employee_id}") from e
    db.refresh(structure)
    logger.info("Salary structure %s saved for employee %s", structure.id, employee_id)
    return structure
