from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models
from ..database import get_db
from ..domain.payroll_run import PayrollRunResult
from ..domain.payslip import Payslip
from ..errors import PayrollError, PayrollRunError
from ..schemas.payroll import (
    AttendanceCreate,
    AttendanceRead,
    GeneratePayslipRequest,
    PayrollRecordRead,
    PayrollRunRequest,
    SalaryStructureRead,
    SalaryStructureUpdate,
)
from ..services import attendance as attendance_service
from ..services.engine import Clock, generate_payslip, run_payroll, system_clock
from ..services.salary import latest_salary_structure, save_salary_structure
from ..services.store import list_payroll_records

router = APIRouter()


def get_clock() -> Clock:
    return system_clock


def to_http(e: PayrollError) -> HTTPException:
    if isinstance(e, PayrollRunError):
        return HTTPException(
            status_code=e.status_code,
            detail={"error": str(e), "completed": [r.model_dump() for r in e.completed]},
        )
    return HTTPException(status_code=e.status_code, detail=str(e))


def to_record_schema(p: models.PayrollRecord, name: str, code: str) -> PayrollRecordRead:
    return PayrollRecordRead(
        id=p.id,
        employee_id=p.employee_id,
        employee_name=name,
        employee_code=code,
        month=p.month,
        year=p.year,
        working_days=p.working_days,
        present_days=p.present_days,
        effective_days=p.effective_days,
        overtime_hours=p.overtime_hours or 0,
        basic_salary=p.basic_salary or 0,
        total_allowances=p.total_allowances or 0,
        total_deductions=p.total_deductions or 0,
        overtime_pay=p.overtime_pay or 0,
        gross_salary=p.gross_salary or 0,
        net_salary=p.net_salary or 0,
        status=p.status,
        generated_at=p.generated_at,
    )


def to_attendance_schema(a: models.AttendanceRecord) -> AttendanceRead:
    return AttendanceRead(
        id=a.id,
        employee_id=a.employee_id,
        employee_name=a.employee.name,
        employee_code=a.employee.employee_code,
        date=a.date,
        status=a.status,
        check_in=a.check_in,
        check_out=a.check_out,
        overtime_hours=a.overtime_hours or 0,
        notes=a.notes,
    )


@router.post("/generate-payslip", response_model=Payslip)
def generate(
    payload: GeneratePayslipRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    try:
        return generate_payslip(db, payload.emp_id, payload.month, payload.year, clock=clock)
    except PayrollError as e:
        raise to_http(e)


@router.post("/run", response_model=PayrollRunResult)
def run(
    payload: PayrollRunRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    try:
        return run_payroll(db, payload.month, payload.year, clock=clock)
    except PayrollError as e:
        raise to_http(e)


@router.get("/records", response_model=list[PayrollRecordRead])
def records(month: int | None = None, year: int | None = None, db: Session = Depends(get_db)):
    return [to_record_schema(p, name, code) for p, name, code in list_payroll_records(db, month, year)]


@router.get("/salary-structure/{employee_id}")
def get_salary_structure(employee_id: int, db: Session = Depends(get_db)):
    try:
        structure = latest_salary_structure(db, employee_id)
    except PayrollError as e:
        raise to_http(e)
    if structure is None:
        return {}
    return SalaryStructureRead.model_validate(structure)


@router.put("/salary-structure/{employee_id}", response_model=SalaryStructureRead)
def put_salary_structure(
    employee_id: int,
    payload: SalaryStructureUpdate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    try:
        structure = save_salary_structure(db, employee_id, payload.model_dump(), today=clock().date())
    except PayrollError as e:
        raise to_http(e)
    return SalaryStructureRead.model_validate(structure)


@router.get("/attendance", response_model=list[AttendanceRead])
def get_attendance(
    employee_id: int | None = None,
    month: int | None = None,
    year: int | None = None,
    db: Session = Depends(get_db),
):
    try:
        rows = attendance_service.list_attendance(db, employee_id, month, year)
    except PayrollError as e:
        raise to_http(e)
    return [to_attendance_schema(a) for a in rows]


@router.post("/attendance", response_model=AttendanceRead, status_code=201)
def post_attendance(payload: AttendanceCreate, db: Session = Depends(get_db)):
    try:
        record = attendance_service.log_attendance(
            db,
            employee_id=payload.employee_id,
            day=payload.date,
            status=payload.status,
            overtime_hours=payload.overtime_hours,
            check_in=payload.check_in,
            check_out=payload.check_out,
            notes=payload.notes,
        )
    except PayrollError as e:
        raise to_http(e)
    return to_attendance_schema(record)
