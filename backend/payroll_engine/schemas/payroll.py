import datetime as dt
from pydantic import BaseModel
from typing import Literal, Optional


class GeneratePayslipRequest(BaseModel):
    emp_id: Optional[str] = None
    month: Optional[int] = None
    year: Optional[int] = None


class PayrollRunRequest(BaseModel):
    month: Optional[int] = None
    year: Optional[int] = None


class PayrollRecordRead(BaseModel):
    id: int
    employee_id: int
    employee_name: str
    employee_code: str
    month: int
    year: int
    working_days: int
    present_days: float
    effective_days: float
    overtime_hours: float
    basic_salary: float
    total_allowances: float
    total_deductions: float
    overtime_pay: float
    gross_salary: float
    net_salary: float
    status: str
    generated_at: dt.datetime


class SalaryStructureUpdate(BaseModel):
    basic_salary: Optional[float] = None
    hra: Optional[float] = None
    transport_allowance: Optional[float] = None
    medical_allowance: Optional[float] = None
    other_allowances: Optional[float] = None
    pf_deduction: Optional[float] = None
    tax_deduction: Optional[float] = None
    other_deductions: Optional[float] = None
    overtime_rate: Optional[float] = None
    effective_from: Optional[dt.date] = None


class SalaryStructureRead(SalaryStructureUpdate):
    id: int
    employee_id: int

    model_config = {
        "from_attributes": True,
    }


class AttendanceCreate(BaseModel):
    employee_id: Optional[int] = None
    date: Optional[dt.date] = None
    status: Literal['Present', 'Absent', 'Half Day', 'Leave'] = 'Present'
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    overtime_hours: float = 0
    notes: Optional[str] = None


class AttendanceRead(BaseModel):
    id: int
    employee_id: int
    employee_name: str
    employee_code: str
    date: dt.date
    status: str
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    overtime_hours: float
    notes: Optional[str] = None
