from datetime import date, datetime
from pydantic import BaseModel
from typing import Optional


class PayslipEmployee(BaseModel):
    id: int
    employee_code: str
    name: str
    role: Optional[str] = None
    department: Optional[str] = None
    join_date: Optional[date] = None


class PayslipPeriod(BaseModel):
    month: int
    year: int
    month_name: str


class PayslipAttendance(BaseModel):
    working_days: int
    present_days: int  # raw count, unlike PayrollRecord.present_days
    half_days: int
    effective_days: float
    absent_days: int
    overtime_hours: float


class PayslipEarnings(BaseModel):
    basic_salary: float
    # per-line proration, may not add up to the stored total_allowances
    hra: int
    transport_allowance: int
    medical_allowance: int
    other_allowances: int
    overtime_pay: float
    gross_salary: float


class PayslipDeductions(BaseModel):
    pf: float
    tax: float
    other: float
    total: float


class Payslip(BaseModel):
    id: int
    employee: PayslipEmployee
    period: PayslipPeriod
    attendance: PayslipAttendance
    earnings: PayslipEarnings
    deductions: PayslipDeductions
    net_salary: float
    generated_at: datetime
    status: str
