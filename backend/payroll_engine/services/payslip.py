from .. import models
from ..domain.payslip import (
    Payslip,
    PayslipAttendance,
    PayslipDeductions,
    PayslipEarnings,
    PayslipEmployee,
    PayslipPeriod,
)
from .attendance import AttendanceSummary
from .calendar import month_name
from .proration import prorate_allowance_lines


def assemble_payslip(
    employee: models.Employee,
    structure: models.SalaryStructure,
    record: models.PayrollRecord,
    summary: AttendanceSummary,
) -> Payslip:
    """Build the payslip view of a freshly stored payroll record."""
    lines = prorate_allowance_lines(structure, record.working_days, summary.effective_days)
    return Payslip(
        id=record.id,
        employee=PayslipEmployee(
            id=employee.id,
            employee_code=employee.employee_code,
            name=employee.name,
            role=employee.role,
            department=employee.department,
            join_date=employee.join_date,
        ),
        period=PayslipPeriod(
            month=record.month,
            year=record.year,
            month_name=month_name(record.month),
        ),
        attendance=PayslipAttendance(
            working_days=record.working_days,
            present_days=summary.present_days,
            half_days=summary.half_days,
            effective_days=summary.effective_days,
            absent_days=summary.absent_days,
            overtime_hours=summary.overtime_hours,
        ),
        earnings=PayslipEarnings(
            basic_salary=record.basic_salary,
            overtime_pay=record.overtime_pay,
            gross_salary=record.gross_salary,
            **lines,
        ),
        deductions=PayslipDeductions(
            pf=structure.pf_deduction or 0,
            tax=structure.tax_deduction or 0,
            other=structure.other_deductions or 0,
            total=record.total_deductions,
        ),
        net_salary=record.net_salary,
        generated_at=record.generated_at,
        status=record.status,
    )
