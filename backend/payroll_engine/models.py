import enum
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class EmployeeStatus(str, enum.Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ON_LEAVE = "On Leave"


class AttendanceStatus(str, enum.Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    HALF_DAY = "Half Day"
    LEAVE = "Leave"


class PayrollStatus(str, enum.Enum):
    GENERATED = "Generated"
    APPROVED = "Approved"
    PAID = "Paid"


def _in_values(column: str, choices: type[enum.Enum]) -> str:
    values = ", ".join(f"'{c.value}'" for c in choices)
    return f"{column} IN ({values})"


class Employee(Base):
    __tablename__ = 'employees'

    id = Column(Integer, primary_key=True, index=True)
    employee_code = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    role = Column(String, nullable=True)
    department = Column(String, nullable=True)
    join_date = Column(Date, nullable=True)
    base_salary = Column(Float, default=0)
    status = Column(String, nullable=False, default=EmployeeStatus.ACTIVE.value)

    salary_structures = relationship("SalaryStructure", back_populates="employee", cascade="all, delete-orphan")
    attendance = relationship("AttendanceRecord", back_populates="employee", cascade="all, delete-orphan")
    payroll_records = relationship("PayrollRecord", back_populates="employee", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint(_in_values("status", EmployeeStatus), name='chk_employee_status'),
    )


class SalaryStructure(Base):
    __tablename__ = 'salary_structures'

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey('employees.id', ondelete="CASCADE"), nullable=False, index=True)
    basic_salary = Column(Float, default=0)
    hra = Column(Float, default=0)
    transport_allowance = Column(Float, default=0)
    medical_allowance = Column(Float, default=0)
    other_allowances = Column(Float, default=0)
    pf_deduction = Column(Float, default=0)
    tax_deduction = Column(Float, default=0)
    other_deductions = Column(Float, default=0)
    overtime_rate = Column(Float, default=0)
    effective_from = Column(Date, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    employee = relationship("Employee", back_populates="salary_structures")


class AttendanceRecord(Base):
    __tablename__ = 'attendance'

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey('employees.id', ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    status = Column(String, nullable=False, default=AttendanceStatus.PRESENT.value)
    check_in = Column(String, nullable=True)
    check_out = Column(String, nullable=True)
    overtime_hours = Column(Float, default=0)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    employee = relationship("Employee", back_populates="attendance")

    __table_args__ = (
        UniqueConstraint('employee_id', 'date', name='uq_attendance_employee_date'),
        CheckConstraint(_in_values("status", AttendanceStatus), name='chk_attendance_status'),
        CheckConstraint("overtime_hours >= 0", name='chk_attendance_overtime'),
    )


class PayrollRecord(Base):
    __tablename__ = 'payroll'

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey('employees.id', ondelete="CASCADE"), nullable=False, index=True)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    working_days = Column(Integer, default=0)
    # holds effective days (present + half-day fractions), see effective_days
    present_days = Column(Float, default=0)
    overtime_hours = Column(Float, default=0)
    basic_salary = Column(Float, default=0)
    total_allowances = Column(Float, default=0)
    total_deductions = Column(Float, default=0)
    overtime_pay = Column(Float, default=0)
    gross_salary = Column(Float, default=0)
    net_salary = Column(Float, default=0)
    status = Column(String, nullable=False, default=PayrollStatus.GENERATED.value)
    generated_at = Column(DateTime, default=datetime.utcnow)

    employee = relationship("Employee", back_populates="payroll_records")

    __table_args__ = (
        UniqueConstraint('employee_id', 'month', 'year', name='uq_payroll_employee_period'),
        CheckConstraint(_in_values("status", PayrollStatus), name='chk_payroll_status'),
    )

    @property
    def effective_days(self) -> float:
        return self.present_days
