import os
from datetime import date, datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# keep the app module from creating a database file next to the tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

from payroll_engine import models  # noqa: E402

FIXED_NOW = datetime(2026, 3, 15, 10, 0, 0)


class FakeClock:
    """Returns ``now`` and moves it forward by ``step`` on every call."""

    def __init__(self, now: datetime = FIXED_NOW, step: timedelta = timedelta(0)):
        self.now = now
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    models.Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client(session_factory, clock):
    from fastapi.testclient import TestClient
    from payroll_engine.database import get_db
    from payroll_engine.main import app
    from payroll_engine.routers.payroll import get_clock

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


STANDARD_STRUCTURE = dict(
    basic_salary=26000,
    hra=5200,
    transport_allowance=1500,
    medical_allowance=1000,
    other_allowances=500,
    pf_deduction=3120,
    tax_deduction=1300,
    other_deductions=0,
    overtime_rate=150,
)


def add_employee(db, code, name=None, status="Active", structure=None, effective_from=date(2026, 1, 1)):
    employee = models.Employee(
        employee_code=code,
        name=name or f"Employee {code}",
        role="Technician",
        department="Maintenance",
        join_date=date(2024, 4, 1),
        base_salary=20000,
        status=status,
    )
    db.add(employee)
    db.flush()
    if structure is not None:
        db.add(models.SalaryStructure(employee_id=employee.id, effective_from=effective_from, **structure))
    db.commit()
    db.refresh(employee)
    return employee


def working_dates(year, month):
    """Every non-Sunday date of the month, in order."""
    day = date(year, month, 1)
    dates = []
    while day.month == month:
        if day.weekday() != 6:
            dates.append(day)
        day += timedelta(days=1)
    return dates


def add_attendance(db, employee, days, status="Present", overtime_hours=0):
    for d in days:
        db.add(models.AttendanceRecord(employee_id=employee.id, date=d, status=status, overtime_hours=overtime_hours))
    db.commit()
