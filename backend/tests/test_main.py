from conftest import STANDARD_STRUCTURE, add_attendance, add_employee, working_dates


def test_read_root(client):
    response = client.get('/')
    assert response.status_code == 200
    assert response.json() == {"message": "Payroll Engine API"}


def test_generate_payslip(client, db):
    emp = add_employee(db, "EMP001", name="Asha Rao", structure=STANDARD_STRUCTURE)
    add_attendance(db, emp, working_dates(2026, 3)[:25])

    res = client.post('/api/payroll/generate-payslip', json={'emp_id': 'EMP001', 'month': 3, 'year': 2026})
    assert res.status_code == 200
    slip = res.json()
    assert slip['employee']['employee_code'] == 'EMP001'
    assert slip['period'] == {'month': 3, 'year': 2026, 'month_name': 'March'}
    assert slip['attendance']['working_days'] == 26
    assert slip['earnings']['gross_salary'] == 32885
    assert slip['deductions']['total'] == 4420
    assert slip['net_salary'] == 28465
    assert slip['status'] == 'Generated'

    again = client.post('/api/payroll/generate-payslip', json={'emp_id': str(emp.id), 'month': 3, 'year': 2026})
    assert again.status_code == 200
    assert again.json()['id'] == slip['id']

    records = client.get('/api/payroll/records?month=3&year=2026').json()
    assert len(records) == 1
    assert records[0]['employee_code'] == 'EMP001'
    assert records[0]['effective_days'] == 25
    assert records[0]['total_allowances'] == 7885


def test_generate_payslip_defaults_to_current_month(client, db):
    add_employee(db, "EMP001", structure=STANDARD_STRUCTURE)
    res = client.post('/api/payroll/generate-payslip', json={'emp_id': 'EMP001'})
    assert res.status_code == 200
    assert res.json()['period']['month_name'] == 'March'


def test_generate_payslip_errors(client, db):
    add_employee(db, "EMP002")

    missing = client.post('/api/payroll/generate-payslip', json={})
    assert missing.status_code == 400

    unknown = client.post('/api/payroll/generate-payslip', json={'emp_id': 'EMP404'})
    assert unknown.status_code == 404
    assert 'EMP404' in unknown.json()['detail']

    no_salary = client.post('/api/payroll/generate-payslip', json={'emp_id': 'EMP002'})
    assert no_salary.status_code == 400
    assert 'salary structure' in no_salary.json()['detail']

    bad_month = client.post('/api/payroll/generate-payslip', json={'emp_id': 'EMP002', 'month': 13})
    assert bad_month.status_code == 400
    assert bad_month.json()['detail'] == 'Invalid month: 13'

    month_zero = client.post('/api/payroll/generate-payslip', json={'emp_id': 'EMP002', 'month': 0, 'year': 2026})
    assert month_zero.status_code == 400


def test_run_payroll(client, db):
    add_employee(db, "EMP001", name="Asha", structure=STANDARD_STRUCTURE)
    add_employee(db, "EMP002", name="Ravi")

    res = client.post('/api/payroll/run', json={'month': 3, 'year': 2026})
    assert res.status_code == 200
    body = res.json()
    assert body['processed'] == 1
    assert body['results'] == [{'employee_code': 'EMP001', 'name': 'Asha', 'net_salary': -4420}]

    bad_month = client.post('/api/payroll/run', json={'month': 13, 'year': 2026})
    assert bad_month.status_code == 400
    assert bad_month.json()['detail'] == 'Invalid month: 13'


def test_salary_structure_endpoints(client, db):
    emp = add_employee(db, "EMP001")

    assert client.get(f'/api/payroll/salary-structure/{emp.id}').json() == {}

    res = client.put(f'/api/payroll/salary-structure/{emp.id}', json={'hra': 5200, 'overtime_rate': 150})
    assert res.status_code == 200
    created = res.json()
    assert created['basic_salary'] == 20000
    assert created['effective_from'] == '2026-03-15'

    res = client.put(f'/api/payroll/salary-structure/{emp.id}', json={'basic_salary': 26000})
    assert res.json()['id'] == created['id']
    assert res.json()['hra'] == 5200

    fetched = client.get(f'/api/payroll/salary-structure/{emp.id}').json()
    assert fetched['basic_salary'] == 26000

    assert client.put('/api/payroll/salary-structure/999', json={}).status_code == 404


def test_attendance_endpoints(client, db):
    emp = add_employee(db, "EMP001", name="Asha")

    res = client.post('/api/payroll/attendance', json={
        'employee_id': emp.id,
        'date': '2026-03-02',
        'status': 'Present',
        'overtime_hours': 2,
    })
    assert res.status_code == 201
    assert res.json()['employee_code'] == 'EMP001'

    dup = client.post('/api/payroll/attendance', json={'employee_id': emp.id, 'date': '2026-03-02'})
    assert dup.status_code == 400
    assert dup.json()['detail'] == 'Attendance already logged for this date.'

    missing = client.post('/api/payroll/attendance', json={'employee_id': emp.id})
    assert missing.status_code == 400

    listed = client.get(f'/api/payroll/attendance?employee_id={emp.id}&month=3&year=2026').json()
    assert len(listed) == 1
    assert listed[0]['overtime_hours'] == 2
