from __future__ import annotations

from datetime import date, time

import pytest

from src.dtr_system.dtr_system.attendance.service import TimeLogEdit
from src.dtr_system.dtr_system.common.geo import GeoPoint
from src.dtr_system.dtr_system.core.enums import EmployeeRole, EmployeeType
from src.dtr_system.dtr_system.core.exceptions import NotFoundError, ValidationError
from src.dtr_system.dtr_system.leaves.model import LeaveDetails


def _add(container, **overrides):
    fields = dict(
        employee_id="5001",
        name="Ivy Cruz",
        department="Finance",
        employee_type=EmployeeType.PERMANENT,
        position_title="Clerk",
        username="ivy",
        password="secret",
        leave_balance=10,
    )
    fields.update(overrides)
    return container.employee_service.add_employee(**fields)


def test_add_employee_hashes_password(container):
    employee = _add(container)

    assert employee.role == EmployeeRole.USER
    assert employee.password_hash and employee.password_hash != "secret"
    assert container.employee_service.get_employee("5001").name == "Ivy Cruz"


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"position_title": ""}, "Position Title is required for Permanent and Casual employees."),
        ({"username": "DIANA"}, "This username is already taken."),
        ({"username": "it"}, "This username is already taken."),
        ({"employee_id": "2002"}, "An employee with this ID already exists."),
        ({"password": ""}, "Password is required when setting a username."),
        ({"department": "Nowhere"}, 'Department "Nowhere" does not exist.'),
    ],
)
def test_add_employee_validation(container, overrides, message):
    with pytest.raises(ValidationError) as exc:
        _add(container, **overrides)

    assert str(exc.value) == message


def test_job_order_needs_no_position(container):
    employee = _add(container, employee_type=EmployeeType.JOB_ORDER, position_title=None, username=None, password=None)

    assert employee.position_title is None
    assert employee.username is None


def test_update_cascades_to_records_and_leaves(container):
    container.attendance_service.update_time_logs("2002", [TimeLogEdit(date(2023, 11, 6), time_in=time(7, 55))])
    leave = container.leave_service.file_leave(
        employee_id="2002",
        start_date=date(2023, 11, 8),
        end_date=date(2023, 11, 8),
        details=LeaveDetails(leave_types=("sick",), num_working_days=1),
    )

    container.employee_service.update_employee(
        "2002",
        name="Diana Reyes",
        department="Finance",
        employee_type=EmployeeType.PERMANENT,
        role=EmployeeRole.USER,
        position_title="Analyst",
        username="diana",
        leave_balance=10,
    )

    assert container.records_repo.find("2002", date(2023, 11, 6)).department == "Finance"
    moved = container.leave_service.get_leave(leave.leave_id)
    assert (moved.employee_name, moved.department) == ("Diana Reyes", "Finance")


def test_update_keeps_password_when_blank(container):
    before = container.employee_service.get_employee("2002").password_hash

    container.employee_service.update_employee(
        "2002",
        name="Diana Miller",
        department="Engineering",
        employee_type=EmployeeType.PERMANENT,
        role=EmployeeRole.USER,
        position_title="Software Engineer",
        username="diana",
        leave_balance=10,
    )

    assert container.employee_service.get_employee("2002").password_hash == before


def test_delete_employee(container):
    container.employee_service.delete_employee("3002")

    with pytest.raises(NotFoundError):
        container.employee_service.get_employee("3002")


def test_department_rename_cascades(container):
    container.attendance_service.update_time_logs("2002", [TimeLogEdit(date(2023, 11, 6), time_in=time(7, 55))])

    container.department_service.update_department(
        "Engineering", name="Engineering Office", location=GeoPoint(8.5735, 124.7813), campus="Main Campus"
    )

    assert container.department_service.get_department("Engineering Office").campus == "Main Campus"
    assert container.employee_service.get_employee("2002").department == "Engineering Office"
    assert container.records_repo.find("2002", date(2023, 11, 6)).department == "Engineering Office"
    with pytest.raises(NotFoundError):
        container.department_service.get_department("Engineering")


def test_department_name_must_be_unique(container):
    with pytest.raises(ValidationError) as exc:
        container.department_service.add_department(name="finance")

    assert str(exc.value) == "A department with this name already exists."


def test_department_with_employees_cannot_be_deleted(container):
    with pytest.raises(ValidationError) as exc:
        container.department_service.delete_department("Finance")

    assert str(exc.value) == "Cannot delete Finance. Reassign employees first."

    container.department_service.add_department(name="Tourism")
    container.department_service.delete_department("Tourism")
    assert [d.name for d in container.department_service.list_departments()].count("Tourism") == 0


def test_update_details_is_partial(container):
    updated = container.department_service.update_details("Human Resources", on_travel=False)

    assert updated.on_travel is False
    assert updated.campus == "Downtown Annex"
    assert updated.location == GeoPoint(8.6010, 124.7920)
