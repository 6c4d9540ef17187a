import pytest

from src.dtr_system.dtr_system.attendance.payload import EmployeeIdentityPayload
from src.dtr_system.dtr_system.core.enums import Role
from src.dtr_system.dtr_system.core.exceptions import AuthenticationError


def test_admin_login(container):
    user = container.auth_service.authenticate("admin", "admin123")

    assert user.role == Role.ADMIN
    assert user.recipient_id == "admin"


def test_manager_logs_in_as_department_head(container):
    user = container.auth_service.authenticate("Alice", "password")

    assert user.role == Role.HEAD
    assert user.department == "Admin Office"
    assert user.recipient_id == "1001"


def test_it_account(container):
    user = container.auth_service.authenticate("it", "password")

    assert user.role == Role.IT
    assert user.recipient_id == "it"


@pytest.mark.parametrize(
    "username, password",
    [("admin", "wrong"), ("diana", "password"), ("nobody", "password"), ("it", "nope"), ("", "")],
)
def test_rejected_password_logins(container, username, password):
    with pytest.raises(AuthenticationError) as exc:
        container.auth_service.authenticate(username, password)

    assert str(exc.value) == "Invalid username or password."


def test_qr_login_for_regular_employee(container):
    payload = EmployeeIdentityPayload(id="2002", name="Diana Miller", department="Engineering")

    user = container.auth_service.authenticate_qr(payload.to_json())

    assert user.role == Role.EMPLOYEE
    assert user.account_id == "2002"
    assert user.department == "Engineering"


@pytest.mark.parametrize("employee_id", ["1001", "3002", "9999"])
def test_qr_login_refused(container, employee_id):
    payload = EmployeeIdentityPayload(id=employee_id, name="x", department="y")

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate_qr(payload.to_dict())


def test_department_code_cannot_log_in(container):
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate_qr('{"department": "Engineering"}')
