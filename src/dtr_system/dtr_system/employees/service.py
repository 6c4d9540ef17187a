from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..attendance.payload import require_employee_identity
from ..attendance.repository import DailyRecordStore
from ..common.geo import GeoPoint
from ..common.validators import require_non_empty
from ..core.constants import IT_ACCOUNT_ID
from ..core.enums import EmployeeRole, EmployeeType, Role
from ..core.exceptions import AuthenticationError, NotFoundError, ScanError, ValidationError
from ..leaves.repository import LeaveRepository
from .department_model import Department
from .department_repository import DepartmentRepository
from .model import Employee
from .repository import EmployeeRepository

_logger = logging.getLogger(__name__)

INVALID_LOGIN = "Invalid username or password."


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    account_id: str
    name: str
    role: Role
    department: Optional[str] = None

    @property
    def recipient_id(self) -> str:
        """Notification inbox of this account."""
        if self.role == Role.ADMIN:
            return "admin"
        return self.account_id


class AuthService:
    """Use case: authenticate (password login for admins and heads, QR login for employees)."""

    def __init__(self, employees: EmployeeRepository, *, it_password: str):
        self._employees = employees
        self._it_password_hash = generate_password_hash(it_password)

    def authenticate(self, username: str, password: str) -> SessionUser:
        username = (username or "").strip()
        if username.lower() == IT_ACCOUNT_ID:
            if not check_password_hash(self._it_password_hash, password or ""):
                raise AuthenticationError(INVALID_LOGIN)
            return SessionUser(account_id=IT_ACCOUNT_ID, name="IT Support", role=Role.IT)

        employee = self._employees.find_by_username(username)
        if not employee or not employee.password_hash:
            raise AuthenticationError(INVALID_LOGIN)

        try:
            ok = check_password_hash(employee.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False
        if not ok:
            raise AuthenticationError(INVALID_LOGIN)

        # Only Admin and Manager accounts log in with a password.
        if employee.role == EmployeeRole.ADMIN:
            return SessionUser(account_id=employee.employee_id, name=employee.name, role=Role.ADMIN)
        if employee.role == EmployeeRole.MANAGER:
            return SessionUser(
                account_id=employee.employee_id,
                name=employee.name,
                role=Role.HEAD,
                department=employee.department,
            )
        raise AuthenticationError(INVALID_LOGIN)

    def authenticate_qr(self, payload: Any) -> SessionUser:
        try:
            identity = require_employee_identity(payload)
        except ScanError as e:
            raise AuthenticationError(str(e))

        employee = self._employees.find_by_id(identity.id)
        if not employee or not employee.username or employee.role != EmployeeRole.USER:
            raise AuthenticationError("This QR code cannot be used to log in.")

        return SessionUser(
            account_id=employee.employee_id,
            name=employee.name,
            role=Role.EMPLOYEE,
            department=employee.department,
        )


class EmployeeService:
    """Use case: manage employee records (admin / IT)."""

    def __init__(
        self,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        records: DailyRecordStore,
        leaves: LeaveRepository,
    ):
        self._employees = employees
        self._departments = departments
        self._records = records
        self._leaves = leaves

    def list_employees(self, *, department: Optional[str] = None) -> Sequence[Employee]:
        if department:
            return self._employees.list_by_department(department)
        return self._employees.list_all()

    def get_employee(self, employee_id: str) -> Employee:
        employee = self._employees.find_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")
        return employee

    def _validate(
        self,
        *,
        name: str,
        department: str,
        employee_type: EmployeeType,
        position_title: Optional[str],
        username: Optional[str],
        leave_balance: Any,
        current: Optional[Employee] = None,
    ) -> float:
        require_non_empty(name, "Name")
        require_non_empty(department, "Department")
        try:
            balance = float(leave_balance)
        except (TypeError, ValueError):
            raise ValidationError("Employee ID, Name, Department, and a valid Leave Balance are required.")

        if employee_type in (EmployeeType.PERMANENT, EmployeeType.CASUAL) and not (position_title or "").strip():
            raise ValidationError("Position Title is required for Permanent and Casual employees.")

        if not self._departments.find_by_name(department):
            raise ValidationError(f'Department "{department}" does not exist.')

        if username:
            taken = self._employees.find_by_username(username)
            if taken and (current is None or taken.employee_id != current.employee_id):
                raise ValidationError("This username is already taken.")
            if username.strip().lower() == IT_ACCOUNT_ID:
                raise ValidationError("This username is already taken.")
        return balance

    def add_employee(
        self,
        *,
        employee_id: str,
        name: str,
        department: str,
        employee_type: EmployeeType,
        role: EmployeeRole = EmployeeRole.USER,
        position_title: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        leave_balance: Any = 0,
    ) -> Employee:
        employee_id = require_non_empty(employee_id, "Employee ID")
        username = (username or "").strip() or None
        balance = self._validate(
            name=name,
            department=department,
            employee_type=employee_type,
            position_title=position_title,
            username=username,
            leave_balance=leave_balance,
        )
        if self._employees.find_by_id(employee_id):
            raise ValidationError("An employee with this ID already exists.")
        if username and not (password or "").strip():
            raise ValidationError("Password is required when setting a username.")

        employee = Employee(
            employee_id=employee_id,
            name=name.strip(),
            department=department,
            employee_type=employee_type,
            role=role,
            position_title=(position_title or "").strip() or None,
            username=username,
            password_hash=generate_password_hash(password) if password else None,
            leave_balance=balance,
        )
        self._employees.save(employee)
        _logger.info("Employee %s added to %s", employee.employee_id, employee.department)
        return employee

    def update_employee(
        self,
        employee_id: str,
        *,
        name: str,
        department: str,
        employee_type: EmployeeType,
        role: EmployeeRole,
        position_title: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        leave_balance: Any = 0,
    ) -> Employee:
        current = self.get_employee(employee_id)
        username = (username or "").strip() or None
        balance = self._validate(
            name=name,
            department=department,
            employee_type=employee_type,
            position_title=position_title,
            username=username,
            leave_balance=leave_balance,
            current=current,
        )

        updated = replace(
            current,
            name=name.strip(),
            department=department,
            employee_type=employee_type,
            role=role,
            position_title=(position_title or "").strip() or None,
            username=username,
            password_hash=generate_password_hash(password) if password else current.password_hash,
            leave_balance=balance,
        )
        self._employees.save(updated)

        if updated.name != current.name or updated.department != current.department:
            self._records.reassign_employee(updated.employee_id, updated.department)
            self._leaves.reassign_employee(
                updated.employee_id, employee_name=updated.name, department=updated.department
            )
        _logger.info("Employee %s updated", updated.employee_id)
        return updated

    def delete_employee(self, employee_id: str) -> None:
        employee = self.get_employee(employee_id)
        if not self._employees.delete(employee.employee_id):
            raise NotFoundError(f"Employee {employee_id} not found")
        _logger.info("Employee %s deleted", employee.employee_id)


class DepartmentService:
    """Use case: manage departments and their office geofence."""

    def __init__(
        self,
        departments: DepartmentRepository,
        employees: EmployeeRepository,
        records: DailyRecordStore,
        leaves: LeaveRepository,
    ):
        self._departments = departments
        self._employees = employees
        self._records = records
        self._leaves = leaves

    def list_departments(self) -> Sequence[Department]:
        return self._departments.list_all()

    def get_department(self, name: str) -> Department:
        department = self._departments.find_by_name(name)
        if not department:
            raise NotFoundError(f'Department "{name}" not found')
        return department

    def _name_taken(self, name: str, *, ignore: Optional[str] = None) -> bool:
        return any(
            d.name.lower() == name.lower() and d.name != ignore
            for d in self._departments.list_all()
        )

    def add_department(
        self,
        *,
        name: str,
        location: Optional[GeoPoint] = None,
        campus: str = "",
        on_travel: bool = False,
    ) -> Department:
        name = require_non_empty(name, "Department name")
        if self._name_taken(name):
            raise ValidationError("A department with this name already exists.")
        department = Department(name=name, location=location, campus=campus.strip(), on_travel=bool(on_travel))
        self._departments.save(department)
        _logger.info("Department %s added", name)
        return department

    def update_department(
        self,
        original_name: str,
        *,
        name: str,
        location: Optional[GeoPoint] = None,
        campus: str = "",
        on_travel: bool = False,
    ) -> Department:
        self.get_department(original_name)
        name = require_non_empty(name, "Department name")
        if self._name_taken(name, ignore=original_name):
            raise ValidationError("A department with this name already exists.")

        department = Department(name=name, location=location, campus=campus.strip(), on_travel=bool(on_travel))
        self._departments.save(department, original_name=original_name)

        if name != original_name:
            self._employees.rename_department(original_name, name)
            self._records.rename_department(original_name, name)
            self._leaves.rename_department(original_name, name)
            _logger.info("Department %s renamed to %s", original_name, name)
        return department

    def update_details(
        self,
        name: str,
        *,
        location: Optional[GeoPoint] = None,
        campus: Optional[str] = None,
        on_travel: Optional[bool] = None,
    ) -> Department:
        """Partial update used by department heads (office pin, campus, travel mode)."""
        current = self.get_department(name)
        updated = replace(
            current,
            location=location if location is not None else current.location,
            campus=campus.strip() if campus is not None else current.campus,
            on_travel=bool(on_travel) if on_travel is not None else current.on_travel,
        )
        self._departments.save(updated)
        return updated

    def delete_department(self, name: str) -> None:
        self.get_department(name)
        if self._employees.list_by_department(name):
            raise ValidationError(f"Cannot delete {name}. Reassign employees first.")
        self._departments.delete(name)
        _logger.info("Department %s deleted", name)
