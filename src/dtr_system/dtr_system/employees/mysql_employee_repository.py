from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import EmployeeRole, EmployeeType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, name, department, employee_type, role, position_title, username, password_hash, leave_balance"


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=str(r["employee_id"]),
        name=r["name"],
        department=r["department"],
        employee_type=EmployeeType(r["employee_type"]),
        role=EmployeeRole(r["role"]),
        position_title=r.get("position_title"),
        username=r.get("username"),
        password_hash=r.get("password_hash"),
        leave_balance=float(r.get("leave_balance") or 0),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (str(employee_id),))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def find_by_username(self, username: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE LOWER(username)=LOWER(%s)", ((username or "").strip(),))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY department, name")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def list_by_department(self, department: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE department=%s ORDER BY name", (department,))
            return [_row_to_employee(r) for r in fetchall(cur)]

    def save(self, employee: Employee) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO employees({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), department=VALUES(department),
                    employee_type=VALUES(employee_type), role=VALUES(role),
                    position_title=VALUES(position_title), username=VALUES(username),
                    password_hash=VALUES(password_hash), leave_balance=VALUES(leave_balance)
                """,
                (
                    employee.employee_id,
                    employee.name,
                    employee.department,
                    employee.employee_type.value,
                    employee.role.value,
                    employee.position_title,
                    employee.username,
                    employee.password_hash,
                    employee.leave_balance,
                ),
            )

    def delete(self, employee_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (str(employee_id),))
            return cur.rowcount > 0

    def rename_department(self, old_name: str, new_name: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET department=%s WHERE department=%s", (new_name, old_name))
