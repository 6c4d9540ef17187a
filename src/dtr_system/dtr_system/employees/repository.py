from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Note (DIP): services depend on this interface, not on a concrete backend.
    """

    def find_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def find_by_username(self, username: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def list_by_department(self, department: str) -> Sequence[Employee]:
        raise NotImplementedError

    def save(self, employee: Employee) -> None:
        """Insert or replace by employee_id."""

        raise NotImplementedError

    def delete(self, employee_id: str) -> bool:
        raise NotImplementedError

    def rename_department(self, old_name: str, new_name: str) -> None:
        raise NotImplementedError
