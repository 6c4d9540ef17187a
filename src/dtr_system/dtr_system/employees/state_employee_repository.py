from __future__ import annotations

from typing import Optional, Sequence

from ..storage.codec import employee_from_dict, employee_to_dict
from ..storage.state import AppState
from .model import Employee
from .repository import EmployeeRepository


class StateEmployeeRepository(EmployeeRepository):
    def __init__(self, state: AppState):
        self._state = state

    def find_by_id(self, employee_id: str) -> Optional[Employee]:
        raw = self._state.read("employees").get(str(employee_id))
        return employee_from_dict(raw) if raw else None

    def find_by_username(self, username: str) -> Optional[Employee]:
        wanted = (username or "").strip().lower()
        if not wanted:
            return None
        for raw in self._state.values("employees"):
            if (raw.get("username") or "").lower() == wanted:
                return employee_from_dict(raw)
        return None

    def list_all(self) -> Sequence[Employee]:
        rows = [employee_from_dict(raw) for raw in self._state.values("employees")]
        return sorted(rows, key=lambda e: (e.department, e.name))

    def list_by_department(self, department: str) -> Sequence[Employee]:
        return [e for e in self.list_all() if e.department == department]

    def save(self, employee: Employee) -> None:
        with self._state.mutate("employees") as cols:
            cols["employees"][employee.employee_id] = employee_to_dict(employee)

    def delete(self, employee_id: str) -> bool:
        with self._state.mutate("employees") as cols:
            return cols["employees"].pop(str(employee_id), None) is not None

    def rename_department(self, old_name: str, new_name: str) -> None:
        with self._state.mutate("employees") as cols:
            employees = cols["employees"]
            for k, raw in list(employees.items()):
                if raw.get("department") == old_name:
                    employees[k] = {**raw, "department": new_name}
