from __future__ import annotations

from typing import Optional, Sequence

from ..storage.codec import department_from_dict, department_to_dict
from ..storage.state import AppState
from .department_model import Department
from .department_repository import DepartmentRepository


class StateDepartmentRepository(DepartmentRepository):
    def __init__(self, state: AppState):
        self._state = state

    def find_by_name(self, name: str) -> Optional[Department]:
        raw = self._state.read("departments").get(name)
        return department_from_dict(raw) if raw else None

    def list_all(self) -> Sequence[Department]:
        rows = [department_from_dict(raw) for raw in self._state.values("departments")]
        return sorted(rows, key=lambda d: d.name)

    def save(self, department: Department, *, original_name: Optional[str] = None) -> None:
        with self._state.mutate("departments") as cols:
            departments = cols["departments"]
            if original_name and original_name != department.name:
                departments.pop(original_name, None)
            departments[department.name] = department_to_dict(department)

    def delete(self, name: str) -> bool:
        with self._state.mutate("departments") as cols:
            return cols["departments"].pop(name, None) is not None
