from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .department_model import Department


class DepartmentRepository(Protocol):
    def find_by_name(self, name: str) -> Optional[Department]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError

    def save(self, department: Department, *, original_name: Optional[str] = None) -> None:
        """Insert, or replace the department stored as `original_name` (defaults to its own name)."""

        raise NotImplementedError

    def delete(self, name: str) -> bool:
        raise NotImplementedError
