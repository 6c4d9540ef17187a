from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EmployeeRole, EmployeeType


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee of the municipality.

    Note: pure data object, no storage access here.
    """

    employee_id: str
    name: str
    department: str
    employee_type: EmployeeType
    role: EmployeeRole
    position_title: Optional[str] = None
    username: Optional[str] = None
    password_hash: Optional[str] = None
    leave_balance: float = 0

    @property
    def is_manager(self) -> bool:
        return self.role == EmployeeRole.MANAGER
