from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import LeaveRecord


class LeaveRepository(Protocol):
    def get_by_id(self, leave_id: str) -> Optional[LeaveRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    def list_for_department(self, department: str) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    def save(self, record: LeaveRecord) -> None:
        raise NotImplementedError

    def delete(self, leave_id: str) -> bool:
        raise NotImplementedError

    def find_active_overlap(self, employee_id: str, day: date) -> Optional[LeaveRecord]:
        """The Approved leave of the employee covering `day`, if any."""

        raise NotImplementedError

    def find_interval_overlap(
        self,
        employee_id: str,
        start_date: date,
        end_date: date,
        exclude_id: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def reassign_employee(self, employee_id: str, *, employee_name: str, department: str) -> None:
        raise NotImplementedError

    def rename_department(self, old_name: str, new_name: str) -> None:
        raise NotImplementedError
