from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DailyAttendanceRecord


class DailyRecordStore(Protocol):
    """Keyed store of daily records: at most one per (employee_id, work_date)."""

    def find(self, employee_id: str, work_date: date) -> Optional[DailyAttendanceRecord]:
        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[DailyAttendanceRecord]:
        raise NotImplementedError

    def upsert(self, record: DailyAttendanceRecord) -> None:
        """Insert, or replace the record stored under the same key."""

        raise NotImplementedError

    def delete(self, record_id: str) -> bool:
        raise NotImplementedError

    def save_batch(self, upserts: Sequence[DailyAttendanceRecord], delete_ids: Sequence[str]) -> None:
        """Apply several upserts and deletions as one write: all of them or none."""

        raise NotImplementedError

    def clear(self, department: Optional[str] = None) -> int:
        """Delete all records, or only those of one department. Returns the count."""

        raise NotImplementedError

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        department: Optional[str] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[DailyAttendanceRecord]:
        raise NotImplementedError

    def recent_for_employee(self, employee_id: str, limit: int) -> Sequence[DailyAttendanceRecord]:
        raise NotImplementedError

    def reassign_employee(self, employee_id: str, department: str) -> None:
        """Update the department snapshot carried by an employee's records."""

        raise NotImplementedError

    def rename_department(self, old_name: str, new_name: str) -> None:
        raise NotImplementedError
