from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..storage.codec import leave_from_dict, leave_to_dict
from ..storage.state import AppState
from .model import LeaveRecord
from .overlap import find_approved_covering, has_overlap
from .repository import LeaveRepository


class StateLeaveRepository(LeaveRepository):
    def __init__(self, state: AppState):
        self._state = state

    def _all(self) -> list[LeaveRecord]:
        return [leave_from_dict(raw) for raw in self._state.values("leaveRecords")]

    def get_by_id(self, leave_id: str) -> Optional[LeaveRecord]:
        raw = self._state.read("leaveRecords").get(leave_id)
        return leave_from_dict(raw) if raw else None

    def list_all(self) -> Sequence[LeaveRecord]:
        return sorted(self._all(), key=lambda r: r.start_date, reverse=True)

    def list_for_employee(self, employee_id: str) -> Sequence[LeaveRecord]:
        return [r for r in self.list_all() if r.employee_id == employee_id]

    def list_for_department(self, department: str) -> Sequence[LeaveRecord]:
        return [r for r in self.list_all() if r.department == department]

    def save(self, record: LeaveRecord) -> None:
        with self._state.mutate("leaveRecords") as cols:
            cols["leaveRecords"][record.leave_id] = leave_to_dict(record)

    def delete(self, leave_id: str) -> bool:
        with self._state.mutate("leaveRecords") as cols:
            return cols["leaveRecords"].pop(leave_id, None) is not None

    def find_active_overlap(self, employee_id: str, day: date) -> Optional[LeaveRecord]:
        return find_approved_covering(self._all(), employee_id, day)

    def find_interval_overlap(
        self,
        employee_id: str,
        start_date: date,
        end_date: date,
        exclude_id: Optional[str] = None,
    ) -> bool:
        return has_overlap(self._all(), employee_id, start_date, end_date, exclude_id)

    def reassign_employee(self, employee_id: str, *, employee_name: str, department: str) -> None:
        with self._state.mutate("leaveRecords") as cols:
            records = cols["leaveRecords"]
            for k, raw in list(records.items()):
                if raw.get("employeeId") == employee_id:
                    records[k] = {**raw, "employeeName": employee_name, "department": department}

    def rename_department(self, old_name: str, new_name: str) -> None:
        with self._state.mutate("leaveRecords") as cols:
            records = cols["leaveRecords"]
            for k, raw in list(records.items()):
                if raw.get("department") == old_name:
                    records[k] = {**raw, "department": new_name}
