from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..storage.codec import record_from_dict, record_to_dict
from ..storage.state import AppState
from .model import DailyAttendanceRecord, record_key
from .repository import DailyRecordStore


class StateDailyRecordStore(DailyRecordStore):
    """Daily records kept in the application state, keyed `employeeId#date`."""

    def __init__(self, state: AppState):
        self._state = state

    def find(self, employee_id: str, work_date: date) -> Optional[DailyAttendanceRecord]:
        raw = self._state.read("dailyRecords").get(record_key(employee_id, work_date))
        return record_from_dict(raw) if raw else None

    def get_by_id(self, record_id: str) -> Optional[DailyAttendanceRecord]:
        for raw in self._state.values("dailyRecords"):
            if raw.get("id") == record_id:
                return record_from_dict(raw)
        return None

    def upsert(self, record: DailyAttendanceRecord) -> None:
        with self._state.mutate("dailyRecords") as cols:
            cols["dailyRecords"][record.key] = record_to_dict(record)

    def delete(self, record_id: str) -> bool:
        with self._state.mutate("dailyRecords") as cols:
            records = cols["dailyRecords"]
            keys = [k for k, raw in records.items() if raw.get("id") == record_id]
            for k in keys:
                del records[k]
            return bool(keys)

    def save_batch(self, upserts: Sequence[DailyAttendanceRecord], delete_ids: Sequence[str]) -> None:
        doomed = set(delete_ids)
        with self._state.mutate("dailyRecords") as cols:
            records = cols["dailyRecords"]
            for k in [k for k, raw in records.items() if raw.get("id") in doomed]:
                del records[k]
            for record in upserts:
                records[record.key] = record_to_dict(record)

    def clear(self, department: Optional[str] = None) -> int:
        with self._state.mutate("dailyRecords") as cols:
            records = cols["dailyRecords"]
            keys = [k for k, raw in records.items() if department is None or raw.get("department") == department]
            for k in keys:
                del records[k]
            return len(keys)

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        department: Optional[str] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[DailyAttendanceRecord]:
        out = []
        for raw in self._state.values("dailyRecords"):
            r = record_from_dict(raw)
            if not start_date <= r.work_date <= end_date:
                continue
            if department is not None and r.department != department:
                continue
            if employee_id is not None and r.employee_id != employee_id:
                continue
            out.append(r)
        out.sort(key=lambda r: (r.work_date, r.employee_id), reverse=True)
        return out

    def recent_for_employee(self, employee_id: str, limit: int) -> Sequence[DailyAttendanceRecord]:
        rows = [record_from_dict(raw) for raw in self._state.values("dailyRecords") if raw.get("employeeId") == employee_id]
        rows.sort(key=lambda r: r.work_date, reverse=True)
        return rows[: int(limit)]

    def reassign_employee(self, employee_id: str, department: str) -> None:
        with self._state.mutate("dailyRecords") as cols:
            records = cols["dailyRecords"]
            for k, raw in list(records.items()):
                if raw.get("employeeId") == employee_id:
                    records[k] = {**raw, "department": department}

    def rename_department(self, old_name: str, new_name: str) -> None:
        with self._state.mutate("dailyRecords") as cols:
            records = cols["dailyRecords"]
            for k, raw in list(records.items()):
                if raw.get("department") == old_name:
                    records[k] = {**raw, "department": new_name}
