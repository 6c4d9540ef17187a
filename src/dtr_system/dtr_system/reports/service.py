from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..attendance.model import DailyAttendanceRecord
from ..attendance.repository import DailyRecordStore
from ..common.datetime_utils import format_duration
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRepository
from .calculator.base import DtrCalculator
from .calculator.standard_calculator import StandardDtrCalculator


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


def _clock(value: Optional[datetime]) -> str:
    return value.strftime("%I:%M:%S %p") if value else ""


def total_label(record: DailyAttendanceRecord, minutes: Optional[int]) -> str:
    if not record.time_in:
        return "Pending"
    if not record.time_out:
        return "In Progress"
    if minutes is None:
        return "Invalid"
    return f"{minutes // 60}h {minutes % 60}m"


class DtrReportService:
    def __init__(
        self,
        records: DailyRecordStore,
        employees: EmployeeRepository,
        leaves: LeaveRepository,
        *,
        calculator: Optional[DtrCalculator] = None,
    ):
        self._records = records
        self._employees = employees
        self._leaves = leaves
        self._calculator = calculator or StandardDtrCalculator()

    def build_report(
        self,
        *,
        start: date,
        end: date,
        department: Optional[str] = None,
        employee_id: Optional[str] = None,
    ) -> ReportData:
        if end < start:
            raise ValidationError("End date cannot be before the start date.")

        records = self._records.list_range(
            start_date=start,
            end_date=end,
            department=None if department in (None, "", "All") else department,
            employee_id=employee_id,
        )

        names: dict[str, str] = {}
        summary_map: dict[str, dict] = {}
        out_rows: list[dict] = []

        for r in records:
            if r.employee_id not in names:
                emp = self._employees.find_by_id(r.employee_id)
                names[r.employee_id] = emp.name if emp else r.employee_id

            minutes = self._calculator.worked_minutes(r)
            late = self._calculator.late_minutes(r)
            undertime = self._calculator.undertime_minutes(r)
            leave = self._leaves.find_active_overlap(r.employee_id, r.work_date)

            out_rows.append(
                {
                    "record_id": r.record_id,
                    "work_date": r.work_date.strftime("%Y-%m-%d"),
                    "employee_id": r.employee_id,
                    "name": names[r.employee_id],
                    "department": r.department,
                    "time_in": _clock(r.time_in),
                    "break_out": _clock(r.break_out),
                    "break_in": _clock(r.break_in),
                    "time_out": _clock(r.time_out),
                    "total_hours": total_label(r, minutes),
                    "late": f"{format_duration(late)} late" if late else "",
                    "undertime": f"{format_duration(undertime)} undertime" if undertime else "",
                    "break_overrun": self._calculator.break_overrun_minutes(r),
                    "on_duty": r.on_duty,
                    "out_of_range": r.is_out_of_range,
                    "leave": leave.primary_leave_type if leave else "",
                }
            )

            s = summary_map.get(r.employee_id)
            if not s:
                s = {
                    "employee_id": r.employee_id,
                    "name": names[r.employee_id],
                    "department": r.department,
                    "days": 0,
                    "total_minutes": 0,
                    "late_minutes": 0,
                    "undertime_minutes": 0,
                }
                summary_map[r.employee_id] = s
            s["days"] += 1 if r.time_in else 0
            s["total_minutes"] += minutes or 0
            s["late_minutes"] += late
            s["undertime_minutes"] += undertime

        summary = []
        for s in summary_map.values():
            total_minutes = int(s["total_minutes"])
            summary.append(
                {
                    **s,
                    "total_hours": f"{total_minutes // 60}h {total_minutes % 60}m",
                }
            )

        summary.sort(key=lambda x: x["total_minutes"], reverse=True)
        return ReportData(rows=out_rows, summary=summary)
