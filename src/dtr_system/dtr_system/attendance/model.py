from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import format_clock
from ..common.geo import GeoPoint
from ..core.enums import Punch


def record_key(employee_id: str, work_date: date) -> str:
    """Store key: one record per employee per calendar day."""
    return f"{employee_id}#{work_date.isoformat()}"


def record_id_for(employee_id: str, work_date: date) -> str:
    return f"{employee_id}-{work_date.isoformat()}"


@dataclass(frozen=True)
class DailyAttendanceRecord:
    """Domain entity: one employee's punches for one day."""

    record_id: str
    employee_id: str
    department: str
    work_date: date
    time_in: Optional[datetime] = None
    break_out: Optional[datetime] = None
    break_in: Optional[datetime] = None
    time_out: Optional[datetime] = None
    on_duty: bool = False
    scan_location: Optional[GeoPoint] = None
    is_out_of_range: bool = False

    @classmethod
    def blank(cls, employee_id: str, department: str, work_date: date, *, on_duty: bool = False) -> "DailyAttendanceRecord":
        return cls(
            record_id=record_id_for(employee_id, work_date),
            employee_id=employee_id,
            department=department,
            work_date=work_date,
            on_duty=on_duty,
        )

    @property
    def key(self) -> str:
        return record_key(self.employee_id, self.work_date)

    def punch_value(self, punch: Punch) -> Optional[datetime]:
        return getattr(self, punch.field_name)

    def has_any_punch(self) -> bool:
        return any(self.punch_value(p) is not None for p in Punch)

    def with_punch(
        self,
        punch: Punch,
        moment: datetime,
        *,
        location: Optional[GeoPoint],
        out_of_range: bool,
    ) -> "DailyAttendanceRecord":
        # Location and range flag describe the most recent punch only.
        return replace(
            self,
            **{punch.field_name: moment},
            scan_location=location,
            is_out_of_range=out_of_range,
        )


@dataclass(frozen=True)
class PunchWindow:
    punch: Punch
    start: time
    end: time

    def contains(self, moment: datetime, work_date: date) -> bool:
        lo = datetime.combine(work_date, self.start)
        hi = datetime.combine(work_date, self.end)
        return lo <= moment <= hi

    def describe(self) -> str:
        return f"{format_clock(self.start)} and {format_clock(self.end)}"


@dataclass(frozen=True)
class ScanResult:
    message: str
    record_id: str
    punch: Optional[Punch] = None
    is_out_of_range: bool = False
