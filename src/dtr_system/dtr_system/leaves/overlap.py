from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..core.enums import LeaveStatus
from .model import LeaveRecord


def intervals_intersect(start: date, end: date, other_start: date, other_end: date) -> bool:
    """Inclusive calendar-date intersection."""
    return start <= other_end and end >= other_start


def has_overlap(
    records: Iterable[LeaveRecord],
    employee_id: str,
    start_date: date,
    end_date: date,
    exclude_id: Optional[str] = None,
) -> bool:
    """True if a non-rejected leave of the employee (other than `exclude_id`) intersects the interval."""
    for r in records:
        if r.employee_id != employee_id or r.status == LeaveStatus.REJECTED:
            continue
        if exclude_id is not None and r.leave_id == exclude_id:
            continue
        if intervals_intersect(start_date, end_date, r.start_date, r.end_date):
            return True
    return False


def find_approved_covering(records: Iterable[LeaveRecord], employee_id: str, day: date) -> Optional[LeaveRecord]:
    for r in records:
        if r.employee_id == employee_id and r.status == LeaveStatus.APPROVED and r.covers(day):
            return r
    return None
