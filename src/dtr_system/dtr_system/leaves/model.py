from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple

from ..core.enums import LeaveStatus

# Form 6.A checkbox keys, in form order, with their short display labels.
LEAVE_TYPES: Tuple[Tuple[str, str], ...] = (
    ("vacation", "Vacation"),
    ("mandatoryForced", "Mandatory Forced"),
    ("sick", "Sick"),
    ("maternity", "Maternity"),
    ("paternity", "Paternity"),
    ("specialPrivilege", "Special Privilege"),
    ("soloParent", "Solo Parent"),
    ("study", "Study"),
    ("vawc", "Vawc"),
    ("rehabilitation", "Rehabilitation"),
    ("specialLeaveWomen", "Special Leave Women"),
    ("specialEmergency", "Special Emergency"),
    ("adoption", "Adoption"),
)
LEAVE_TYPE_KEYS = tuple(k for k, _ in LEAVE_TYPES)

COMMUTATION_CHOICES = ("Not Requested", "Requested")


@dataclass(frozen=True)
class LeaveDetails:
    """Civil Service Form No. 6 fields the system keeps."""

    leave_types: Tuple[str, ...] = ()
    others: str = ""
    num_working_days: int = 0
    inclusive_dates: str = ""
    commutation: str = "Not Requested"
    position: str = ""
    salary: str = ""
    date_of_filing: Optional[date] = None
    vacation_location: Optional[str] = None
    vacation_location_specify: Optional[str] = None
    sick_location: Optional[str] = None
    sick_location_specify: Optional[str] = None

    def has_leave_type(self) -> bool:
        return bool(self.leave_types) or bool(self.others.strip())


def primary_leave_type(details: LeaveDetails) -> str:
    labels = [label for key, label in LEAVE_TYPES if key in details.leave_types]
    if details.others.strip():
        labels.append(details.others.strip())
    return ", ".join(labels)


@dataclass(frozen=True)
class LeaveRecord:
    leave_id: str
    employee_id: str
    employee_name: str
    department: str
    start_date: date
    end_date: date
    primary_leave_type: str
    status: LeaveStatus
    details: LeaveDetails = field(default_factory=LeaveDetails)
    created_at: Optional[datetime] = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
