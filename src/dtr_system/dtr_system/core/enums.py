from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Session tier resolved at login; drives authorization."""

    ADMIN = "admin"
    IT = "it"
    HEAD = "head"
    EMPLOYEE = "employee"


class EmployeeRole(str, Enum):
    """Authorization tier stored on the employee record."""

    USER = "User"
    MANAGER = "Manager"
    ADMIN = "Admin"


class EmployeeType(str, Enum):
    PERMANENT = "Permanent"
    CASUAL = "Casual"
    JOB_ORDER = "Job Order"


class LeaveStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class Punch(str, Enum):
    """The four DTR punches, in the order they must be recorded."""

    TIME_IN = "timeIn"
    BREAK_OUT = "breakOut"
    BREAK_IN = "breakIn"
    TIME_OUT = "timeOut"

    @property
    def label(self) -> str:
        return {
            Punch.TIME_IN: "Time In",
            Punch.BREAK_OUT: "Break Out",
            Punch.BREAK_IN: "Break In",
            Punch.TIME_OUT: "Time Out",
        }[self]

    @property
    def field_name(self) -> str:
        return {
            Punch.TIME_IN: "time_in",
            Punch.BREAK_OUT: "break_out",
            Punch.BREAK_IN: "break_in",
            Punch.TIME_OUT: "time_out",
        }[self]


class TaskStatus(str, Enum):
    TO_DO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class PayloadKind(str, Enum):
    """Discriminant embedded in QR payloads at encode time."""

    DEPARTMENT_SCAN = "department_scan"
    EMPLOYEE_IDENTITY = "employee_identity"
