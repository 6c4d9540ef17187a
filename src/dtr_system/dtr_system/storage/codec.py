"""Entity <-> JSON mapping for the application-state file and backups.

Field names follow the exported backup layout (camelCase), so backups taken
from older installs restore unchanged.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from ..attendance.model import DailyAttendanceRecord, record_id_for, record_key
from ..common.datetime_utils import format_iso_datetime, parse_iso_date, parse_iso_datetime
from ..common.geo import GeoPoint
from ..core.enums import EmployeeRole, EmployeeType, LeaveStatus, TaskStatus
from ..employees.department_model import Department
from ..employees.model import Employee
from ..leaves.model import LEAVE_TYPE_KEYS, LeaveDetails, LeaveRecord
from ..notifications.model import AppNotification
from ..projects.model import Project, Task


def _date_or_none(value: Optional[str]) -> Optional[date]:
    return parse_iso_date(value) if value else None


def department_to_dict(d: Department) -> Dict[str, Any]:
    return {
        "name": d.name,
        "location": d.location.to_dict() if d.location else None,
        "campus": d.campus,
        "onTravel": d.on_travel,
    }


def department_from_dict(data: Dict[str, Any]) -> Department:
    return Department(
        name=data["name"],
        location=GeoPoint.from_dict(data.get("location")),
        campus=data.get("campus") or "",
        on_travel=bool(data.get("onTravel", False)),
    )


def employee_to_dict(e: Employee) -> Dict[str, Any]:
    return {
        "id": e.employee_id,
        "name": e.name,
        "department": e.department,
        "employeeType": e.employee_type.value,
        "role": e.role.value,
        "positionTitle": e.position_title,
        "username": e.username,
        "passwordHash": e.password_hash,
        "leaveBalance": e.leave_balance,
    }


def employee_from_dict(data: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=str(data["id"]),
        name=data["name"],
        department=data["department"],
        employee_type=EmployeeType(data.get("employeeType", EmployeeType.PERMANENT.value)),
        role=EmployeeRole(data.get("role", EmployeeRole.USER.value)),
        position_title=data.get("positionTitle"),
        username=data.get("username"),
        password_hash=data.get("passwordHash"),
        leave_balance=data.get("leaveBalance", 0) or 0,
    )


def record_to_dict(r: DailyAttendanceRecord) -> Dict[str, Any]:
    return {
        "id": r.record_id,
        "employeeId": r.employee_id,
        "department": r.department,
        "date": r.work_date.isoformat(),
        "timeIn": format_iso_datetime(r.time_in),
        "breakOut": format_iso_datetime(r.break_out),
        "breakIn": format_iso_datetime(r.break_in),
        "timeOut": format_iso_datetime(r.time_out),
        "onDuty": r.on_duty,
        "scanLocation": r.scan_location.to_dict() if r.scan_location else None,
        "isOutOfRange": r.is_out_of_range,
    }


def record_from_dict(data: Dict[str, Any]) -> DailyAttendanceRecord:
    employee_id = str(data["employeeId"])
    work_date = parse_iso_date(data["date"])
    return DailyAttendanceRecord(
        record_id=data.get("id") or record_id_for(employee_id, work_date),
        employee_id=employee_id,
        department=data.get("department") or "",
        work_date=work_date,
        time_in=parse_iso_datetime(data.get("timeIn")),
        break_out=parse_iso_datetime(data.get("breakOut")),
        break_in=parse_iso_datetime(data.get("breakIn")),
        time_out=parse_iso_datetime(data.get("timeOut")),
        on_duty=bool(data.get("onDuty", False)),
        scan_location=GeoPoint.from_dict(data.get("scanLocation")),
        is_out_of_range=bool(data.get("isOutOfRange", False)),
    )


def record_dict_key(data: Dict[str, Any]) -> str:
    return record_key(str(data["employeeId"]), parse_iso_date(data["date"]))


def leave_details_to_dict(d: LeaveDetails) -> Dict[str, Any]:
    leave_type: Dict[str, Any] = {k: k in d.leave_types for k in LEAVE_TYPE_KEYS}
    leave_type["others"] = d.others
    return {
        "leaveType": leave_type,
        "numWorkingDays": str(d.num_working_days),
        "inclusiveDates": d.inclusive_dates,
        "commutation": d.commutation,
        "position": d.position,
        "salary": d.salary,
        "dateOfFiling": d.date_of_filing.isoformat() if d.date_of_filing else "",
        "vacationLocation": d.vacation_location,
        "vacationLocationSpecify": d.vacation_location_specify,
        "sickLocation": d.sick_location,
        "sickLocationSpecify": d.sick_location_specify,
    }


def leave_details_from_dict(data: Optional[Dict[str, Any]]) -> LeaveDetails:
    data = data or {}
    leave_type = data.get("leaveType") or {}
    try:
        days = int(data.get("numWorkingDays") or 0)
    except (TypeError, ValueError):
        days = 0
    return LeaveDetails(
        leave_types=tuple(k for k in LEAVE_TYPE_KEYS if leave_type.get(k) is True),
        others=leave_type.get("others") or "",
        num_working_days=days,
        inclusive_dates=data.get("inclusiveDates") or "",
        commutation=data.get("commutation") or "Not Requested",
        position=data.get("position") or "",
        salary=data.get("salary") or "",
        date_of_filing=_date_or_none(data.get("dateOfFiling")),
        vacation_location=data.get("vacationLocation"),
        vacation_location_specify=data.get("vacationLocationSpecify"),
        sick_location=data.get("sickLocation"),
        sick_location_specify=data.get("sickLocationSpecify"),
    )


def leave_to_dict(r: LeaveRecord) -> Dict[str, Any]:
    return {
        "id": r.leave_id,
        "employeeId": r.employee_id,
        "employeeName": r.employee_name,
        "department": r.department,
        "startDate": r.start_date.isoformat(),
        "endDate": r.end_date.isoformat(),
        "primaryLeaveType": r.primary_leave_type,
        "status": r.status.value,
        "details": leave_details_to_dict(r.details),
        "createdAt": format_iso_datetime(r.created_at),
    }


def leave_from_dict(data: Dict[str, Any]) -> LeaveRecord:
    return LeaveRecord(
        leave_id=str(data["id"]),
        employee_id=str(data["employeeId"]),
        employee_name=data.get("employeeName") or "",
        department=data.get("department") or "",
        start_date=parse_iso_date(data["startDate"]),
        end_date=parse_iso_date(data["endDate"]),
        primary_leave_type=data.get("primaryLeaveType") or "",
        status=LeaveStatus(data.get("status", LeaveStatus.PENDING.value)),
        details=leave_details_from_dict(data.get("details")),
        created_at=parse_iso_datetime(data.get("createdAt")),
    )


def notification_to_dict(n: AppNotification) -> Dict[str, Any]:
    return {
        "id": n.notification_id,
        "recipientId": n.recipient_id,
        "message": n.message,
        "read": n.read,
        "createdAt": format_iso_datetime(n.created_at),
    }


def notification_from_dict(data: Dict[str, Any]) -> AppNotification:
    return AppNotification(
        notification_id=str(data["id"]),
        recipient_id=str(data["recipientId"]),
        message=data.get("message") or "",
        read=bool(data.get("read", False)),
        created_at=parse_iso_datetime(data.get("createdAt")),
    )


def project_to_dict(p: Project) -> Dict[str, Any]:
    return {"id": p.project_id, "name": p.name, "description": p.description}


def project_from_dict(data: Dict[str, Any]) -> Project:
    return Project(project_id=str(data["id"]), name=data["name"], description=data.get("description") or "")


def task_to_dict(t: Task) -> Dict[str, Any]:
    return {
        "id": t.task_id,
        "projectId": t.project_id,
        "title": t.title,
        "description": t.description,
        "assigneeId": t.assignee_id,
        "dueDate": t.due_date.isoformat() if t.due_date else None,
        "status": t.status.value,
        "progress": t.progress,
    }


def task_from_dict(data: Dict[str, Any]) -> Task:
    return Task(
        task_id=str(data["id"]),
        project_id=str(data["projectId"]),
        title=data["title"],
        description=data.get("description") or "",
        assignee_id=data.get("assigneeId"),
        due_date=_date_or_none(data.get("dueDate")),
        status=TaskStatus(data.get("status", TaskStatus.TO_DO.value)),
        progress=int(data.get("progress") or 0),
    )
