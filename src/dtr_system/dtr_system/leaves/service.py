from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import FALLBACK_LEAVE_RECIPIENT
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..notifications.repository import NotificationRepository
from .model import COMMUTATION_CHOICES, LeaveDetails, LeaveRecord, primary_leave_type
from .repository import LeaveRepository

_logger = logging.getLogger(__name__)

DECIDING_ROLES = (Role.ADMIN, Role.HEAD, Role.IT)


class LeaveService:
    """Use case: leave applications (Civil Service Form No. 6) and their approval."""

    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        notifications: NotificationRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._leaves = leaves
        self._employees = employees
        self._notifications = notifications
        self._clock = clock

    def _validate(
        self,
        *,
        employee_id: str,
        start_date: date,
        end_date: date,
        details: LeaveDetails,
        exclude_id: Optional[str] = None,
    ) -> None:
        if not details.has_leave_type():
            raise ValidationError("Please select at least one type of leave.")
        if details.num_working_days <= 0:
            raise ValidationError("Please enter a valid number of working days.")
        if details.commutation not in COMMUTATION_CHOICES:
            raise ValidationError("Commutation must be 'Not Requested' or 'Requested'.")
        if end_date < start_date:
            raise ValidationError("End date cannot be before the start date.")
        if self._leaves.find_interval_overlap(employee_id, start_date, end_date, exclude_id):
            raise ValidationError("The selected dates conflict with an existing leave application.")

    def _head_of(self, department: str) -> str:
        for e in self._employees.list_by_department(department):
            if e.is_manager:
                return e.employee_id
        return FALLBACK_LEAVE_RECIPIENT

    def file_leave(
        self,
        *,
        employee_id: str,
        start_date: date,
        end_date: date,
        details: LeaveDetails,
    ) -> LeaveRecord:
        employee = self._employees.find_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")

        self._validate(employee_id=employee.employee_id, start_date=start_date, end_date=end_date, details=details)

        record = LeaveRecord(
            leave_id=f"leave-{uuid.uuid4().hex[:12]}",
            employee_id=employee.employee_id,
            employee_name=employee.name,
            department=employee.department,
            start_date=start_date,
            end_date=end_date,
            primary_leave_type=primary_leave_type(details),
            status=LeaveStatus.PENDING,
            details=details,
            created_at=self._clock(),
        )
        self._leaves.save(record)

        recipient = self._head_of(record.department)
        self._notifications.publish(recipient, f"{record.employee_name} filed a {record.primary_leave_type}.")
        _logger.info("Leave %s filed by %s (%s)", record.leave_id, record.employee_id, record.primary_leave_type)
        return record

    def update_leave(
        self,
        leave_id: str,
        *,
        start_date: date,
        end_date: date,
        details: LeaveDetails,
    ) -> LeaveRecord:
        current = self.get_leave(leave_id)
        self._validate(
            employee_id=current.employee_id,
            start_date=start_date,
            end_date=end_date,
            details=details,
            exclude_id=current.leave_id,
        )
        updated = replace(
            current,
            start_date=start_date,
            end_date=end_date,
            details=details,
            primary_leave_type=primary_leave_type(details),
        )
        self._leaves.save(updated)
        _logger.info("Leave %s updated", leave_id)
        return updated

    def decide(self, leave_id: str, status: LeaveStatus, *, actor_role: Role, actor_department: Optional[str] = None) -> LeaveRecord:
        if actor_role not in DECIDING_ROLES:
            raise AuthorizationError("You are not allowed to approve or reject leave.")
        current = self.get_leave(leave_id)
        if actor_role == Role.HEAD and current.department != actor_department:
            raise AuthorizationError("You can only decide leave for your own department.")
        if status == LeaveStatus.PENDING:
            raise ValidationError("A decision must be Approved or Rejected.")
        if current.status != LeaveStatus.PENDING:
            raise ValidationError("Only pending applications can be decided.")

        updated = replace(current, status=status)
        self._leaves.save(updated)
        self._notifications.publish(
            updated.employee_id,
            f"Your {updated.primary_leave_type} has been {status.value.lower()}.",
        )
        _logger.info("Leave %s %s", leave_id, status.value.lower())
        return updated

    def delete_leave(self, leave_id: str) -> None:
        if not self._leaves.delete(leave_id):
            raise NotFoundError("Leave record not found")
        _logger.info("Leave %s deleted", leave_id)

    def get_leave(self, leave_id: str) -> LeaveRecord:
        record = self._leaves.get_by_id(leave_id)
        if not record:
            raise NotFoundError("Leave record not found")
        return record

    def list_for_employee(self, employee_id: str) -> Sequence[LeaveRecord]:
        return self._leaves.list_for_employee(employee_id)

    def list_for_department(self, department: str) -> Sequence[LeaveRecord]:
        return self._leaves.list_for_department(department)

    def list_all(self) -> Sequence[LeaveRecord]:
        return self._leaves.list_all()

    def leave_on(self, employee_id: str, day: date) -> Optional[LeaveRecord]:
        return self._leaves.find_active_overlap(employee_id, day)
