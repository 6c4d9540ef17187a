from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.locks import KeyedLock
from ..core.constants import (
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_POSITION_TIMEOUT_MS,
    ELEVATED_RECIPIENTS,
    LOCATION_THRESHOLD_METERS,
    STANDARD_PUNCH_ORDER,
)
from ..core.enums import Punch
from ..core.exceptions import (
    DepartmentMismatch,
    NotFoundError,
    OnApprovedLeave,
    ScanError,
    StorageFailure,
    UnknownDepartment,
    UnknownEmployee,
    ValidationError,
)
from ..employees.department_repository import DepartmentRepository
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRepository
from ..notifications.repository import NotificationRepository
from .factory import AttendanceStrategyFactory
from .geofence import evaluate_geofence
from .model import DailyAttendanceRecord, ScanResult, record_key
from .payload import require_department_scan
from .position import PositionError, PositionFix, PositionProvider, PositionResult, resolve_position
from .repository import DailyRecordStore

_logger = logging.getLogger(__name__)

LOCATION_ADVISORY = "Could not get location. Scan will proceed without verification."
OUT_OF_RANGE_SUFFIX = " (Location was out of range)"


@dataclass(frozen=True)
class TimeLogEdit:
    """Admin timesheet row: wall-clock punches for one day (None = cleared)."""

    work_date: date
    time_in: Optional[time] = None
    break_out: Optional[time] = None
    break_in: Optional[time] = None
    time_out: Optional[time] = None

    def punch_time(self, punch: Punch) -> Optional[time]:
        return getattr(self, punch.field_name)


class AttendanceService:
    """Use case: record QR scans and maintain daily time records."""

    def __init__(
        self,
        records: DailyRecordStore,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        leaves: LeaveRepository,
        notifications: NotificationRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        threshold_m: float = LOCATION_THRESHOLD_METERS,
        position_timeout_ms: int = DEFAULT_POSITION_TIMEOUT_MS,
        lock: KeyedLock | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._records = records
        self._employees = employees
        self._departments = departments
        self._leaves = leaves
        self._notifications = notifications
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._threshold_m = float(threshold_m)
        self._position_timeout_ms = int(position_timeout_ms)
        self._lock = lock or KeyedLock()
        self._clock = clock

    def record_scan(
        self,
        employee_id: str,
        payload: Any,
        position: Optional[PositionResult] = None,
        *,
        now: datetime | None = None,
    ) -> ScanResult:
        """Validate a department code scan and record the next punch of the day.

        `position` is the device fix, or a PositionError / None when no fix could
        be taken; the scan then proceeds unverified with an advisory.
        """
        now = now or self._clock()
        today = now.date()

        try:
            employee = self._employees.find_by_id(employee_id)
            if not employee:
                raise UnknownEmployee(employee_id)

            scan = require_department_scan(payload)
            department = self._departments.find_by_name(scan.department)
            if not department:
                raise UnknownDepartment(scan.department)

            if employee.department != scan.department:
                raise DepartmentMismatch(employee.department, scan.department)

            leave = self._leaves.find_active_overlap(employee.employee_id, today)
            if leave:
                raise OnApprovedLeave(employee.name, leave.primary_leave_type)
        except ScanError as e:
            _logger.warning("Scan rejected for %s: %s (%s)", employee_id, e.kind, e)
            raise

        fix = position if isinstance(position, PositionFix) else None
        location = fix.point if fix else None
        geofence = evaluate_geofence(location, department, self._threshold_m)
        out_of_range = bool(geofence and geofence.out_of_range)

        key = record_key(employee.employee_id, today)
        with self._lock.hold(key):
            record = self._records.find(employee.employee_id, today)
            if record is None:
                record = DailyAttendanceRecord.blank(employee.employee_id, employee.department, today)

            strategy = self._factory.for_record(record)
            try:
                decision = strategy.decide(record=record, now=now, employee_name=employee.name)
            except ScanError as e:
                _logger.warning("Scan rejected for %s: %s (%s)", employee_id, e.kind, e)
                raise

            updated = record.with_punch(decision.punch, now, location=location, out_of_range=out_of_range)
            try:
                self._records.upsert(updated)
            except StorageFailure:
                _logger.error("Could not store %s for %s", decision.punch.label, key)
                raise

        if out_of_range:
            _logger.warning(
                "%s recorded %s %.0fm from the %s office",
                employee.employee_id, decision.punch.label, geofence.distance_m, department.name,
            )
            text = geofence.notification_text(employee.name, department.name)
            for recipient in ELEVATED_RECIPIENTS:
                self._notifications.publish(recipient, text)
        else:
            _logger.info("%s recorded %s for %s", employee.employee_id, decision.punch.label, today.isoformat())

        message = decision.success_message(employee.name)
        if out_of_range:
            message += OUT_OF_RANGE_SUFFIX
        if fix is None:
            message += f" ({LOCATION_ADVISORY})"

        return ScanResult(
            message=message,
            record_id=updated.record_id,
            punch=decision.punch,
            is_out_of_range=out_of_range,
        )

    def scan_with_provider(
        self,
        employee_id: str,
        payload: Any,
        provider: PositionProvider,
        *,
        timeout_ms: int | None = None,
        now: datetime | None = None,
    ) -> ScanResult:
        position = resolve_position(provider, timeout_ms or self._position_timeout_ms)
        if isinstance(position, PositionError):
            _logger.info("No position fix for %s: %s", employee_id, position.message)
        return self.record_scan(employee_id, payload, position, now=now)

    def schedule_on_duty(self, employee_id: str, work_date: date) -> DailyAttendanceRecord:
        employee = self._employees.find_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")

        key = record_key(employee.employee_id, work_date)
        with self._lock.hold(key):
            if self._records.find(employee.employee_id, work_date):
                raise ValidationError(
                    f"{employee.name} already has a time record on {work_date.isoformat()}"
                )
            record = DailyAttendanceRecord.blank(
                employee.employee_id, employee.department, work_date, on_duty=True
            )
            self._records.upsert(record)

        _logger.info("On-duty scheduled for %s on %s", employee.employee_id, work_date.isoformat())
        return record

    def update_time_logs(self, employee_id: str, edits: Sequence[TimeLogEdit]) -> list[DailyAttendanceRecord]:
        """Replace an employee's punches for the edited days.

        Days left with no punch lose their record, unless it is an on-duty schedule.
        All days are written together; a failed write leaves every day unchanged.
        """
        employee = self._employees.find_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")

        for edit in edits:
            self._validate_edit(edit)

        # A repeated day keeps its last edit.
        by_day = {edit.work_date: edit for edit in edits}
        keys = [record_key(employee.employee_id, d) for d in by_day]

        saved: list[DailyAttendanceRecord] = []
        removed: list[str] = []
        with self._lock.hold_many(keys):
            for work_date, edit in by_day.items():
                existing = self._records.find(employee.employee_id, work_date)
                base = existing or DailyAttendanceRecord.blank(employee.employee_id, employee.department, work_date)
                values = {
                    p.field_name: (
                        datetime.combine(work_date, edit.punch_time(p)) if edit.punch_time(p) else None
                    )
                    for p in STANDARD_PUNCH_ORDER
                }
                updated = DailyAttendanceRecord(
                    record_id=base.record_id,
                    employee_id=base.employee_id,
                    department=base.department,
                    work_date=base.work_date,
                    on_duty=base.on_duty,
                    scan_location=base.scan_location,
                    is_out_of_range=base.is_out_of_range,
                    **values,
                )

                if updated.has_any_punch() or updated.on_duty:
                    saved.append(updated)
                elif existing:
                    removed.append(existing.record_id)

            self._records.save_batch(saved, removed)

        _logger.info("Timesheet updated for %s (%d day(s))", employee.employee_id, len(by_day))
        return saved

    @staticmethod
    def _validate_edit(edit: TimeLogEdit) -> None:
        previous: Optional[time] = None
        for punch in STANDARD_PUNCH_ORDER:
            value = edit.punch_time(punch)
            if value is None:
                continue
            if previous is not None and value < previous:
                raise ValidationError(
                    f"{punch.label} on {edit.work_date.isoformat()} is earlier than the punch before it"
                )
            previous = value

    def get_record(self, record_id: str) -> DailyAttendanceRecord:
        record = self._records.get_by_id(record_id)
        if not record:
            raise NotFoundError("Time record not found")
        return record

    def delete_record(self, record_id: str) -> None:
        if not self._records.delete(record_id):
            raise NotFoundError("Time record not found")
        _logger.info("Time record %s deleted", record_id)

    def clear_logs(self, department: str) -> int:
        """Delete all time records of a department, or every record for "All"."""
        target = None if department == "All" else department
        count = self._records.clear(target)
        _logger.warning("Cleared %d time record(s) for %s", count, department)
        return count

    def get_history(self, employee_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[DailyAttendanceRecord]:
        return self._records.recent_for_employee(employee_id, int(limit))

    def get_today_record(self, employee_id: str, *, now: datetime | None = None) -> Optional[DailyAttendanceRecord]:
        today = (now or self._clock()).date()
        return self._records.find(employee_id, today)

    def list_records(
        self,
        *,
        start_date: date,
        end_date: date,
        department: Optional[str] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[DailyAttendanceRecord]:
        if end_date < start_date:
            raise ValidationError("End date cannot be before the start date.")
        return self._records.list_range(
            start_date=start_date,
            end_date=end_date,
            department=department,
            employee_id=employee_id,
        )
