from __future__ import annotations

from datetime import date, datetime

import pytest

from src.dtr_system.dtr_system.attendance.position import PositionError, PositionFix, StaticPositionProvider
from src.dtr_system.dtr_system.attendance.service import LOCATION_ADVISORY, OUT_OF_RANGE_SUFFIX
from src.dtr_system.dtr_system.core.enums import LeaveStatus, Punch, Role
from src.dtr_system.dtr_system.core.exceptions import (
    AlreadyComplete,
    DepartmentMismatch,
    InvalidPayload,
    OnApprovedLeave,
    OutsideAllowedWindow,
    StorageFailure,
    UnknownDepartment,
    UnknownEmployee,
)
from src.dtr_system.dtr_system.leaves.model import LeaveDetails

ENGINEERING_SCAN = {"type": "department_scan", "department": "Engineering"}
AT_OFFICE = PositionFix(latitude=8.5735, longitude=124.7813, accuracy=5)
# About 1.1 km north of the Engineering office.
FAR_AWAY = PositionFix(latitude=8.5835, longitude=124.7813, accuracy=5)


def _at(day: datetime, hh: int, mm: int) -> datetime:
    return day.replace(hour=hh, minute=mm)


def test_first_scan_in_window_records_time_in(container, monday):
    svc = container.attendance_service

    result = svc.record_scan("2002", ENGINEERING_SCAN, AT_OFFICE, now=_at(monday, 7, 30))

    assert result.punch == Punch.TIME_IN
    assert result.message == "Time In for Diana Miller successful."
    assert result.is_out_of_range is False
    record = container.records_repo.find("2002", monday.date())
    assert record.time_in == _at(monday, 7, 30)
    assert record.break_out is None
    assert record.department == "Engineering"
    assert record.scan_location is not None


def test_next_punch_outside_its_window_is_rejected(container, monday):
    svc = container.attendance_service
    svc.record_scan("2002", ENGINEERING_SCAN, AT_OFFICE, now=_at(monday, 7, 30))

    with pytest.raises(OutsideAllowedWindow) as exc:
        svc.record_scan("2002", ENGINEERING_SCAN, AT_OFFICE, now=_at(monday, 7, 45))

    assert str(exc.value) == "Break Out is only allowed between 12:00 PM and 12:30 PM."
    record = container.records_repo.find("2002", monday.date())
    assert record.break_out is None


def test_time_in_before_window_creates_no_record(container, monday):
    with pytest.raises(OutsideAllowedWindow) as exc:
        container.attendance_service.record_scan("2002", ENGINEERING_SCAN, AT_OFFICE, now=_at(monday, 5, 59))

    assert str(exc.value) == "Time In is only allowed between 6:00 AM and 8:00 AM."
    assert container.records_repo.find("2002", monday.date()) is None


def test_window_bounds_are_inclusive(container, monday):
    svc = container.attendance_service

    svc.record_scan("2002", ENGINEERING_SCAN, AT_OFFICE, now=_at(monday, 8, 0))
    result = svc.record_scan("2002", ENGINEERING_SCAN, AT_OFFICE, now=_at(monday, 12, 30))

    assert result.punch == Punch.BREAK_OUT


def test_full_day_then_already_complete(container, monday):
    svc = container.attendance_service
    for hh, mm in ((7, 30), (12, 5), (12, 45), (17, 10)):
        svc.record_scan("2002", ENGINEERING_SCAN, AT_OFFICE, now=_at(monday, hh, mm))

    with pytest.raises(AlreadyComplete) as exc:
        svc.record_scan("2002", ENGINEERING_SCAN, AT_OFFICE, now=_at(monday, 18, 0))

    assert str(exc.value) == "Diana Miller has already completed their time record for today."
    assert exc.value.record_id == "2002-2023-11-06"
    record = container.records_repo.find("2002", monday.date())
    assert record.time_out == _at(monday, 17, 10)


def test_scan_of_other_department_is_denied(container, monday):
    with pytest.raises(DepartmentMismatch) as exc:
        container.attendance_service.record_scan(
            "2002", {"type": "department_scan", "department": "Finance"}, AT_OFFICE, now=_at(monday, 7, 30)
        )

    assert "(Engineering)" in str(exc.value)
    assert container.records_repo.find("2002", monday.date()) is None


def test_unknown_employee_and_department(container, monday):
    svc = container.attendance_service

    with pytest.raises(UnknownEmployee):
        svc.record_scan("9999", ENGINEERING_SCAN, AT_OFFICE, now=_at(monday, 7, 30))
    with pytest.raises(UnknownDepartment):
        svc.record_scan("2002", {"department": "Nowhere"}, AT_OFFICE, now=_at(monday, 7, 30))


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        '{"id": "2002", "name": "Diana Miller", "department": "Engineering"}',
        {"department": "Engineering", "extra": 1},
        {"type": "something_else", "department": "Engineering"},
    ],
)
def test_non_department_payloads_are_rejected(container, monday, payload):
    with pytest.raises(InvalidPayload):
        container.attendance_service.record_scan("2002", payload, AT_OFFICE, now=_at(monday, 7, 30))


def test_scan_while_on_approved_leave(container, monday):
    leave = container.leave_service.file_leave(
        employee_id="2002",
        start_date=date(2023, 11, 6),
        end_date=date(2023, 11, 7),
        details=LeaveDetails(leave_types=("vacation",), num_working_days=2),
    )
    container.leave_service.decide(
        leave.leave_id, LeaveStatus.APPROVED, actor_role=Role.HEAD, actor_department="Engineering"
    )

    with pytest.raises(OnApprovedLeave) as exc:
        container.attendance_service.record_scan("2002", ENGINEERING_SCAN, AT_OFFICE, now=_at(monday, 7, 30))

    assert str(exc.value) == "Diana Miller is on Vacation today."
    assert container.records_repo.find("2002", monday.date()) is None


def test_pending_leave_does_not_block_scanning(container, monday):
    container.leave_service.file_leave(
        employee_id="2002",
        start_date=date(2023, 11, 6),
        end_date=date(2023, 11, 6),
        details=LeaveDetails(leave_types=("sick",), num_working_days=1),
    )

    result = container.attendance_service.record_scan("2002", ENGINEERING_SCAN, AT_OFFICE, now=_at(monday, 7, 30))

    assert result.punch == Punch.TIME_IN


def test_out_of_range_scan_is_recorded_and_flagged(container, monday):
    result = container.attendance_service.record_scan("2002", ENGINEERING_SCAN, FAR_AWAY, now=_at(monday, 7, 30))

    assert result.is_out_of_range is True
    assert result.message == "Time In for Diana Miller successful." + OUT_OF_RANGE_SUFFIX
    record = container.records_repo.find("2002", monday.date())
    assert record.time_in == _at(monday, 7, 30)
    assert record.is_out_of_range is True

    for recipient in ("admin", "it"):
        inbox = container.notification_service.inbox(recipient)
        assert len(inbox) == 1
        assert inbox[0].message.startswith("Diana Miller scanned ")
        assert inbox[0].message.endswith("away from the Engineering office.")


def test_range_flag_follows_latest_punch(container, monday):
    svc = container.attendance_service
    svc.record_scan("2002", ENGINEERING_SCAN, FAR_AWAY, now=_at(monday, 7, 30))
    svc.record_scan("2002", ENGINEERING_SCAN, AT_OFFICE, now=_at(monday, 12, 5))

    record = container.records_repo.find("2002", monday.date())
    assert record.is_out_of_range is False


@pytest.mark.parametrize("position", [None, PositionError(message="User denied Geolocation")])
def test_missing_position_proceeds_with_advisory(container, monday, position):
    result = container.attendance_service.record_scan("2002", ENGINEERING_SCAN, position, now=_at(monday, 7, 30))

    assert result.punch == Punch.TIME_IN
    assert LOCATION_ADVISORY in result.message
    assert result.is_out_of_range is False
    record = container.records_repo.find("2002", monday.date())
    assert record.scan_location is None
    assert container.notification_service.inbox("admin") == []


def test_provider_failure_becomes_advisory(container, monday):
    provider = StaticPositionProvider(None, error="Timeout expired")

    result = container.attendance_service.scan_with_provider(
        "2002", ENGINEERING_SCAN, provider, now=_at(monday, 7, 30)
    )

    assert result.punch == Punch.TIME_IN
    assert LOCATION_ADVISORY in result.message


def test_on_duty_day_takes_two_punches_any_time(container, monday):
    svc = container.attendance_service
    svc.schedule_on_duty("2002", monday.date())

    first = svc.record_scan("2002", ENGINEERING_SCAN, AT_OFFICE, now=_at(monday, 20, 0))
    second = svc.record_scan("2002", ENGINEERING_SCAN, AT_OFFICE, now=_at(monday, 21, 0))

    assert first.message == "On-duty Time In for Diana Miller successful."
    assert second.punch == Punch.TIME_OUT
    record = container.records_repo.find("2002", monday.date())
    assert record.on_duty is True
    assert record.break_out is None and record.break_in is None

    with pytest.raises(AlreadyComplete) as exc:
        svc.record_scan("2002", ENGINEERING_SCAN, AT_OFFICE, now=_at(monday, 22, 0))
    assert str(exc.value) == "On-duty record already complete for today."


def test_scans_on_different_days_keep_separate_records(container, monday):
    svc = container.attendance_service
    svc.record_scan("2002", ENGINEERING_SCAN, AT_OFFICE, now=_at(monday, 7, 30))
    tuesday = monday.replace(day=7)
    result = svc.record_scan("2002", ENGINEERING_SCAN, AT_OFFICE, now=_at(tuesday, 7, 35))

    assert result.punch == Punch.TIME_IN
    assert [r.work_date.day for r in svc.get_history("2002")] == [7, 6]


def test_failed_store_records_nothing_and_sends_no_alert(container, state, monday, monkeypatch):
    def boom():
        raise StorageFailure("Could not save data. The change was not recorded.")

    monkeypatch.setattr(state, "_flush", boom)

    with pytest.raises(StorageFailure):
        container.attendance_service.record_scan("2002", ENGINEERING_SCAN, FAR_AWAY, now=_at(monday, 7, 30))

    assert container.records_repo.find("2002", monday.date()) is None
    assert list(container.notification_service.inbox("admin")) == []
    assert list(container.notification_service.inbox("it")) == []
