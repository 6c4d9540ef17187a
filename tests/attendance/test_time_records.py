from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.dtr_system.dtr_system.attendance.service import TimeLogEdit
from src.dtr_system.dtr_system.core.exceptions import NotFoundError, StorageFailure, ValidationError

DAY = date(2023, 11, 6)


def test_update_time_logs_creates_and_replaces(container):
    svc = container.attendance_service

    svc.update_time_logs("2002", [TimeLogEdit(DAY, time_in=time(7, 55), time_out=time(17, 5))])
    record = container.records_repo.find("2002", DAY)
    assert record.time_in == datetime(2023, 11, 6, 7, 55)
    assert record.time_out == datetime(2023, 11, 6, 17, 5)

    svc.update_time_logs("2002", [TimeLogEdit(DAY, time_in=time(8, 0))])
    record = container.records_repo.find("2002", DAY)
    assert record.time_in == datetime(2023, 11, 6, 8, 0)
    assert record.time_out is None


def test_clearing_all_punches_removes_the_record(container):
    svc = container.attendance_service
    svc.update_time_logs("2002", [TimeLogEdit(DAY, time_in=time(7, 55))])

    svc.update_time_logs("2002", [TimeLogEdit(DAY)])

    assert container.records_repo.find("2002", DAY) is None


def test_cleared_on_duty_day_is_kept(container):
    svc = container.attendance_service
    svc.schedule_on_duty("2002", DAY)

    svc.update_time_logs("2002", [TimeLogEdit(DAY)])

    assert container.records_repo.find("2002", DAY).on_duty is True


def test_out_of_order_edit_is_rejected(container):
    with pytest.raises(ValidationError):
        container.attendance_service.update_time_logs(
            "2002", [TimeLogEdit(DAY, time_in=time(13, 0), break_out=time(12, 0))]
        )
    assert container.records_repo.find("2002", DAY) is None


def test_schedule_on_duty_rejects_existing_day(container):
    svc = container.attendance_service
    svc.update_time_logs("2002", [TimeLogEdit(DAY, time_in=time(7, 55))])

    with pytest.raises(ValidationError):
        svc.schedule_on_duty("2002", DAY)
    with pytest.raises(NotFoundError):
        svc.schedule_on_duty("nobody", DAY)


def test_clear_logs_by_department_and_all(container):
    svc = container.attendance_service
    svc.update_time_logs("2002", [TimeLogEdit(DAY, time_in=time(7, 55))])
    svc.update_time_logs("4001", [TimeLogEdit(DAY, time_in=time(7, 50))])

    assert svc.clear_logs("Engineering") == 1
    assert container.records_repo.find("4001", DAY) is not None
    assert svc.clear_logs("All") == 1
    assert svc.list_records(start_date=DAY, end_date=DAY) == []


def test_delete_record_and_lookup(container):
    svc = container.attendance_service
    svc.update_time_logs("2002", [TimeLogEdit(DAY, time_in=time(7, 55))])

    assert svc.get_record("2002-2023-11-06").employee_id == "2002"
    svc.delete_record("2002-2023-11-06")
    with pytest.raises(NotFoundError):
        svc.delete_record("2002-2023-11-06")


def test_multi_day_edit_is_written_once(container, state, monkeypatch):
    writes = []
    original = state._flush
    monkeypatch.setattr(state, "_flush", lambda: (writes.append(1), original()))

    saved = container.attendance_service.update_time_logs(
        "2002", [TimeLogEdit(DAY, time_in=time(7, 55)), TimeLogEdit(date(2023, 11, 7), time_in=time(7, 40))]
    )

    assert len(saved) == 2
    assert len(writes) == 1


def test_failed_multi_day_edit_changes_no_day(container, state, monkeypatch):
    svc = container.attendance_service
    svc.update_time_logs("2002", [TimeLogEdit(DAY, time_in=time(7, 55))])

    def boom():
        raise StorageFailure("Could not save data. The change was not recorded.")

    monkeypatch.setattr(state, "_flush", boom)
    with pytest.raises(StorageFailure):
        svc.update_time_logs(
            "2002", [TimeLogEdit(DAY, time_in=time(8, 10)), TimeLogEdit(date(2023, 11, 7), time_in=time(7, 40))]
        )

    assert container.records_repo.find("2002", DAY).time_in == datetime(2023, 11, 6, 7, 55)
    assert container.records_repo.find("2002", date(2023, 11, 7)) is None
