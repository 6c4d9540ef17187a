from __future__ import annotations

import json
from datetime import date, time

import pytest

from src.dtr_system.dtr_system.attendance.service import TimeLogEdit
from src.dtr_system.dtr_system.core.enums import EmployeeType
from src.dtr_system.dtr_system.core.exceptions import StorageFailure, ValidationError
from src.dtr_system.dtr_system.storage.state import COLLECTIONS, INVALID_BACKUP, AppState


def test_state_persists_to_disk_and_reloads(tmp_path):
    path = tmp_path / "state.json"
    state = AppState(path)
    with state.mutate("departments") as cols:
        cols["departments"]["Finance"] = {"name": "Finance", "location": None, "campus": "", "onTravel": False}

    reloaded = AppState(path)

    assert reloaded.read("departments")["Finance"]["name"] == "Finance"
    assert set(json.loads(path.read_text(encoding="utf-8"))) == set(COLLECTIONS)


def test_failed_write_rolls_back(container, state, monkeypatch):
    def boom():
        raise StorageFailure("Could not save data. The change was not recorded.")

    monkeypatch.setattr(state, "_flush", boom)

    with pytest.raises(StorageFailure):
        container.attendance_service.update_time_logs("2002", [TimeLogEdit(date(2023, 11, 6), time_in=time(7, 55))])

    assert container.records_repo.find("2002", date(2023, 11, 6)) is None


def test_failed_write_keeps_earlier_values(container, state, monkeypatch):
    container.department_service.add_department(name="Tourism")
    container.employee_service.add_employee(
        employee_id="7001", name="Jo", department="Tourism", employee_type=EmployeeType.JOB_ORDER
    )

    def boom():
        raise StorageFailure("Could not save data. The change was not recorded.")

    monkeypatch.setattr(state, "_flush", boom)
    with pytest.raises(StorageFailure):
        container.employees_repo.rename_department("Tourism", "Travel")

    assert container.employee_service.get_employee("7001").department == "Tourism"


def test_snapshot_restore_round(container, state):
    backup = state.snapshot()
    container.employee_service.delete_employee("3002")

    state.restore(backup)

    assert container.employee_service.get_employee("3002").name == "George Rodriguez"


@pytest.mark.parametrize("data", [None, [], {"departments": []}, {c: {} for c in COLLECTIONS}])
def test_restore_rejects_bad_backups(state, data):
    with pytest.raises(ValidationError) as exc:
        state.restore(data)

    assert str(exc.value) == INVALID_BACKUP


def test_restore_hashes_plain_passwords(container, state):
    backup = state.snapshot()
    for emp in backup["employees"]:
        emp.pop("passwordHash", None)
        if emp["id"] == "admin":
            emp["password"] = "newpass"

    state.restore(backup)

    raw = state.read("employees")["admin"]
    assert "password" not in raw
    assert container.auth_service.authenticate("admin", "newpass").account_id == "admin"
