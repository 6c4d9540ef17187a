from __future__ import annotations

from datetime import date

import pytest

from src.dtr_system.dtr_system.core.enums import LeaveStatus, Role
from src.dtr_system.dtr_system.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.dtr_system.dtr_system.leaves.model import LeaveDetails, primary_leave_type

VACATION = LeaveDetails(leave_types=("vacation",), num_working_days=3)


def _file(container, start=date(2023, 11, 1), end=date(2023, 11, 5), details=VACATION, employee_id="2002"):
    return container.leave_service.file_leave(
        employee_id=employee_id, start_date=start, end_date=end, details=details
    )


def test_filing_notifies_department_head(container):
    record = _file(container)

    assert record.status == LeaveStatus.PENDING
    assert record.department == "Engineering"
    assert record.primary_leave_type == "Vacation"
    messages = [n.message for n in container.notification_service.inbox("2001")]
    assert messages == ["Diana Miller filed a Vacation."]


def test_department_without_head_notifies_admin(container):
    _file(container, employee_id="4001")

    assert [n.message for n in container.notification_service.inbox("admin")] == [
        "Hannah Martinez filed a Vacation."
    ]


def test_overlapping_application_is_rejected(container):
    _file(container)

    with pytest.raises(ValidationError):
        _file(container, start=date(2023, 11, 3), end=date(2023, 11, 10))


@pytest.mark.parametrize(
    "details, message",
    [
        (LeaveDetails(num_working_days=1), "Please select at least one type of leave."),
        (LeaveDetails(leave_types=("sick",), num_working_days=0), "Please enter a valid number of working days."),
    ],
)
def test_form_validation(container, details, message):
    with pytest.raises(ValidationError) as exc:
        _file(container, details=details)

    assert str(exc.value) == message


def test_end_before_start_is_rejected(container):
    with pytest.raises(ValidationError):
        _file(container, start=date(2023, 11, 5), end=date(2023, 11, 1))


def test_head_approves_own_department_and_employee_is_notified(container):
    record = _file(container)

    decided = container.leave_service.decide(
        record.leave_id, LeaveStatus.APPROVED, actor_role=Role.HEAD, actor_department="Engineering"
    )

    assert decided.status == LeaveStatus.APPROVED
    assert container.leave_service.leave_on("2002", date(2023, 11, 2)).leave_id == record.leave_id
    assert [n.message for n in container.notification_service.inbox("2002")] == ["Your Vacation has been approved."]


def test_decision_permissions(container):
    record = _file(container)

    with pytest.raises(AuthorizationError):
        container.leave_service.decide(record.leave_id, LeaveStatus.APPROVED, actor_role=Role.EMPLOYEE)
    with pytest.raises(AuthorizationError):
        container.leave_service.decide(
            record.leave_id, LeaveStatus.APPROVED, actor_role=Role.HEAD, actor_department="Finance"
        )
    with pytest.raises(ValidationError):
        container.leave_service.decide(record.leave_id, LeaveStatus.PENDING, actor_role=Role.ADMIN)


def test_rejected_leave_frees_the_dates(container):
    record = _file(container)
    container.leave_service.decide(record.leave_id, LeaveStatus.REJECTED, actor_role=Role.IT)

    again = _file(container)

    assert again.leave_id != record.leave_id


def test_rejected_leave_cannot_be_approved_over_a_newer_application(container):
    first = _file(container, start=date(2023, 11, 6), end=date(2023, 11, 7))
    container.leave_service.decide(first.leave_id, LeaveStatus.REJECTED, actor_role=Role.ADMIN)
    _file(container, start=date(2023, 11, 7), end=date(2023, 11, 8))

    with pytest.raises(ValidationError) as exc:
        container.leave_service.decide(first.leave_id, LeaveStatus.APPROVED, actor_role=Role.ADMIN)

    assert str(exc.value) == "Only pending applications can be decided."
    assert container.leave_service.get_leave(first.leave_id).status == LeaveStatus.REJECTED
    active = [r for r in container.leave_service.list_for_employee("2002") if r.status != LeaveStatus.REJECTED]
    assert len(active) == 1


def test_update_ignores_its_own_interval(container):
    record = _file(container)

    updated = container.leave_service.update_leave(
        record.leave_id,
        start_date=date(2023, 11, 2),
        end_date=date(2023, 11, 6),
        details=LeaveDetails(leave_types=("sick",), others="Check-up", num_working_days=3),
    )

    assert updated.primary_leave_type == "Sick, Check-up"


def test_delete_leave(container):
    record = _file(container)
    container.leave_service.delete_leave(record.leave_id)

    with pytest.raises(NotFoundError):
        container.leave_service.get_leave(record.leave_id)


def test_primary_leave_type_labels():
    details = LeaveDetails(leave_types=("mandatoryForced", "vawc", "specialLeaveWomen"))

    assert primary_leave_type(details) == "Mandatory Forced, Vawc, Special Leave Women"
