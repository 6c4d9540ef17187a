from datetime import date

from src.dtr_system.dtr_system.core.enums import LeaveStatus
from src.dtr_system.dtr_system.leaves.model import LeaveDetails, LeaveRecord
from src.dtr_system.dtr_system.leaves.overlap import find_approved_covering, has_overlap


def _leave(leave_id, start, end, status=LeaveStatus.PENDING, employee_id="2002"):
    return LeaveRecord(
        leave_id=leave_id,
        employee_id=employee_id,
        employee_name="Diana Miller",
        department="Engineering",
        start_date=start,
        end_date=end,
        primary_leave_type="Vacation",
        status=status,
        details=LeaveDetails(leave_types=("vacation",), num_working_days=1),
    )


def test_intersecting_intervals_overlap():
    existing = [_leave("a", date(2023, 11, 3), date(2023, 11, 10))]

    assert has_overlap(existing, "2002", date(2023, 11, 1), date(2023, 11, 5)) is True


def test_disjoint_intervals_do_not_overlap():
    existing = [_leave("a", date(2023, 11, 3), date(2023, 11, 4))]

    assert has_overlap(existing, "2002", date(2023, 11, 1), date(2023, 11, 2)) is False


def test_shared_boundary_day_overlaps():
    existing = [_leave("a", date(2023, 11, 3), date(2023, 11, 4))]

    assert has_overlap(existing, "2002", date(2023, 11, 4), date(2023, 11, 6)) is True


def test_rejected_other_employee_and_self_are_ignored():
    existing = [
        _leave("a", date(2023, 11, 3), date(2023, 11, 10), status=LeaveStatus.REJECTED),
        _leave("b", date(2023, 11, 3), date(2023, 11, 10), employee_id="4001"),
        _leave("c", date(2023, 11, 3), date(2023, 11, 10)),
    ]

    assert has_overlap(existing, "2002", date(2023, 11, 1), date(2023, 11, 5), exclude_id="c") is False


def test_only_approved_leave_covers_a_day():
    existing = [
        _leave("a", date(2023, 11, 3), date(2023, 11, 10)),
        _leave("b", date(2023, 11, 12), date(2023, 11, 12), status=LeaveStatus.APPROVED),
    ]

    assert find_approved_covering(existing, "2002", date(2023, 11, 5)) is None
    assert find_approved_covering(existing, "2002", date(2023, 11, 12)).leave_id == "b"
