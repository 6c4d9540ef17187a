from datetime import date, datetime, time

from src.dtr_system.dtr_system.attendance.model import DailyAttendanceRecord
from src.dtr_system.dtr_system.reports.calculator.standard_calculator import StandardDtrCalculator
from src.dtr_system.dtr_system.reports.service import total_label

DAY = date(2023, 11, 6)


def _record(**punches):
    return DailyAttendanceRecord(
        record_id="1-2023-11-06",
        employee_id="1",
        department="Finance",
        work_date=DAY,
        **{k: datetime.combine(DAY, v) for k, v in punches.items()},
    )


def test_worked_minutes_subtract_break():
    r = _record(time_in=time(7, 45), break_out=time(12, 0), break_in=time(12, 45), time_out=time(17, 15))
    calc = StandardDtrCalculator()

    assert calc.worked_minutes(r) == 8 * 60 + 45
    assert total_label(r, calc.worked_minutes(r)) == "8h 45m"
    assert calc.late_minutes(r) == 0
    assert calc.undertime_minutes(r) == 0


def test_late_undertime_and_break_overrun():
    r = _record(time_in=time(8, 20), break_out=time(12, 0), break_in=time(13, 30), time_out=time(16, 30))
    calc = StandardDtrCalculator()

    assert calc.late_minutes(r) == 20
    assert calc.undertime_minutes(r) == 30
    assert calc.break_overrun_minutes(r) == 30


def test_labels_for_incomplete_and_invalid_days():
    calc = StandardDtrCalculator()
    pending = _record()
    in_progress = _record(time_in=time(7, 30))
    invalid = _record(time_in=time(17, 0), time_out=time(8, 0))

    assert total_label(pending, calc.worked_minutes(pending)) == "Pending"
    assert total_label(in_progress, calc.worked_minutes(in_progress)) == "In Progress"
    assert total_label(invalid, calc.worked_minutes(invalid)) == "Invalid"
