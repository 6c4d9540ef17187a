from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from ...attendance.model import DailyAttendanceRecord
from ...core.constants import MAX_BREAK_MINUTES, OFFICIAL_END, OFFICIAL_START
from .base import DtrCalculator


def _minutes(seconds: float) -> int:
    return int(seconds // 60)


class StandardDtrCalculator(DtrCalculator):
    """Standard rule: (out - in) - break, against the 8:00-17:00 office day."""

    def __init__(
        self,
        *,
        official_start: time = OFFICIAL_START,
        official_end: time = OFFICIAL_END,
        max_break_minutes: int = MAX_BREAK_MINUTES,
    ):
        self._official_start = official_start
        self._official_end = official_end
        self._max_break_minutes = int(max_break_minutes)

    @staticmethod
    def _break_seconds(record: DailyAttendanceRecord) -> float:
        if record.break_out and record.break_in and record.break_in > record.break_out:
            return (record.break_in - record.break_out).total_seconds()
        return 0.0

    def worked_minutes(self, record: DailyAttendanceRecord) -> Optional[int]:
        if not record.time_in or not record.time_out:
            return None
        seconds = (record.time_out - record.time_in).total_seconds() - self._break_seconds(record)
        if seconds < 0:
            return None
        return _minutes(seconds)

    def late_minutes(self, record: DailyAttendanceRecord) -> int:
        if not record.time_in:
            return 0
        start = datetime.combine(record.work_date, self._official_start)
        return _minutes((record.time_in - start).total_seconds()) if record.time_in > start else 0

    def undertime_minutes(self, record: DailyAttendanceRecord) -> int:
        if not record.time_out:
            return 0
        end = datetime.combine(record.work_date, self._official_end)
        return _minutes((end - record.time_out).total_seconds()) if record.time_out < end else 0

    def break_overrun_minutes(self, record: DailyAttendanceRecord) -> int:
        over = self._break_seconds(record) - self._max_break_minutes * 60
        return _minutes(over) if over > 0 else 0
