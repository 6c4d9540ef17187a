from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...attendance.model import DailyAttendanceRecord


class DtrCalculator(ABC):
    """Calculator interface (Strategy Pattern for DTR totals)."""

    @abstractmethod
    def worked_minutes(self, record: DailyAttendanceRecord) -> Optional[int]:
        """Minutes worked, or None while the day is incomplete."""

        raise NotImplementedError

    @abstractmethod
    def late_minutes(self, record: DailyAttendanceRecord) -> int:
        raise NotImplementedError

    @abstractmethod
    def undertime_minutes(self, record: DailyAttendanceRecord) -> int:
        raise NotImplementedError

    @abstractmethod
    def break_overrun_minutes(self, record: DailyAttendanceRecord) -> int:
        raise NotImplementedError
