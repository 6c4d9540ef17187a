from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...core.enums import Punch
from ..model import DailyAttendanceRecord


@dataclass(frozen=True)
class PunchDecision:
    punch: Punch
    on_duty: bool = False

    def success_message(self, employee_name: str) -> str:
        prefix = "On-duty " if self.on_duty else ""
        return f"{prefix}{self.punch.label} for {employee_name} successful."


class PunchStrategy(ABC):
    """Strategy Pattern: decide which punch a scan records on a given day."""

    @abstractmethod
    def decide(self, *, record: DailyAttendanceRecord, now: datetime, employee_name: str) -> PunchDecision:
        raise NotImplementedError
