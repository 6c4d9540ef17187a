from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from ..core.enums import Punch
from .model import DailyAttendanceRecord, PunchWindow
from .strategies.base import PunchStrategy
from .strategies.on_duty_strategy import OnDutyPunchStrategy
from .strategies.standard_strategy import StandardPunchStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the punch track for a record."""

    windows: Optional[Dict[Punch, PunchWindow]] = field(default=None)

    def for_record(self, record: DailyAttendanceRecord) -> PunchStrategy:
        if record.on_duty:
            return OnDutyPunchStrategy()
        return StandardPunchStrategy(self.windows)
