from __future__ import annotations

from datetime import datetime

from ...core.constants import ON_DUTY_PUNCH_ORDER
from ...core.exceptions import AlreadyComplete
from ..model import DailyAttendanceRecord
from .base import PunchDecision, PunchStrategy


class OnDutyPunchStrategy(PunchStrategy):
    """Scheduled special duty: Time In then Time Out, any time of day."""

    def decide(self, *, record: DailyAttendanceRecord, now: datetime, employee_name: str) -> PunchDecision:
        for punch in ON_DUTY_PUNCH_ORDER:
            if record.punch_value(punch) is None:
                return PunchDecision(punch=punch, on_duty=True)

        raise AlreadyComplete("On-duty record already complete for today.", record_id=record.record_id)
