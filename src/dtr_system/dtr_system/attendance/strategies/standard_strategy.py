from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from ...core.constants import PUNCH_WINDOWS, STANDARD_PUNCH_ORDER
from ...core.enums import Punch
from ...core.exceptions import AlreadyComplete, OutsideAllowedWindow
from ..model import DailyAttendanceRecord, PunchWindow
from .base import PunchDecision, PunchStrategy


def default_windows() -> Dict[Punch, PunchWindow]:
    return {p: PunchWindow(punch=p, start=s, end=e) for p, (s, e) in PUNCH_WINDOWS.items()}


class StandardPunchStrategy(PunchStrategy):
    """Regular day: four punches in order, each inside its wall-clock window."""

    def __init__(self, windows: Optional[Dict[Punch, PunchWindow]] = None):
        self._windows = windows or default_windows()

    def decide(self, *, record: DailyAttendanceRecord, now: datetime, employee_name: str) -> PunchDecision:
        for punch in STANDARD_PUNCH_ORDER:
            if record.punch_value(punch) is not None:
                continue

            window = self._windows[punch]
            if not window.contains(now, record.work_date):
                raise OutsideAllowedWindow(punch.label, window.describe())
            return PunchDecision(punch=punch)

        raise AlreadyComplete(
            f"{employee_name} has already completed their time record for today.",
            record_id=record.record_id,
        )
