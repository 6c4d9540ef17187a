from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AppNotification:
    notification_id: str
    recipient_id: str
    message: str
    read: bool
    created_at: datetime
