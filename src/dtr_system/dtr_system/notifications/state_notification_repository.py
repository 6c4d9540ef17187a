from __future__ import annotations

import uuid
from datetime import datetime
from typing import Callable, Sequence

from ..common.datetime_utils import now_local
from ..storage.codec import notification_from_dict, notification_to_dict
from ..storage.state import AppState
from .model import AppNotification
from .repository import NotificationRepository


class StateNotificationRepository(NotificationRepository):
    def __init__(self, state: AppState, *, clock: Callable[[], datetime] = now_local):
        self._state = state
        self._clock = clock

    def publish(self, recipient_id: str, message: str) -> AppNotification:
        notification = AppNotification(
            notification_id=f"notif-{uuid.uuid4().hex[:12]}",
            recipient_id=recipient_id,
            message=message,
            read=False,
            created_at=self._clock(),
        )
        with self._state.mutate("notifications") as cols:
            cols["notifications"][notification.notification_id] = notification_to_dict(notification)
        return notification

    def list_for(self, recipient_id: str, *, unread_only: bool = False) -> Sequence[AppNotification]:
        rows = [
            notification_from_dict(raw)
            for raw in self._state.values("notifications")
            if raw.get("recipientId") == recipient_id and not (unread_only and raw.get("read"))
        ]
        return sorted(rows, key=lambda n: n.created_at or datetime.min, reverse=True)

    def mark_all_read(self, recipient_id: str) -> int:
        with self._state.mutate("notifications") as cols:
            items = cols["notifications"]
            changed = 0
            for k, raw in list(items.items()):
                if raw.get("recipientId") == recipient_id and not raw.get("read"):
                    items[k] = {**raw, "read": True}
                    changed += 1
            return changed
