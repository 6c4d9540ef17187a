from __future__ import annotations

from typing import Sequence

from .model import AppNotification
from .repository import NotificationRepository


class NotificationService:
    """Use case: read and acknowledge in-app notifications."""

    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def inbox(self, recipient_id: str, *, unread_only: bool = False) -> Sequence[AppNotification]:
        return self._notifications.list_for(recipient_id, unread_only=unread_only)

    def unread_count(self, recipient_id: str) -> int:
        return len(self._notifications.list_for(recipient_id, unread_only=True))

    def mark_all_read(self, recipient_id: str) -> int:
        return self._notifications.mark_all_read(recipient_id)
