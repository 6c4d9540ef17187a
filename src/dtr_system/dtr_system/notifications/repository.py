from __future__ import annotations

from typing import Protocol, Sequence

from .model import AppNotification


class NotificationRepository(Protocol):
    """Notification sink; recipients are employee ids or the `admin` / `it` accounts."""

    def publish(self, recipient_id: str, message: str) -> AppNotification:
        raise NotImplementedError

    def list_for(self, recipient_id: str, *, unread_only: bool = False) -> Sequence[AppNotification]:
        raise NotImplementedError

    def mark_all_read(self, recipient_id: str) -> int:
        raise NotImplementedError
