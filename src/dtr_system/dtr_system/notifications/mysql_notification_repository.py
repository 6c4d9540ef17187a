from __future__ import annotations

import uuid
from datetime import datetime
from typing import Callable, Sequence

from ..common.datetime_utils import now_local
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AppNotification
from .repository import NotificationRepository


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, clock: Callable[[], datetime] = now_local):
        self._conn_factory = conn_factory
        self._clock = clock

    def publish(self, recipient_id: str, message: str) -> AppNotification:
        notification = AppNotification(
            notification_id=f"notif-{uuid.uuid4().hex[:12]}",
            recipient_id=recipient_id,
            message=message,
            read=False,
            created_at=self._clock(),
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(notification_id, recipient_id, message, is_read, created_at)
                VALUES(%s,%s,%s,0,%s)
                """,
                (notification.notification_id, recipient_id, message, notification.created_at),
            )
        return notification

    def list_for(self, recipient_id: str, *, unread_only: bool = False) -> Sequence[AppNotification]:
        where = "recipient_id=%s" + (" AND is_read=0" if unread_only else "")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT notification_id, recipient_id, message, is_read, created_at
                FROM notifications
                WHERE {where}
                ORDER BY created_at DESC
                """,
                (recipient_id,),
            )
            return [
                AppNotification(
                    notification_id=r["notification_id"],
                    recipient_id=r["recipient_id"],
                    message=r["message"],
                    read=bool(r["is_read"]),
                    created_at=r["created_at"],
                )
                for r in fetchall(cur)
            ]

    def mark_all_read(self, recipient_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE notifications SET is_read=1 WHERE recipient_id=%s AND is_read=0", (recipient_id,))
            return int(cur.rowcount)
