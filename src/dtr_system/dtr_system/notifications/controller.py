from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_iso_datetime
from ..common.web import current_user, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notifications", methods=["GET"], endpoint="notifications_list")
    @login_required
    def notifications_list():
        recipient = current_user().recipient_id
        unread_only = request.args.get("unread") in ("1", "true")
        items = container.notification_service.inbox(recipient, unread_only=unread_only)
        return jsonify(
            {
                "unread": container.notification_service.unread_count(recipient),
                "items": [
                    {
                        "id": n.notification_id,
                        "message": n.message,
                        "read": n.read,
                        "createdAt": format_iso_datetime(n.created_at),
                    }
                    for n in items
                ],
            }
        )

    @app.route("/api/notifications/read", methods=["POST"], endpoint="notifications_read")
    @login_required
    def notifications_read():
        count = container.notification_service.mark_all_read(current_user().recipient_id)
        return jsonify({"success": True, "marked": count})
