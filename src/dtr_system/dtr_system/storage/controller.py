from __future__ import annotations

import json

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.web import ORG_ROLES, roles_required
from ..container import Container
from ..core.exceptions import ValidationError
from .state import INVALID_BACKUP, AppState


def register(app: Flask, container: Container) -> None:
    def _state() -> AppState:
        if container.state is None:
            raise ValidationError("Backup and restore are only available with the file storage backend.")
        return container.state

    @app.route("/api/backup", methods=["GET"], endpoint="backup")
    @roles_required(*ORG_ROLES)
    def backup():
        body = json.dumps(_state().snapshot(), indent=2).encode("utf-8")
        filename = f"dtr_backup_{now_local().strftime('%Y%m%d_%H%M%S')}.json"
        return app.response_class(
            body,
            mimetype="application/json",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/restore", methods=["POST"], endpoint="restore")
    @roles_required(*ORG_ROLES)
    def restore():
        state = _state()
        upload = request.files.get("file")
        if upload:
            try:
                data = json.loads(upload.read().decode("utf-8"))
            except (UnicodeDecodeError, ValueError):
                raise ValidationError(INVALID_BACKUP)
        else:
            data = request.get_json(silent=True)
        state.restore(data)
        return jsonify({"success": True, "message": "Data restored successfully."})
