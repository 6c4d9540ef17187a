from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import (
    DEFAULT_POSITION_TIMEOUT_MS,
    LOCATION_THRESHOLD_METERS,
    SESSION_TIMEOUT_MINUTES,
)
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ScanError,
    StorageFailure,
    ValidationError,
)
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .leaves.controller import register as register_leaves
from .notifications.controller import register as register_notifications
from .projects.controller import register as register_projects
from .storage.controller import register as register_storage
from .storage.seed import seed_demo_data

_logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]

_ERROR_STATUS = (
    (ScanError, 400),
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (StorageFailure, 503),
)


def _register_error_handlers(app: Flask) -> None:
    def handle_domain_error(e: DomainError):
        status = next((code for cls, code in _ERROR_STATUS if isinstance(e, cls)), 400)
        kind = getattr(e, "kind", type(e).__name__)
        return jsonify({"success": False, "kind": kind, "message": str(e)}), status

    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return e
        _logger.exception("Unhandled error")
        return jsonify({"success": False, "kind": "InternalError", "message": "Unexpected system error."}), 500

    app.register_error_handler(DomainError, handle_domain_error)
    app.register_error_handler(Exception, handle_unexpected)


def create_app(overrides: Optional[dict] = None) -> Flask:
    """Build the Flask app from the APP_ENV settings module plus `overrides`."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    cfg = {k: getattr(settings, k) for k in dir(settings) if k.isupper()}
    cfg.update(overrides or {})

    logging.basicConfig(
        level=str(cfg.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = cfg["SECRET_KEY"]
    app.config["DEBUG"] = bool(cfg.get("DEBUG", False))
    app.config["TESTING"] = bool(cfg.get("TESTING", False))
    app.permanent_session_lifetime = timedelta(
        minutes=int(cfg.get("SESSION_TIMEOUT_MINUTES", SESSION_TIMEOUT_MINUTES))
    )

    backend = str(cfg.get("STORAGE_BACKEND", "file")).lower()
    db_config = cfg.get("DB_CONFIG") or {}
    _logger.info("settings=%s backend=%s", settings_module, backend)

    if backend == "mysql" and cfg.get("AUTO_INIT_DB"):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        _logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        backend=backend,
        data_file=cfg.get("DATA_FILE"),
        db_config=db_config,
        threshold_m=float(cfg.get("LOCATION_THRESHOLD_METERS", LOCATION_THRESHOLD_METERS)),
        position_timeout_ms=int(cfg.get("POSITION_TIMEOUT_MS", DEFAULT_POSITION_TIMEOUT_MS)),
        it_password=str(cfg.get("IT_PASSWORD", "password")),
    )

    fresh_state = container.state is not None and container.state.is_empty()
    if cfg.get("AUTO_SEED_DB") or fresh_state:
        seed_demo_data(container.departments_repo, container.employees_repo, container.projects_repo)

    app.extensions["dtr_container"] = container
    _register_error_handlers(app)

    register_employees(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_notifications(app, container)
    register_projects(app, container)
    register_storage(app, container)

    return app


def get_container(app: Flask) -> Container:
    return app.extensions["dtr_container"]
