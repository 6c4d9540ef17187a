"""Request helpers shared by the JSON controllers."""

from __future__ import annotations

from datetime import date
from functools import wraps
from typing import Any, Optional

from flask import request, session

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..employees.service import SessionUser
from .datetime_utils import parse_iso_date

# Roles that manage the whole organisation.
ORG_ROLES = (Role.ADMIN, Role.IT)


def login_user(user: SessionUser) -> None:
    session.clear()
    session.permanent = True
    session["user_id"] = user.account_id
    session["name"] = user.name
    session["role"] = user.role.value
    session["department"] = user.department


def current_user() -> SessionUser:
    if "user_id" not in session:
        raise AuthenticationError("Please log in to continue.")
    return SessionUser(
        account_id=session["user_id"],
        name=session.get("name") or "",
        role=Role(session["role"]),
        department=session.get("department"),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        current_user()
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if current_user().role not in roles:
                raise AuthorizationError("You do not have access to this page.")
            return view(*args, **kwargs)

        return wrapper

    return decorator


def require_department_access(user: SessionUser, department: str) -> None:
    """Heads only see their own department; admin and IT see all."""
    if user.role in ORG_ROLES:
        return
    if user.role == Role.HEAD and user.department == department:
        return
    raise AuthorizationError("You can only manage your own department.")


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def date_arg(name: str, default: Optional[date] = None) -> date:
    value = request.args.get(name)
    if not value:
        if default is None:
            raise ValidationError(f"Missing parameter: {name}")
        return default
    return parse_iso_date(value)


def optional_date(value: Any) -> Optional[date]:
    return parse_iso_date(value) if value else None
