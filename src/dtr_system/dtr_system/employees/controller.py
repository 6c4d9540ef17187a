from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..attendance.payload import EmployeeIdentityPayload
from ..common.geo import GeoPoint
from ..common.qr_images import decode_qr_image, make_qr_png
from ..common.web import (
    ORG_ROLES,
    current_user,
    json_body,
    login_required,
    login_user,
    require_department_access,
    roles_required,
)
from ..container import Container
from ..core.enums import EmployeeRole, EmployeeType, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..employees.model import Employee
from ..reports.export import employees_csv
from ..storage.codec import department_to_dict, employee_to_dict


def employee_json(e: Employee) -> dict:
    data = employee_to_dict(e)
    data.pop("passwordHash", None)
    return data


def _enum(enum_cls, value, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value!r}")


def _employee_fields(data: dict) -> dict:
    return dict(
        name=data.get("name") or "",
        department=data.get("department") or "",
        employee_type=_enum(EmployeeType, data.get("employeeType", EmployeeType.PERMANENT.value), "employee type"),
        role=_enum(EmployeeRole, data.get("role", EmployeeRole.USER.value), "role"),
        position_title=data.get("positionTitle"),
        username=data.get("username"),
        password=data.get("password"),
        leave_balance=data.get("leaveBalance", 0),
    )


def _location(data: dict):
    raw = data.get("location")
    try:
        return GeoPoint.from_dict(raw)
    except (KeyError, TypeError, ValueError):
        raise ValidationError("Location needs latitude and longitude")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        login_user(user)
        return jsonify({"success": True, "user": _session_json()})

    @app.route("/api/login/qr", methods=["POST"], endpoint="login_qr")
    def login_qr():
        upload = request.files.get("image")
        payload = decode_qr_image(upload.stream) if upload else json_body().get("payload")
        user = container.auth_service.authenticate_qr(payload)
        login_user(user)
        return jsonify({"success": True, "user": _session_json()})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(_session_json())

    def _session_json() -> dict:
        user = current_user()
        return {
            "id": user.account_id,
            "name": user.name,
            "role": user.role.value,
            "department": user.department,
        }

    # ---------------- employees ----------------

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @roles_required(Role.ADMIN, Role.IT, Role.HEAD)
    def employees_list():
        user = current_user()
        department = request.args.get("department") or None
        if user.role == Role.HEAD:
            department = user.department
        items = container.employee_service.list_employees(department=department)
        return jsonify([employee_json(e) for e in items])

    @app.route("/api/employees", methods=["POST"], endpoint="employees_add")
    @roles_required(*ORG_ROLES)
    def employees_add():
        data = json_body()
        employee = container.employee_service.add_employee(
            employee_id=str(data.get("id") or ""),
            **_employee_fields(data),
        )
        return jsonify(employee_json(employee)), 201

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="employees_get")
    @login_required
    def employees_get(employee_id: str):
        user = current_user()
        employee = container.employee_service.get_employee(employee_id)
        if user.role == Role.EMPLOYEE and user.account_id != employee.employee_id:
            raise AuthorizationError("You can only view your own profile.")
        if user.role == Role.HEAD:
            require_department_access(user, employee.department)
        return jsonify(employee_json(employee))

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="employees_update")
    @roles_required(*ORG_ROLES)
    def employees_update(employee_id: str):
        employee = container.employee_service.update_employee(employee_id, **_employee_fields(json_body()))
        return jsonify(employee_json(employee))

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="employees_delete")
    @roles_required(*ORG_ROLES)
    def employees_delete(employee_id: str):
        container.employee_service.delete_employee(employee_id)
        return jsonify({"success": True})

    @app.route("/api/employees/<employee_id>/qr.png", methods=["GET"], endpoint="employees_qr")
    @login_required
    def employees_qr(employee_id: str):
        user = current_user()
        employee = container.employee_service.get_employee(employee_id)
        if user.role == Role.EMPLOYEE and user.account_id != employee.employee_id:
            raise AuthorizationError("You can only view your own ID code.")
        if user.role == Role.HEAD:
            require_department_access(user, employee.department)
        payload = EmployeeIdentityPayload(id=employee.employee_id, name=employee.name, department=employee.department)
        return app.response_class(make_qr_png(payload.to_json()), mimetype="image/png")

    @app.route("/api/employees.csv", methods=["GET"], endpoint="employees_csv")
    @roles_required(*ORG_ROLES)
    def employees_export():
        return app.response_class(
            employees_csv(container.employee_service.list_employees()),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=employees.csv"},
        )

    # ---------------- departments ----------------

    @app.route("/api/departments", methods=["GET"], endpoint="departments_list")
    @login_required
    def departments_list():
        return jsonify([department_to_dict(d) for d in container.department_service.list_departments()])

    @app.route("/api/departments", methods=["POST"], endpoint="departments_add")
    @roles_required(*ORG_ROLES)
    def departments_add():
        data = json_body()
        department = container.department_service.add_department(
            name=data.get("name") or "",
            location=_location(data),
            campus=data.get("campus") or "",
            on_travel=bool(data.get("onTravel", False)),
        )
        return jsonify(department_to_dict(department)), 201

    @app.route("/api/departments/<name>", methods=["PUT"], endpoint="departments_update")
    @roles_required(*ORG_ROLES)
    def departments_update(name: str):
        data = json_body()
        department = container.department_service.update_department(
            name,
            name=data.get("name") or "",
            location=_location(data),
            campus=data.get("campus") or "",
            on_travel=bool(data.get("onTravel", False)),
        )
        return jsonify(department_to_dict(department))

    @app.route("/api/departments/<name>/details", methods=["PATCH"], endpoint="departments_details")
    @roles_required(Role.ADMIN, Role.IT, Role.HEAD)
    def departments_details(name: str):
        require_department_access(current_user(), name)
        data = json_body()
        department = container.department_service.update_details(
            name,
            location=_location(data),
            campus=data.get("campus"),
            on_travel=data.get("onTravel"),
        )
        return jsonify(department_to_dict(department))

    @app.route("/api/departments/<name>", methods=["DELETE"], endpoint="departments_delete")
    @roles_required(*ORG_ROLES)
    def departments_delete(name: str):
        container.department_service.delete_department(name)
        return jsonify({"success": True})
