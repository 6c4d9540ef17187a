from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_user, json_body, login_required, require_department_access, roles_required
from ..container import Container
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..leaves.model import LeaveRecord
from ..storage.codec import leave_details_from_dict, leave_to_dict


def register(app: Flask, container: Container) -> None:
    def _can_touch(record: LeaveRecord) -> None:
        user = current_user()
        if user.role == Role.EMPLOYEE and record.employee_id != user.account_id:
            raise AuthorizationError("You can only manage your own leave applications.")
        if user.role == Role.HEAD and record.employee_id != user.account_id:
            require_department_access(user, record.department)

    def _dates(data: dict):
        return parse_iso_date(data.get("startDate") or ""), parse_iso_date(data.get("endDate") or "")

    @app.route("/api/leaves", methods=["GET"], endpoint="leaves_list")
    @login_required
    def leaves_list():
        user = current_user()
        if user.role == Role.EMPLOYEE:
            items = container.leave_service.list_for_employee(user.account_id)
        elif user.role == Role.HEAD:
            items = container.leave_service.list_for_department(user.department or "")
        elif request.args.get("department"):
            items = container.leave_service.list_for_department(request.args["department"])
        else:
            items = container.leave_service.list_all()
        return jsonify([leave_to_dict(r) for r in items])

    @app.route("/api/leaves", methods=["POST"], endpoint="leaves_file")
    @login_required
    def leaves_file():
        user = current_user()
        data = json_body()
        employee_id = str(data.get("employeeId") or user.account_id)
        if user.role in (Role.EMPLOYEE, Role.HEAD) and employee_id != user.account_id:
            raise AuthorizationError("You can only file leave for yourself.")
        start, end = _dates(data)
        record = container.leave_service.file_leave(
            employee_id=employee_id,
            start_date=start,
            end_date=end,
            details=leave_details_from_dict(data.get("details")),
        )
        return jsonify(leave_to_dict(record)), 201

    @app.route("/api/leaves/<leave_id>", methods=["GET"], endpoint="leaves_get")
    @login_required
    def leaves_get(leave_id: str):
        record = container.leave_service.get_leave(leave_id)
        _can_touch(record)
        return jsonify(leave_to_dict(record))

    @app.route("/api/leaves/<leave_id>", methods=["PUT"], endpoint="leaves_update")
    @login_required
    def leaves_update(leave_id: str):
        _can_touch(container.leave_service.get_leave(leave_id))
        data = json_body()
        start, end = _dates(data)
        record = container.leave_service.update_leave(
            leave_id,
            start_date=start,
            end_date=end,
            details=leave_details_from_dict(data.get("details")),
        )
        return jsonify(leave_to_dict(record))

    @app.route("/api/leaves/<leave_id>/decision", methods=["POST"], endpoint="leaves_decide")
    @roles_required(Role.ADMIN, Role.IT, Role.HEAD)
    def leaves_decide(leave_id: str):
        user = current_user()
        try:
            status = LeaveStatus(json_body().get("status"))
        except ValueError:
            raise ValidationError("A decision must be Approved or Rejected.")
        record = container.leave_service.decide(
            leave_id, status, actor_role=user.role, actor_department=user.department
        )
        return jsonify(leave_to_dict(record))

    @app.route("/api/leaves/<leave_id>", methods=["DELETE"], endpoint="leaves_delete")
    @login_required
    def leaves_delete(leave_id: str):
        _can_touch(container.leave_service.get_leave(leave_id))
        container.leave_service.delete_leave(leave_id)
        return jsonify({"success": True})
