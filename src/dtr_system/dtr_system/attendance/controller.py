from __future__ import annotations

from flask import Flask, jsonify, request

from ..attendance.payload import DepartmentScanPayload
from ..attendance.position import PositionFix, StaticPositionProvider, position_from_request
from ..attendance.service import TimeLogEdit
from ..common.datetime_utils import now_local, parse_hhmm, parse_iso_date
from ..common.qr_images import decode_qr_image, make_qr_png
from ..common.web import (
    ORG_ROLES,
    current_user,
    date_arg,
    json_body,
    login_required,
    require_department_access,
    roles_required,
)
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..reports.export import dtr_csv
from ..storage.codec import record_to_dict


def _provider_for(position) -> StaticPositionProvider:
    if isinstance(position, PositionFix):
        return StaticPositionProvider(position)
    return StaticPositionProvider(None, error=position.message)


def _form_position() -> dict | None:
    lat = request.form.get("latitude")
    lon = request.form.get("longitude")
    if lat is None or lon is None:
        return None
    return {"latitude": lat, "longitude": lon, "accuracy": request.form.get("accuracy")}


def _time_log_edit(entry: dict) -> TimeLogEdit:
    if not isinstance(entry, dict) or not entry.get("date"):
        raise ValidationError("Each time log needs a date")
    return TimeLogEdit(
        work_date=parse_iso_date(entry["date"]),
        time_in=parse_hhmm(entry.get("timeIn") or ""),
        break_out=parse_hhmm(entry.get("breakOut") or ""),
        break_in=parse_hhmm(entry.get("breakIn") or ""),
        time_out=parse_hhmm(entry.get("timeOut") or ""),
    )


def register(app: Flask, container: Container) -> None:
    def _scan(payload, position_data):
        user = current_user()
        position = position_from_request(position_data)
        result = container.attendance_service.scan_with_provider(
            user.account_id, payload, _provider_for(position)
        )
        return jsonify(
            {
                "success": True,
                "message": result.message,
                "recordId": result.record_id,
                "punch": result.punch.value if result.punch else None,
                "isOutOfRange": result.is_out_of_range,
            }
        )

    def _scope_employee(employee_id: str) -> None:
        user = current_user()
        if user.role == Role.EMPLOYEE and user.account_id != employee_id:
            raise AuthorizationError("You can only view your own time records.")
        if user.role == Role.HEAD:
            employee = container.employee_service.get_employee(employee_id)
            require_department_access(user, employee.department)

    @app.route("/api/scan", methods=["POST"], endpoint="scan")
    @login_required
    def scan():
        data = json_body()
        return _scan(data.get("payload"), data.get("position"))

    @app.route("/api/scan/image", methods=["POST"], endpoint="scan_image")
    @login_required
    def scan_image():
        upload = request.files.get("image")
        if not upload:
            raise ValidationError("Please upload an image of the department QR code")
        return _scan(decode_qr_image(upload.stream), _form_position())

    @app.route("/api/departments/<name>/qr.png", methods=["GET"], endpoint="department_qr")
    @roles_required(Role.ADMIN, Role.IT, Role.HEAD)
    def department_qr(name: str):
        require_department_access(current_user(), name)
        department = container.department_service.get_department(name)
        payload = DepartmentScanPayload(department=department.name)
        return app.response_class(make_qr_png(payload.to_json()), mimetype="image/png")

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        record = container.attendance_service.get_today_record(current_user().account_id)
        return jsonify(record_to_dict(record) if record else None)

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        employee_id = request.args.get("employee_id") or current_user().account_id
        _scope_employee(employee_id)
        limit = request.args.get("limit", type=int) or DEFAULT_HISTORY_LIMIT
        items = container.attendance_service.get_history(employee_id, limit=limit)
        return jsonify([record_to_dict(r) for r in items])

    @app.route("/api/attendance/records", methods=["GET"], endpoint="attendance_records")
    @roles_required(Role.ADMIN, Role.IT, Role.HEAD)
    def attendance_records():
        user = current_user()
        today = now_local().date()
        department = request.args.get("department") or None
        if department == "All":
            department = None
        if user.role == Role.HEAD:
            department = user.department
        items = container.attendance_service.list_records(
            start_date=date_arg("start", today.replace(day=1)),
            end_date=date_arg("end", today),
            department=department,
            employee_id=request.args.get("employee_id") or None,
        )
        return jsonify([record_to_dict(r) for r in items])

    @app.route("/api/attendance/on-duty", methods=["POST"], endpoint="attendance_on_duty")
    @roles_required(Role.ADMIN, Role.IT, Role.HEAD)
    def attendance_on_duty():
        data = json_body()
        employee_id = str(data.get("employeeId") or "")
        _scope_employee(employee_id)
        record = container.attendance_service.schedule_on_duty(employee_id, parse_iso_date(data.get("date") or ""))
        return jsonify(record_to_dict(record)), 201

    @app.route("/api/attendance/<employee_id>/time-logs", methods=["PUT"], endpoint="attendance_time_logs")
    @roles_required(*ORG_ROLES)
    def attendance_time_logs(employee_id: str):
        entries = json_body().get("entries")
        if not isinstance(entries, list):
            raise ValidationError("entries must be a list")
        saved = container.attendance_service.update_time_logs(employee_id, [_time_log_edit(e) for e in entries])
        return jsonify([record_to_dict(r) for r in saved])

    @app.route("/api/attendance/records/<record_id>", methods=["DELETE"], endpoint="attendance_delete")
    @roles_required(Role.ADMIN, Role.IT, Role.HEAD)
    def attendance_delete(record_id: str):
        record = container.attendance_service.get_record(record_id)
        require_department_access(current_user(), record.department)
        container.attendance_service.delete_record(record_id)
        return jsonify({"success": True})

    @app.route("/api/attendance/clear", methods=["POST"], endpoint="attendance_clear")
    @roles_required(*ORG_ROLES)
    def attendance_clear():
        department = json_body().get("department") or "All"
        count = container.attendance_service.clear_logs(department)
        return jsonify({"success": True, "deleted": count})

    def _report():
        user = current_user()
        today = now_local().date()
        department = request.args.get("department") or None
        employee_id = request.args.get("employee_id") or None
        if user.role == Role.HEAD:
            department = user.department
        elif user.role == Role.EMPLOYEE:
            department, employee_id = None, user.account_id
        start = date_arg("start", today.replace(day=1))
        end = date_arg("end", today)
        data = container.report_service.build_report(
            start=start, end=end, department=department, employee_id=employee_id
        )
        return start, end, data

    @app.route("/api/reports/dtr", methods=["GET"], endpoint="report_dtr")
    @login_required
    def report_dtr():
        start, end, data = _report()
        return jsonify(
            {
                "start": start.strftime("%Y-%m-%d"),
                "end": end.strftime("%Y-%m-%d"),
                "rows": data.rows,
                "summary": data.summary,
            }
        )

    @app.route("/api/reports/dtr.csv", methods=["GET"], endpoint="report_dtr_csv")
    @login_required
    def report_dtr_csv():
        start, end, data = _report()
        filename = f"dtr_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return app.response_class(
            dtr_csv(data),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
