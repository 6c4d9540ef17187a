from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import ORG_ROLES, current_user, json_body, login_required, optional_date, roles_required
from ..container import Container
from ..core.enums import Role, TaskStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..projects.model import Task
from ..storage.codec import project_to_dict, task_to_dict

MANAGERS = (Role.ADMIN, Role.IT, Role.HEAD)


def _int(value, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")


def _status(value) -> TaskStatus:
    try:
        return TaskStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid task status: {value!r}")


def register(app: Flask, container: Container) -> None:
    def _check_task_owner(task: Task) -> None:
        user = current_user()
        if user.role == Role.EMPLOYEE and task.assignee_id != user.account_id:
            raise AuthorizationError("You can only update tasks assigned to you.")

    @app.route("/api/projects", methods=["GET"], endpoint="projects_list")
    @login_required
    def projects_list():
        return jsonify([project_to_dict(p) for p in container.project_service.list_projects()])

    @app.route("/api/projects", methods=["POST"], endpoint="projects_create")
    @roles_required(*ORG_ROLES)
    def projects_create():
        data = json_body()
        project = container.project_service.create_project(
            name=data.get("name") or "", description=data.get("description") or ""
        )
        return jsonify(project_to_dict(project)), 201

    @app.route("/api/projects/<project_id>", methods=["PUT"], endpoint="projects_update")
    @roles_required(*ORG_ROLES)
    def projects_update(project_id: str):
        data = json_body()
        project = container.project_service.update_project(
            project_id, name=data.get("name") or "", description=data.get("description") or ""
        )
        return jsonify(project_to_dict(project))

    @app.route("/api/projects/<project_id>", methods=["DELETE"], endpoint="projects_delete")
    @roles_required(*ORG_ROLES)
    def projects_delete(project_id: str):
        container.project_service.delete_project(project_id)
        return jsonify({"success": True})

    @app.route("/api/tasks", methods=["GET"], endpoint="tasks_list")
    @login_required
    def tasks_list():
        user = current_user()
        assignee = request.args.get("assignee_id") or None
        if user.role == Role.EMPLOYEE:
            assignee = user.account_id
        status = _status(request.args["status"]) if request.args.get("status") else None
        items = container.project_service.list_tasks(
            request.args.get("project_id") or None, status=status, assignee_id=assignee
        )
        return jsonify([task_to_dict(t) for t in items])

    @app.route("/api/tasks", methods=["POST"], endpoint="tasks_create")
    @roles_required(*MANAGERS)
    def tasks_create():
        data = json_body()
        task = container.project_service.create_task(
            project_id=str(data.get("projectId") or ""),
            title=data.get("title") or "",
            description=data.get("description") or "",
            assignee_id=data.get("assigneeId") or None,
            due_date=optional_date(data.get("dueDate")),
            progress=_int(data.get("progress", 0), "Progress"),
        )
        return jsonify(task_to_dict(task)), 201

    @app.route("/api/tasks/<task_id>", methods=["PUT"], endpoint="tasks_update")
    @roles_required(*MANAGERS)
    def tasks_update(task_id: str):
        data = json_body()
        task = container.project_service.update_task(
            task_id,
            title=data.get("title") or "",
            description=data.get("description") or "",
            assignee_id=data.get("assigneeId") or None,
            due_date=optional_date(data.get("dueDate")),
        )
        return jsonify(task_to_dict(task))

    @app.route("/api/tasks/<task_id>/progress", methods=["POST"], endpoint="tasks_progress")
    @login_required
    def tasks_progress(task_id: str):
        _check_task_owner(container.project_service.get_task(task_id))
        task = container.project_service.set_progress(task_id, _int(json_body().get("progress"), "Progress"))
        return jsonify(task_to_dict(task))

    @app.route("/api/tasks/<task_id>/status", methods=["POST"], endpoint="tasks_status")
    @login_required
    def tasks_status(task_id: str):
        _check_task_owner(container.project_service.get_task(task_id))
        task = container.project_service.set_status(task_id, _status(json_body().get("status")))
        return jsonify(task_to_dict(task))

    @app.route("/api/tasks/<task_id>", methods=["DELETE"], endpoint="tasks_delete")
    @roles_required(*MANAGERS)
    def tasks_delete(task_id: str):
        container.project_service.delete_task(task_id)
        return jsonify({"success": True})
