from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import TaskStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Project, Task
from .repository import ProjectRepository

_logger = logging.getLogger(__name__)


def clamp_progress(value: int) -> int:
    return max(0, min(100, int(value)))


def status_for_progress(progress: int) -> TaskStatus:
    if progress <= 0:
        return TaskStatus.TO_DO
    if progress >= 100:
        return TaskStatus.DONE
    return TaskStatus.IN_PROGRESS


def progress_for_status(status: TaskStatus, current: int) -> int:
    if status == TaskStatus.TO_DO:
        return 0
    if status == TaskStatus.DONE:
        return 100
    # Moving into In Progress from either end lands halfway.
    if current in (0, 100):
        return 50
    return current


class ProjectService:
    """Use case: projects and their task board."""

    def __init__(self, projects: ProjectRepository, employees: EmployeeRepository):
        self._projects = projects
        self._employees = employees

    def list_projects(self) -> Sequence[Project]:
        return self._projects.list_projects()

    def get_project(self, project_id: str) -> Project:
        project = self._projects.get_project(project_id)
        if not project:
            raise NotFoundError("Project not found")
        return project

    def create_project(self, *, name: str, description: str = "") -> Project:
        project = Project(
            project_id=f"proj-{uuid.uuid4().hex[:12]}",
            name=require_non_empty(name, "Project name"),
            description=(description or "").strip(),
        )
        self._projects.save_project(project)
        _logger.info("Project %s created", project.project_id)
        return project

    def update_project(self, project_id: str, *, name: str, description: str = "") -> Project:
        current = self.get_project(project_id)
        updated = replace(current, name=require_non_empty(name, "Project name"), description=(description or "").strip())
        self._projects.save_project(updated)
        return updated

    def delete_project(self, project_id: str) -> None:
        if not self._projects.delete_project(project_id):
            raise NotFoundError("Project not found")
        _logger.info("Project %s deleted with its tasks", project_id)

    def list_tasks(
        self,
        project_id: Optional[str] = None,
        *,
        status: Optional[TaskStatus] = None,
        assignee_id: Optional[str] = None,
    ) -> Sequence[Task]:
        tasks = self._projects.list_tasks(project_id=project_id, assignee_id=assignee_id)
        if status is not None:
            tasks = [t for t in tasks if t.status == status]
        return tasks

    def get_task(self, task_id: str) -> Task:
        task = self._projects.get_task(task_id)
        if not task:
            raise NotFoundError("Task not found")
        return task

    def _check_assignee(self, assignee_id: Optional[str]) -> Optional[str]:
        if not assignee_id:
            return None
        if not self._employees.find_by_id(assignee_id):
            raise ValidationError(f"Employee {assignee_id} not found")
        return assignee_id

    def create_task(
        self,
        *,
        project_id: str,
        title: str,
        description: str = "",
        assignee_id: Optional[str] = None,
        due_date: Optional[date] = None,
        progress: int = 0,
    ) -> Task:
        self.get_project(project_id)
        progress = clamp_progress(progress)
        task = Task(
            task_id=f"task-{uuid.uuid4().hex[:12]}",
            project_id=project_id,
            title=require_non_empty(title, "Task title"),
            description=(description or "").strip(),
            assignee_id=self._check_assignee(assignee_id),
            due_date=due_date,
            status=status_for_progress(progress),
            progress=progress,
        )
        self._projects.save_task(task)
        return task

    def update_task(
        self,
        task_id: str,
        *,
        title: str,
        description: str = "",
        assignee_id: Optional[str] = None,
        due_date: Optional[date] = None,
    ) -> Task:
        current = self.get_task(task_id)
        updated = replace(
            current,
            title=require_non_empty(title, "Task title"),
            description=(description or "").strip(),
            assignee_id=self._check_assignee(assignee_id),
            due_date=due_date,
        )
        self._projects.save_task(updated)
        return updated

    def set_progress(self, task_id: str, progress: int) -> Task:
        current = self.get_task(task_id)
        progress = clamp_progress(progress)
        updated = replace(current, progress=progress, status=status_for_progress(progress))
        self._projects.save_task(updated)
        return updated

    def set_status(self, task_id: str, status: TaskStatus) -> Task:
        current = self.get_task(task_id)
        updated = replace(current, status=status, progress=progress_for_status(status, current.progress))
        self._projects.save_task(updated)
        return updated

    def delete_task(self, task_id: str) -> None:
        if not self._projects.delete_task(task_id):
            raise NotFoundError("Task not found")
