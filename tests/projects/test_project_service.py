from datetime import date

import pytest

from src.dtr_system.dtr_system.core.enums import TaskStatus
from src.dtr_system.dtr_system.core.exceptions import NotFoundError, ValidationError
from src.dtr_system.dtr_system.projects.service import progress_for_status, status_for_progress


@pytest.mark.parametrize(
    "progress, status",
    [(0, TaskStatus.TO_DO), (1, TaskStatus.IN_PROGRESS), (99, TaskStatus.IN_PROGRESS), (100, TaskStatus.DONE)],
)
def test_status_follows_progress(progress, status):
    assert status_for_progress(progress) == status


def test_progress_follows_status():
    assert progress_for_status(TaskStatus.TO_DO, 40) == 0
    assert progress_for_status(TaskStatus.DONE, 40) == 100
    assert progress_for_status(TaskStatus.IN_PROGRESS, 0) == 50
    assert progress_for_status(TaskStatus.IN_PROGRESS, 40) == 40


def test_seeded_board(container):
    tasks = container.project_service.list_tasks("proj-2")

    assert {t.task_id for t in tasks} == {"task-3", "task-4"}
    assert [t.task_id for t in container.project_service.list_tasks(status=TaskStatus.DONE)] == ["task-3"]


def test_task_lifecycle(container):
    project = container.project_service.create_project(name="Payroll Migration")
    task = container.project_service.create_task(
        project_id=project.project_id, title="Map accounts", assignee_id="4001", due_date=date(2023, 12, 1)
    )
    assert task.status == TaskStatus.TO_DO

    task = container.project_service.set_progress(task.task_id, 150)
    assert (task.progress, task.status) == (100, TaskStatus.DONE)

    task = container.project_service.set_status(task.task_id, TaskStatus.IN_PROGRESS)
    assert (task.progress, task.status) == (50, TaskStatus.IN_PROGRESS)

    assert [t.task_id for t in container.project_service.list_tasks(assignee_id="4001")].count(task.task_id) == 1


def test_unknown_assignee_and_project(container):
    with pytest.raises(ValidationError):
        container.project_service.create_task(project_id="proj-1", title="x", assignee_id="9999")
    with pytest.raises(NotFoundError):
        container.project_service.create_task(project_id="missing", title="x")


def test_deleting_project_removes_its_tasks(container):
    container.project_service.delete_project("proj-1")

    assert container.project_service.list_tasks("proj-1") == []
    with pytest.raises(NotFoundError):
        container.project_service.get_task("task-1")
