from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Project, Task


class ProjectRepository(Protocol):
    def get_project(self, project_id: str) -> Optional[Project]:
        raise NotImplementedError

    def list_projects(self) -> Sequence[Project]:
        raise NotImplementedError

    def save_project(self, project: Project) -> None:
        raise NotImplementedError

    def delete_project(self, project_id: str) -> bool:
        """Delete the project together with its tasks."""

        raise NotImplementedError

    def get_task(self, task_id: str) -> Optional[Task]:
        raise NotImplementedError

    def list_tasks(
        self,
        *,
        project_id: Optional[str] = None,
        assignee_id: Optional[str] = None,
    ) -> Sequence[Task]:
        raise NotImplementedError

    def save_task(self, task: Task) -> None:
        raise NotImplementedError

    def delete_task(self, task_id: str) -> bool:
        raise NotImplementedError
