from __future__ import annotations

from typing import Optional, Sequence

from ..storage.codec import project_from_dict, project_to_dict, task_from_dict, task_to_dict
from ..storage.state import AppState
from .model import Project, Task
from .repository import ProjectRepository


class StateProjectRepository(ProjectRepository):
    def __init__(self, state: AppState):
        self._state = state

    def get_project(self, project_id: str) -> Optional[Project]:
        raw = self._state.read("projects").get(project_id)
        return project_from_dict(raw) if raw else None

    def list_projects(self) -> Sequence[Project]:
        return sorted((project_from_dict(raw) for raw in self._state.values("projects")), key=lambda p: p.name)

    def save_project(self, project: Project) -> None:
        with self._state.mutate("projects") as cols:
            cols["projects"][project.project_id] = project_to_dict(project)

    def delete_project(self, project_id: str) -> bool:
        with self._state.mutate("projects", "tasks") as cols:
            tasks = cols["tasks"]
            for k in [k for k, raw in tasks.items() if raw.get("projectId") == project_id]:
                del tasks[k]
            return cols["projects"].pop(project_id, None) is not None

    def get_task(self, task_id: str) -> Optional[Task]:
        raw = self._state.read("tasks").get(task_id)
        return task_from_dict(raw) if raw else None

    def list_tasks(
        self,
        *,
        project_id: Optional[str] = None,
        assignee_id: Optional[str] = None,
    ) -> Sequence[Task]:
        rows = [task_from_dict(raw) for raw in self._state.values("tasks")]
        if project_id is not None:
            rows = [t for t in rows if t.project_id == project_id]
        if assignee_id is not None:
            rows = [t for t in rows if t.assignee_id == assignee_id]
        return sorted(rows, key=lambda t: (t.due_date is None, t.due_date, t.title))

    def save_task(self, task: Task) -> None:
        with self._state.mutate("tasks") as cols:
            cols["tasks"][task.task_id] = task_to_dict(task)

    def delete_task(self, task_id: str) -> bool:
        with self._state.mutate("tasks") as cols:
            return cols["tasks"].pop(task_id, None) is not None
