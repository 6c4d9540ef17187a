from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Project, Task
from .repository import ProjectRepository

_TASK_COLUMNS = "task_id, project_id, title, description, assignee_id, due_date, status, progress"


def _row_to_task(r: dict) -> Task:
    return Task(
        task_id=r["task_id"],
        project_id=r["project_id"],
        title=r["title"],
        description=r.get("description") or "",
        assignee_id=r.get("assignee_id"),
        due_date=r.get("due_date"),
        status=TaskStatus(r["status"]),
        progress=int(r.get("progress") or 0),
    )


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_project(self, project_id: str) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT project_id, name, description FROM projects WHERE project_id=%s", (project_id,))
            r = fetchone(cur)
            if not r:
                return None
            return Project(project_id=r["project_id"], name=r["name"], description=r.get("description") or "")

    def list_projects(self) -> Sequence[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT project_id, name, description FROM projects ORDER BY name")
            return [
                Project(project_id=r["project_id"], name=r["name"], description=r.get("description") or "")
                for r in fetchall(cur)
            ]

    def save_project(self, project: Project) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO projects(project_id, name, description) VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE name=VALUES(name), description=VALUES(description)
                """,
                (project.project_id, project.name, project.description),
            )

    def delete_project(self, project_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tasks WHERE project_id=%s", (project_id,))
            cur.execute("DELETE FROM projects WHERE project_id=%s", (project_id,))
            return cur.rowcount > 0

    def get_task(self, task_id: str) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TASK_COLUMNS} FROM tasks WHERE task_id=%s", (task_id,))
            r = fetchone(cur)
            return _row_to_task(r) if r else None

    def list_tasks(
        self,
        *,
        project_id: Optional[str] = None,
        assignee_id: Optional[str] = None,
    ) -> Sequence[Task]:
        clauses = ["1=1"]
        params: list[object] = []
        if project_id is not None:
            clauses.append("project_id=%s")
            params.append(project_id)
        if assignee_id is not None:
            clauses.append("assignee_id=%s")
            params.append(assignee_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_TASK_COLUMNS}
                FROM tasks
                WHERE {" AND ".join(clauses)}
                ORDER BY due_date IS NULL, due_date, title
                """,
                tuple(params),
            )
            return [_row_to_task(r) for r in fetchall(cur)]

    def save_task(self, task: Task) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO tasks({_TASK_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    title=VALUES(title), description=VALUES(description),
                    assignee_id=VALUES(assignee_id), due_date=VALUES(due_date),
                    status=VALUES(status), progress=VALUES(progress)
                """,
                (
                    task.task_id,
                    task.project_id,
                    task.title,
                    task.description,
                    task.assignee_id,
                    task.due_date,
                    task.status.value,
                    task.progress,
                ),
            )

    def delete_task(self, task_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tasks WHERE task_id=%s", (task_id,))
            return cur.rowcount > 0
