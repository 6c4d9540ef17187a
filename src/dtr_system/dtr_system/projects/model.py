from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import TaskStatus


@dataclass(frozen=True)
class Project:
    project_id: str
    name: str
    description: str = ""


@dataclass(frozen=True)
class Task:
    task_id: str
    project_id: str
    title: str
    description: str = ""
    assignee_id: Optional[str] = None
    due_date: Optional[date] = None
    status: TaskStatus = TaskStatus.TO_DO
    progress: int = 0
