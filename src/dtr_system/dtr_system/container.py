from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLDailyRecordStore
from .attendance.repository import DailyRecordStore
from .attendance.service import AttendanceService
from .attendance.state_attendance_repository import StateDailyRecordStore
from .core.constants import DEFAULT_POSITION_TIMEOUT_MS, LOCATION_THRESHOLD_METERS
from .database.connection import DBConfig, DatabaseConnection
from .employees.department_repository import DepartmentRepository
from .employees.mysql_department_repository import MySQLDepartmentRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import AuthService, DepartmentService, EmployeeService
from .employees.state_department_repository import StateDepartmentRepository
from .employees.state_employee_repository import StateEmployeeRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .leaves.state_leave_repository import StateLeaveRepository
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .notifications.state_notification_repository import StateNotificationRepository
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .projects.service import ProjectService
from .projects.state_project_repository import StateProjectRepository
from .reports.service import DtrReportService
from .storage.state import AppState


@dataclass(frozen=True)
class Container:
    backend: str
    state: Optional[AppState]
    conn: Optional[DatabaseConnection]

    departments_repo: DepartmentRepository
    employees_repo: EmployeeRepository
    records_repo: DailyRecordStore
    leaves_repo: LeaveRepository
    notifications_repo: NotificationRepository
    projects_repo: ProjectRepository

    auth_service: AuthService
    employee_service: EmployeeService
    department_service: DepartmentService
    attendance_service: AttendanceService
    leave_service: LeaveService
    notification_service: NotificationService
    project_service: ProjectService
    report_service: DtrReportService


def build_container(
    *,
    backend: str = "file",
    data_file: Optional[str] = None,
    db_config: Optional[dict] = None,
    threshold_m: float = LOCATION_THRESHOLD_METERS,
    position_timeout_ms: int = DEFAULT_POSITION_TIMEOUT_MS,
    it_password: str = "password",
    state: Optional[AppState] = None,
) -> Container:
    conn: Optional[DatabaseConnection] = None
    repos: dict[str, Any]

    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
        state = None
        repos = dict(
            departments_repo=MySQLDepartmentRepository(conn),
            employees_repo=MySQLEmployeeRepository(conn),
            records_repo=MySQLDailyRecordStore(conn),
            leaves_repo=MySQLLeaveRepository(conn),
            notifications_repo=MySQLNotificationRepository(conn),
            projects_repo=MySQLProjectRepository(conn),
        )
    elif backend == "file":
        state = state or AppState(data_file)
        repos = dict(
            departments_repo=StateDepartmentRepository(state),
            employees_repo=StateEmployeeRepository(state),
            records_repo=StateDailyRecordStore(state),
            leaves_repo=StateLeaveRepository(state),
            notifications_repo=StateNotificationRepository(state),
            projects_repo=StateProjectRepository(state),
        )
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND: {backend}")

    departments_repo = repos["departments_repo"]
    employees_repo = repos["employees_repo"]
    records_repo = repos["records_repo"]
    leaves_repo = repos["leaves_repo"]
    notifications_repo = repos["notifications_repo"]
    projects_repo = repos["projects_repo"]

    return Container(
        backend=backend,
        state=state,
        conn=conn,
        **repos,
        auth_service=AuthService(employees_repo, it_password=it_password),
        employee_service=EmployeeService(employees_repo, departments_repo, records_repo, leaves_repo),
        department_service=DepartmentService(departments_repo, employees_repo, records_repo, leaves_repo),
        attendance_service=AttendanceService(
            records_repo,
            employees_repo,
            departments_repo,
            leaves_repo,
            notifications_repo,
            strategy_factory=AttendanceStrategyFactory(),
            threshold_m=threshold_m,
            position_timeout_ms=position_timeout_ms,
        ),
        leave_service=LeaveService(leaves_repo, employees_repo, notifications_repo),
        notification_service=NotificationService(notifications_repo),
        project_service=ProjectService(projects_repo, employees_repo),
        report_service=DtrReportService(records_repo, employees_repo, leaves_repo),
    )
