"""Demo data for a fresh install (municipal offices around Talisayan)."""

from __future__ import annotations

import logging
from datetime import date

from werkzeug.security import generate_password_hash

from ..common.geo import GeoPoint
from ..core.enums import EmployeeRole, EmployeeType, TaskStatus
from ..employees.department_model import Department
from ..employees.department_repository import DepartmentRepository
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..projects.model import Project, Task
from ..projects.repository import ProjectRepository

_logger = logging.getLogger(__name__)

DEMO_DEPARTMENTS = (
    Department("Admin Office", GeoPoint(8.5733, 124.7811), "Main Campus", False),
    Department("Engineering", GeoPoint(8.5735, 124.7813), "Main Campus", False),
    Department("Human Resources", GeoPoint(8.6010, 124.7920), "Downtown Annex", True),
    Department("Finance", GeoPoint(8.5730, 124.7810), "Main Campus", False),
)

# (id, name, department, type, position, username, password, leave balance, role)
DEMO_EMPLOYEES = (
    ("1001", "Alice Johnson", "Admin Office", EmployeeType.PERMANENT, "Office Manager", "alice", "password", 15, EmployeeRole.MANAGER),
    ("1002", "Bob Williams", "Admin Office", EmployeeType.PERMANENT, "Admin Assistant", "bob", "password", 12, EmployeeRole.USER),
    ("2001", "Charlie Brown", "Engineering", EmployeeType.PERMANENT, "Lead Engineer", "charlie", "password", 15, EmployeeRole.MANAGER),
    ("2002", "Diana Miller", "Engineering", EmployeeType.PERMANENT, "Software Engineer", "diana", "password", 10, EmployeeRole.USER),
    ("2003", "Ethan Davis", "Engineering", EmployeeType.CASUAL, "Junior Engineer", "ethan", "password", 5, EmployeeRole.USER),
    ("3001", "Fiona Garcia", "Human Resources", EmployeeType.PERMANENT, "HR Director", "fiona", "password", 20, EmployeeRole.MANAGER),
    ("3002", "George Rodriguez", "Human Resources", EmployeeType.JOB_ORDER, None, None, None, 0, EmployeeRole.USER),
    ("4001", "Hannah Martinez", "Finance", EmployeeType.PERMANENT, "Accountant", "hannah", "password", 13, EmployeeRole.USER),
    ("admin", "Super Admin", "Admin Office", EmployeeType.PERMANENT, "System Admin", "admin", "admin123", 99, EmployeeRole.ADMIN),
)

DEMO_PROJECTS = (
    Project("proj-1", "Q4 Financial Report", "Compile and finalize the financial reports for the fourth quarter."),
    Project("proj-2", "Website Redesign", "Complete overhaul of the municipal website UI/UX."),
)

DEMO_TASKS = (
    Task("task-1", "proj-1", "Gather Expense Reports", "Collect all expense reports from department heads.", "4001", date(2023, 11, 10), TaskStatus.IN_PROGRESS, 50),
    Task("task-2", "proj-1", "Draft P&L Statement", "Create the initial draft of the Profit and Loss statement.", "4001", date(2023, 11, 15), TaskStatus.TO_DO, 0),
    Task("task-3", "proj-2", "Design Mockups", "Create high-fidelity mockups.", "2002", date(2023, 11, 8), TaskStatus.DONE, 100),
    Task("task-4", "proj-2", "Develop Homepage", "Code the new homepage based on the approved mockups.", "2003", date(2023, 11, 20), TaskStatus.TO_DO, 0),
)


def seed_demo_data(
    departments: DepartmentRepository,
    employees: EmployeeRepository,
    projects: ProjectRepository | None = None,
) -> None:
    """Insert any missing demo departments, employees and projects."""
    for d in DEMO_DEPARTMENTS:
        if not departments.find_by_name(d.name):
            departments.save(d)

    for emp_id, name, dept, etype, position, username, password, balance, role in DEMO_EMPLOYEES:
        if employees.find_by_id(emp_id):
            continue
        employees.save(
            Employee(
                employee_id=emp_id,
                name=name,
                department=dept,
                employee_type=etype,
                role=role,
                position_title=position,
                username=username,
                password_hash=generate_password_hash(password) if password else None,
                leave_balance=balance,
            )
        )

    if projects is not None:
        for p in DEMO_PROJECTS:
            if not projects.get_project(p.project_id):
                projects.save_project(p)
        for t in DEMO_TASKS:
            if not projects.get_task(t.task_id):
                projects.save_task(t)

    _logger.info("Demo data ready")
