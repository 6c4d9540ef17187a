from __future__ import annotations

import csv
import io
from typing import Iterable

from ..employees.model import Employee
from .service import ReportData

DTR_HEADERS = ("Date", "Employee ID", "Name", "Department", "Time In", "Break Out", "Break In", "Time Out", "Total Hours")
EMPLOYEE_HEADERS = ("ID", "Name", "Department", "Employee Type", "Position Title", "Username", "Leave Balance")


def _to_bytes(headers, rows: Iterable[dict]) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=list(headers))
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    # BOM so spreadsheet apps pick up UTF-8 names.
    return out.getvalue().encode("utf-8-sig")


def dtr_csv(report: ReportData) -> bytes:
    return _to_bytes(
        DTR_HEADERS,
        (
            {
                "Date": r["work_date"],
                "Employee ID": r["employee_id"],
                "Name": r["name"],
                "Department": r["department"],
                "Time In": r["time_in"],
                "Break Out": r["break_out"],
                "Break In": r["break_in"],
                "Time Out": r["time_out"],
                "Total Hours": r["total_hours"],
            }
            for r in report.rows
        ),
    )


def employees_csv(employees: Iterable[Employee]) -> bytes:
    return _to_bytes(
        EMPLOYEE_HEADERS,
        (
            {
                "ID": e.employee_id,
                "Name": e.name,
                "Department": e.department,
                "Employee Type": e.employee_type.value,
                "Position Title": e.position_title or "N/A",
                "Username": e.username or "N/A",
                "Leave Balance": e.leave_balance,
            }
            for e in employees
        ),
    )
