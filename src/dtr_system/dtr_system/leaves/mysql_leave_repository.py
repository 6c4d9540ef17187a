from __future__ import annotations

import json
from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..storage.codec import leave_details_from_dict, leave_details_to_dict
from .model import LeaveRecord
from .repository import LeaveRepository

_COLUMNS = (
    "leave_id, employee_id, employee_name, department, start_date, end_date, "
    "primary_leave_type, status, details_json, created_at"
)


def _row_to_leave(r: dict) -> LeaveRecord:
    return LeaveRecord(
        leave_id=r["leave_id"],
        employee_id=str(r["employee_id"]),
        employee_name=r["employee_name"],
        department=r["department"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        primary_leave_type=r["primary_leave_type"],
        status=LeaveStatus(r["status"]),
        details=leave_details_from_dict(json.loads(r.get("details_json") or "{}")),
        created_at=r.get("created_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "", params: tuple = ()) -> list[LeaveRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leave_records {where} ORDER BY start_date DESC",
                params,
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def get_by_id(self, leave_id: str) -> Optional[LeaveRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_records WHERE leave_id=%s", (leave_id,))
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def list_all(self) -> Sequence[LeaveRecord]:
        return self._select()

    def list_for_employee(self, employee_id: str) -> Sequence[LeaveRecord]:
        return self._select("WHERE employee_id=%s", (employee_id,))

    def list_for_department(self, department: str) -> Sequence[LeaveRecord]:
        return self._select("WHERE department=%s", (department,))

    def save(self, record: LeaveRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO leave_records({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    employee_name=VALUES(employee_name), department=VALUES(department),
                    start_date=VALUES(start_date), end_date=VALUES(end_date),
                    primary_leave_type=VALUES(primary_leave_type), status=VALUES(status),
                    details_json=VALUES(details_json)
                """,
                (
                    record.leave_id,
                    record.employee_id,
                    record.employee_name,
                    record.department,
                    record.start_date,
                    record.end_date,
                    record.primary_leave_type,
                    record.status.value,
                    json.dumps(leave_details_to_dict(record.details)),
                    record.created_at,
                ),
            )

    def delete(self, leave_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_records WHERE leave_id=%s", (leave_id,))
            return cur.rowcount > 0

    def find_active_overlap(self, employee_id: str, day: date) -> Optional[LeaveRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_records
                WHERE employee_id=%s AND status=%s AND start_date<=%s AND end_date>=%s
                ORDER BY start_date
                LIMIT 1
                """,
                (employee_id, LeaveStatus.APPROVED.value, day, day),
            )
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def find_interval_overlap(
        self,
        employee_id: str,
        start_date: date,
        end_date: date,
        exclude_id: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS n
                FROM leave_records
                WHERE employee_id=%s AND status<>%s
                  AND start_date<=%s AND end_date>=%s
                  AND (%s IS NULL OR leave_id<>%s)
                """,
                (employee_id, LeaveStatus.REJECTED.value, end_date, start_date, exclude_id, exclude_id),
            )
            r = fetchone(cur)
            return bool(r and int(r["n"]) > 0)

    def reassign_employee(self, employee_id: str, *, employee_name: str, department: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE leave_records SET employee_name=%s, department=%s WHERE employee_id=%s",
                (employee_name, department, employee_id),
            )

    def rename_department(self, old_name: str, new_name: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE leave_records SET department=%s WHERE department=%s", (new_name, old_name))
