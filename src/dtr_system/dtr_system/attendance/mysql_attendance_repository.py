from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.geo import GeoPoint
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DailyAttendanceRecord
from .repository import DailyRecordStore

_COLUMNS = (
    "record_id, employee_id, department, work_date, time_in, break_out, break_in, time_out, "
    "on_duty, scan_latitude, scan_longitude, is_out_of_range"
)

_UPSERT = f"""
    INSERT INTO daily_records({_COLUMNS})
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
    ON DUPLICATE KEY UPDATE
        department=VALUES(department),
        time_in=VALUES(time_in), break_out=VALUES(break_out),
        break_in=VALUES(break_in), time_out=VALUES(time_out),
        on_duty=VALUES(on_duty),
        scan_latitude=VALUES(scan_latitude), scan_longitude=VALUES(scan_longitude),
        is_out_of_range=VALUES(is_out_of_range)
"""


def _record_params(record: DailyAttendanceRecord) -> tuple:
    loc = record.scan_location
    return (
        record.record_id,
        record.employee_id,
        record.department,
        record.work_date,
        record.time_in,
        record.break_out,
        record.break_in,
        record.time_out,
        int(record.on_duty),
        loc.latitude if loc else None,
        loc.longitude if loc else None,
        int(record.is_out_of_range),
    )


def _row_to_record(r: dict) -> DailyAttendanceRecord:
    location = None
    if r.get("scan_latitude") is not None and r.get("scan_longitude") is not None:
        location = GeoPoint(latitude=float(r["scan_latitude"]), longitude=float(r["scan_longitude"]))
    return DailyAttendanceRecord(
        record_id=r["record_id"],
        employee_id=str(r["employee_id"]),
        department=r["department"],
        work_date=r["work_date"],
        time_in=r.get("time_in"),
        break_out=r.get("break_out"),
        break_in=r.get("break_in"),
        time_out=r.get("time_out"),
        on_duty=bool(r.get("on_duty")),
        scan_location=location,
        is_out_of_range=bool(r.get("is_out_of_range")),
    )


class MySQLDailyRecordStore(DailyRecordStore):
    """Daily records in MySQL; (employee_id, work_date) is the primary key."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find(self, employee_id: str, work_date: date) -> Optional[DailyAttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM daily_records WHERE employee_id=%s AND work_date=%s",
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_by_id(self, record_id: str) -> Optional[DailyAttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM daily_records WHERE record_id=%s", (record_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def upsert(self, record: DailyAttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_UPSERT, _record_params(record))

    def delete(self, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM daily_records WHERE record_id=%s", (record_id,))
            return cur.rowcount > 0

    def save_batch(self, upserts: Sequence[DailyAttendanceRecord], delete_ids: Sequence[str]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            for record_id in delete_ids:
                cur.execute("DELETE FROM daily_records WHERE record_id=%s", (record_id,))
            for record in upserts:
                cur.execute(_UPSERT, _record_params(record))

    def clear(self, department: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            if department is None:
                cur.execute("DELETE FROM daily_records")
            else:
                cur.execute("DELETE FROM daily_records WHERE department=%s", (department,))
            return int(cur.rowcount)

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        department: Optional[str] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[DailyAttendanceRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if department is not None:
            clauses.append("department=%s")
            params.append(department)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(employee_id)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_records
                WHERE {where}
                ORDER BY work_date DESC, employee_id DESC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def recent_for_employee(self, employee_id: str, limit: int) -> Sequence[DailyAttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_records
                WHERE employee_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (employee_id, int(limit)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def reassign_employee(self, employee_id: str, department: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE daily_records SET department=%s WHERE employee_id=%s", (department, employee_id))

    def rename_department(self, old_name: str, new_name: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE daily_records SET department=%s WHERE department=%s", (new_name, old_name))
