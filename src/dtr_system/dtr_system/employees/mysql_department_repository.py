from __future__ import annotations

from typing import Optional, Sequence

from ..common.geo import GeoPoint
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .department_model import Department
from .department_repository import DepartmentRepository


def _row_to_department(r: dict) -> Department:
    location = None
    if r.get("latitude") is not None and r.get("longitude") is not None:
        location = GeoPoint(latitude=float(r["latitude"]), longitude=float(r["longitude"]))
    return Department(
        name=r["name"],
        location=location,
        campus=r.get("campus") or "",
        on_travel=bool(r.get("on_travel")),
    )


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_name(self, name: str) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT name, latitude, longitude, campus, on_travel FROM departments WHERE name=%s",
                (name,),
            )
            r = fetchone(cur)
            return _row_to_department(r) if r else None

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT name, latitude, longitude, campus, on_travel FROM departments ORDER BY name")
            return [_row_to_department(r) for r in fetchall(cur)]

    def save(self, department: Department, *, original_name: Optional[str] = None) -> None:
        loc = department.location
        params = (
            department.name,
            loc.latitude if loc else None,
            loc.longitude if loc else None,
            department.campus,
            int(department.on_travel),
        )
        with db_cursor(self._conn_factory) as (_, cur):
            if original_name and original_name != department.name:
                cur.execute(
                    """
                    UPDATE departments
                    SET name=%s, latitude=%s, longitude=%s, campus=%s, on_travel=%s
                    WHERE name=%s
                    """,
                    params + (original_name,),
                )
                return
            cur.execute(
                """
                INSERT INTO departments(name, latitude, longitude, campus, on_travel)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    latitude=VALUES(latitude), longitude=VALUES(longitude),
                    campus=VALUES(campus), on_travel=VALUES(on_travel)
                """,
                params,
            )

    def delete(self, name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE name=%s", (name,))
            return cur.rowcount > 0
