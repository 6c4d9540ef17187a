"""Create the MySQL database and tables for the `mysql` storage backend."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List

import mysql.connector

from ..core.exceptions import StorageFailure
from .connection import DBConfig

_logger = logging.getLogger(__name__)

# schema.sql may name its own database; the configured one always wins.
_DATABASE_DIRECTIVE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")


def schema_statements(sql: str) -> List[str]:
    """Split schema DDL into statements (no ';' inside literals expected)."""
    sql = _LINE_COMMENT.sub("", _DATABASE_DIRECTIVE.sub("", sql))
    return [stmt.strip() for stmt in sql.split(";") if stmt.strip()]


def _server(target: DBConfig, *, database: bool = True):
    params = {
        "host": target.host,
        "port": target.port,
        "user": target.user,
        "password": target.password,
    }
    if database:
        params["database"] = target.database
    return mysql.connector.connect(**params)


def _run(target: DBConfig, statements: List[str], *, database: bool = True) -> None:
    try:
        conn = _server(target, database=database)
    except mysql.connector.Error as e:
        raise StorageFailure(f"Cannot reach MySQL at {target.host}:{target.port}: {e}") from e
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    except mysql.connector.Error as e:
        conn.rollback()
        raise StorageFailure(f"Schema setup failed: {e}") from e
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    _run(
        target,
        [f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"],
        database=False,
    )


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    """Idempotent: every table in schema.sql uses CREATE TABLE IF NOT EXISTS."""
    target = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)
    statements = schema_statements(Path(schema_path).read_text(encoding="utf-8"))
    _run(target, statements)
    _logger.info("Schema applied to %s (%d statements)", target.describe(), len(statements))


def list_tables(db_config: dict) -> List[str]:
    target = DBConfig.from_dict(db_config)
    conn = _server(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
    finally:
        conn.close()
