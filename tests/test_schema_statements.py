from pathlib import Path

from src.dtr_system.dtr_system.database.bootstrap import schema_statements

SCHEMA = Path(__file__).resolve().parents[1] / "database" / "schema.sql"


def test_schema_file_splits_into_create_table_statements():
    statements = schema_statements(SCHEMA.read_text(encoding="utf-8"))

    assert statements
    assert all(s.upper().startswith("CREATE TABLE IF NOT EXISTS") for s in statements)
    assert {s.split()[5] for s in statements} >= {"departments", "employees", "daily_records", "leave_records"}


def test_database_directives_and_comments_are_dropped():
    sql = "-- header\nCREATE DATABASE x;\nUSE x;\nCREATE TABLE IF NOT EXISTS a (id INT);\n"

    assert schema_statements(sql) == ["CREATE TABLE IF NOT EXISTS a (id INT)"]
