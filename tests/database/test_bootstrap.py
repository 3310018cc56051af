from __future__ import annotations

from shift_attendance.database.bootstrap import (
    SCHEMA_PATH,
    _strip_comments,
    _strip_create_db_and_use,
    iter_sql_statements,
)


def test_splits_on_semicolons_outside_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); SELECT 1;\nSELECT 2"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "SELECT 1", "SELECT 2"]


def test_escaped_quote_does_not_end_string():
    sql = r"INSERT INTO t VALUES ('it\'s;fine'); SELECT 1;"

    assert len(list(iter_sql_statements(sql))) == 2


def test_database_statements_and_comments_are_removed():
    sql = "-- header\nCREATE DATABASE x;\nUSE x;\nCREATE TABLE t (id INT);\n"

    cleaned = _strip_create_db_and_use(_strip_comments(sql))

    assert list(iter_sql_statements(cleaned)) == ["CREATE TABLE t (id INT)"]


def test_bundled_schema_defines_all_tables():
    sql = _strip_create_db_and_use(_strip_comments(SCHEMA_PATH.read_text(encoding="utf-8")))
    statements = " ".join(iter_sql_statements(sql))

    for table in ("users", "admins", "morning_attendance", "afternoon_attendance"):
        assert f"CREATE TABLE IF NOT EXISTS {table}" in statements
