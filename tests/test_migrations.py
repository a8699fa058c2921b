"""Tests for schema bootstrap and audit with psycopg2 mocked out."""

from unittest.mock import MagicMock, patch

import pytest

import schema
from pipeline import migrations


def _mock_conn():
    conn = MagicMock()
    cur = MagicMock()
    conn.cursor.return_value.__enter__.return_value = cur
    return conn, cur


class TestSchemaStatements:

    def test_creates_both_tables(self):
        stmts = schema.schema_statements()
        joined = "\n".join(stmts)
        assert "CREATE TABLE IF NOT EXISTS daily_logs" in joined
        assert "CREATE TABLE IF NOT EXISTS user_profile" in joined
        assert all(s and not s.endswith(";") for s in stmts)

    def test_persisted_field_set(self):
        for col in schema.REQUIRED_COLUMNS["daily_logs"]:
            assert col in schema.SCHEMA_SQL
        assert "CHECK (mood BETWEEN 1 AND 10)" in schema.SCHEMA_SQL
        assert "CHECK (meal_quality BETWEEN 1 AND 5)" in schema.SCHEMA_SQL

    def test_log_date_not_unique(self):
        # Uniqueness is left to callers.
        assert "log_date DATE NOT NULL," in schema.SCHEMA_SQL
        assert "UNIQUE" not in schema.SCHEMA_SQL


class TestUpgradeDatabase:

    def test_executes_every_statement(self):
        conn, cur = _mock_conn()
        with patch.object(schema.psycopg2, "connect", return_value=conn) as connect:
            schema.upgrade_database("postgresql://x")
        connect.assert_called_once_with("postgresql://x")
        assert cur.execute.call_count == len(schema.schema_statements())
        conn.close.assert_called_once()

    def test_failure_propagates_and_closes(self):
        conn, cur = _mock_conn()
        cur.execute.side_effect = RuntimeError("permission denied")
        with patch.object(schema.psycopg2, "connect", return_value=conn):
            with pytest.raises(RuntimeError):
                schema.upgrade_database("postgresql://x")
        conn.close.assert_called_once()


class TestStartupSchema:

    def test_requires_connection_string(self, monkeypatch):
        monkeypatch.delenv("POSTGRES_CONNECTION_STRING", raising=False)
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(RuntimeError):
            migrations.ensure_startup_schema()

    def test_database_url_fallback_normalized(self, monkeypatch):
        monkeypatch.delenv("POSTGRES_CONNECTION_STRING", raising=False)
        monkeypatch.setenv("DATABASE_URL", "postgres://u:p@host/db")
        with patch.object(migrations, "upgrade_database") as upgrade:
            migrations.ensure_startup_schema()
        upgrade.assert_called_once_with("postgresql://u:p@host/db")


class TestSchemaAudit:

    def test_reports_missing_table_and_columns(self):
        conn, cur = _mock_conn()
        # daily_logs exists without daily_note, user_profile is absent
        cur.fetchall.return_value = [
            ("daily_logs", c) for c in schema.REQUIRED_COLUMNS["daily_logs"][:-1]
        ]
        with patch.object(migrations.psycopg2, "connect", return_value=conn):
            out = migrations.schema_audit("postgresql://x")
        assert out["ok"] is False
        assert out["missing_tables"] == ["user_profile"]
        assert out["tables"]["user_profile"]["exists"] is False
        assert out["tables"]["daily_logs"]["missing_columns"] == ["daily_note"]
        conn.close.assert_called_once()

    def test_all_present(self):
        conn, cur = _mock_conn()
        cur.fetchall.return_value = [
            (table, c) for table in schema.REQUIRED_TABLES for c in schema.REQUIRED_COLUMNS[table]
        ]
        with patch.object(migrations.psycopg2, "connect", return_value=conn):
            out = migrations.schema_audit("postgresql://x")
        assert out["ok"] is True
        assert out["missing_tables"] == []
        params = cur.execute.call_args[0][1]
        assert params == (schema.REQUIRED_TABLES,)
