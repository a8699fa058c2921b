"""Startup schema bootstrap and audit helpers."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Dict, List

import psycopg2

from routes.helpers import _conn_str
from schema import REQUIRED_COLUMNS, REQUIRED_TABLES, upgrade_database

log = logging.getLogger("pipeline.migrations")

_NOT_CONFIGURED = "POSTGRES_CONNECTION_STRING (or DATABASE_URL) is not configured"

_COLUMNS_SQL = """
    SELECT table_name, column_name
    FROM information_schema.columns
    WHERE table_schema = 'public' AND table_name = ANY(%s)
    ORDER BY table_name, ordinal_position
"""


def _resolve_conn_str(conn_str: str | None) -> str:
    return (conn_str or _conn_str()).strip()


def ensure_startup_schema(conn_str: str | None = None) -> None:
    """Create the tables if needed before the app starts serving requests."""
    cs = _resolve_conn_str(conn_str)
    if not cs:
        raise RuntimeError(_NOT_CONFIGURED)

    upgrade_database(cs)
    log.info("Startup schema check completed.")


def _live_columns(cs: str) -> Dict[str, List[str]]:
    conn = psycopg2.connect(cs)
    try:
        with conn.cursor() as cur:
            cur.execute(_COLUMNS_SQL, (list(REQUIRED_TABLES),))
            rows = cur.fetchall()
    finally:
        conn.close()

    found: Dict[str, List[str]] = defaultdict(list)
    for table, column in rows:
        found[table].append(column)
    return found


def schema_audit(conn_str: str | None = None) -> Dict[str, Any]:
    """Compare the live schema with the tables and columns the app writes.

    A table with no visible columns is reported as missing.
    """
    cs = _resolve_conn_str(conn_str)
    if not cs:
        return {"ok": False, "error": _NOT_CONFIGURED, "tables": {}, "missing_tables": []}

    live = _live_columns(cs)
    tables: Dict[str, Any] = {}
    missing_tables = [t for t in REQUIRED_TABLES if t not in live]
    for table in REQUIRED_TABLES:
        cols = live.get(table, [])
        tables[table] = {
            "exists": table in live,
            "columns": cols,
            "missing_columns": [c for c in REQUIRED_COLUMNS[table] if cols and c not in cols],
        }

    ok = not missing_tables and not any(t["missing_columns"] for t in tables.values())
    if not ok:
        log.warning("Schema audit found gaps: missing tables %s", missing_tables)
    return {"ok": ok, "tables": tables, "missing_tables": missing_tables}
