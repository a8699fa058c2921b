"""
Shared helpers for API routes.
Contains: DB access, type coercion, log loading, analytics payload builders.
"""

from __future__ import annotations

import logging
import os
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence

import psycopg2
from dotenv import load_dotenv
from psycopg2.extras import RealDictCursor

from constants import DIMENSIONS, DIMENSIONS_BY_KEY, RECENT_WINDOW, Dimension
from models import DailyLogEntry
from analytics.statistics import calculate_mean, calculate_statistics, recent_entries

load_dotenv()

log = logging.getLogger("api")

LOG_COLUMNS = [
    "log_date", "study_hours", "sleep_hours", "meal_count", "meal_quality",
    "screen_time", "water_intake", "mood", "exercise_minutes",
    "exercise_type", "daily_note",
]
PROFILE_COLUMNS = ["name", "age", "gender", "goals", "notes"]


# ─── DB helpers ─────────────────────────────────────────────

def _normalize_db_url(value: str) -> str:
    db_url = (value or "").strip()
    if db_url.startswith("postgres://"):
        db_url = db_url.replace("postgres://", "postgresql://", 1)
    return db_url


def _conn_str() -> str:
    return _normalize_db_url(
        os.getenv("POSTGRES_CONNECTION_STRING") or os.getenv("DATABASE_URL") or ""
    )


def _connect():
    cs = _conn_str()
    if not cs:
        raise RuntimeError("POSTGRES_CONNECTION_STRING is not set")
    return psycopg2.connect(cs)


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


def _fetch_all(query: str, params: Optional[tuple] = None) -> List[Dict[str, Any]]:
    conn = _connect()
    try:
        with conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(query, params or ())
            return [{k: _to_jsonable(v) for k, v in dict(row).items()} for row in cur.fetchall()]
    finally:
        conn.close()


def _fetch_one(query: str, params: Optional[tuple] = None) -> Optional[Dict[str, Any]]:
    rows = _fetch_all(query, params=params)
    return rows[0] if rows else None


def _execute(query: str, params: Optional[tuple] = None) -> Optional[Dict[str, Any]]:
    """Run a write statement in its own transaction.

    Returns the RETURNING row when the statement has one, else None.
    """
    conn = _connect()
    try:
        with conn:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(query, params or ())
                row = cur.fetchone() if cur.description else None
        return {k: _to_jsonable(v) for k, v in dict(row).items()} if row else None
    finally:
        conn.close()


# ─── Type coercion ──────────────────────────────────────────

def _text(value: Any) -> str:
    return str(value) if value is not None else ""


def _round(value: Optional[float], digits: int = 2) -> Optional[float]:
    return round(value, digits) if value is not None else None


# ─── Log loading ───────────────────────────────────────────

def _load_entries() -> List[DailyLogEntry]:
    rows = _fetch_all(
        f"""
        SELECT id, {", ".join(LOG_COLUMNS)}
        FROM daily_logs
        ORDER BY log_date DESC, id DESC
        """
    )
    return [DailyLogEntry.from_row(r) for r in rows]


def _within_days(
    entries: Iterable[DailyLogEntry],
    days: int,
    today: Optional[date] = None,
) -> List[DailyLogEntry]:
    """Entries dated in the ``days``-day window ending today (inclusive)."""
    end = today or date.today()
    start = end - timedelta(days=days - 1)
    return [e for e in entries if start <= e.log_date <= end]


def _dimension_or_none(key: str) -> Optional[Dimension]:
    return DIMENSIONS_BY_KEY.get(_text(key).strip().lower())


def _log_values(payload: Dict[str, Any]) -> tuple:
    return tuple(payload.get(c) for c in LOG_COLUMNS)


# ─── Payload builders ──────────────────────────────────────

def _statistics_payload(entries: Sequence[DailyLogEntry]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for dim in DIMENSIONS:
        stats = calculate_statistics(dim.accessor(e) for e in entries)
        out[dim.key] = {"label": dim.label, "unit": dim.unit, **stats.to_dict()}
    return out


def _recent_averages(entries: Sequence[DailyLogEntry]) -> Dict[str, float]:
    recent = recent_entries(entries, RECENT_WINDOW)
    return {
        key: _round(calculate_mean(DIMENSIONS_BY_KEY[key].accessor(e) for e in recent))
        for key in ("mood", "sleep", "exercise", "water")
    }
