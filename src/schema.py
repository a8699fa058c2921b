"""
Habit Tracker Database Schema
=============================
Tables:
  - daily_logs     (one row per submitted day; the only input to analytics)
  - user_profile   (single-user profile, at most one row)

Date uniqueness on daily_logs is deliberately not enforced here: analytics
pairs values by position, so callers should keep one entry per day.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import psycopg2

from routes.helpers import _conn_str

logger = logging.getLogger("schema")

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS daily_logs (
    id SERIAL PRIMARY KEY,
    log_date DATE NOT NULL,

    -- Habits
    study_hours NUMERIC(4,2) DEFAULT 0,
    sleep_hours NUMERIC(4,2) DEFAULT 0,
    meal_count INTEGER DEFAULT 0,
    meal_quality INTEGER CHECK (meal_quality BETWEEN 1 AND 5),
    screen_time NUMERIC(4,2) DEFAULT 0,
    water_intake NUMERIC(5,2) DEFAULT 0,
    mood INTEGER CHECK (mood BETWEEN 1 AND 10),
    exercise_minutes INTEGER DEFAULT 0,
    exercise_type TEXT,

    -- Notes
    daily_note TEXT,

    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_daily_logs_date ON daily_logs(log_date DESC);

CREATE TABLE IF NOT EXISTS user_profile (
    id SERIAL PRIMARY KEY,
    name TEXT NOT NULL,
    age INTEGER,
    gender TEXT,
    goals TEXT,
    notes TEXT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

REQUIRED_TABLES = ["daily_logs", "user_profile"]

REQUIRED_COLUMNS = {
    "daily_logs": [
        "log_date", "study_hours", "sleep_hours", "meal_count", "meal_quality",
        "screen_time", "water_intake", "mood", "exercise_minutes",
        "exercise_type", "daily_note",
    ],
    "user_profile": ["name", "age", "gender", "goals", "notes"],
}


def schema_statements() -> List[str]:
    return [s.strip() for s in SCHEMA_SQL.split(";") if s.strip()]


def upgrade_database(conn_str: Optional[str] = None) -> None:
    """
    Create habit tracker tables if missing.
    Safe to run multiple times (uses IF NOT EXISTS).

    Parameters
    ----------
    conn_str : str, optional
        PostgreSQL connection string.  Falls back to
        POSTGRES_CONNECTION_STRING / DATABASE_URL.
    """
    conn_str = conn_str or _conn_str()
    conn = psycopg2.connect(conn_str)
    conn.autocommit = True
    try:
        with conn.cursor() as cur:
            for stmt in schema_statements():
                cur.execute(stmt)
    except Exception as e:
        logger.error("Schema upgrade failed: %s", e)
        raise
    finally:
        conn.close()

    logger.info("Database schema ready: %s", ", ".join(REQUIRED_TABLES))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    upgrade_database()
