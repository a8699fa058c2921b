"""
Shared test configuration.

Adds src/ to sys.path so the flat modules (api, models, constants, ...) and
the analytics/pipeline/routes packages import the same way they do when the
app runs from src/.
"""

import os
import sys
from datetime import date, timedelta

import pytest

_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_src_dir = os.path.join(_project_root, "src")

if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from models import DailyLogEntry  # noqa: E402

BASE_DAY = date(2026, 3, 10)

NEUTRAL = dict(
    study_hours=0.0,
    sleep_hours=6.5,
    meal_count=3,
    meal_quality=3,
    screen_time=5.0,
    water_intake=7.0,
    mood=6,
    exercise_minutes=0.0,
)


@pytest.fixture
def make_entry():
    """Factory: entry ``offset`` days before BASE_DAY with neutral defaults.

    The defaults trigger no insight rule (sleep 6.5h, water 7, screen 5h,
    mood 6, no study).
    """
    def _make(offset: int = 0, **overrides) -> DailyLogEntry:
        fields = dict(NEUTRAL)
        fields.update(overrides)
        return DailyLogEntry(log_date=BASE_DAY - timedelta(days=offset), **fields)
    return _make


@pytest.fixture
def consecutive_days(make_entry):
    """Factory: ``n`` entries on consecutive days ending at BASE_DAY, newest first."""
    def _make(n: int, **overrides):
        return [make_entry(i, **overrides) for i in range(n)]
    return _make
