"""
Shared constants used across the analytics core, API and report builder.
Single source of truth for tracked dimensions, wellness targets and thresholds.
"""

from __future__ import annotations

from collections import namedtuple
from operator import attrgetter

# ─── Tracked dimensions ───────────────────────────────────────
# Order matters: correlation pairs are enumerated i < j over this tuple.

Dimension = namedtuple("Dimension", ["key", "label", "unit", "accessor"])

DIMENSIONS = (
    Dimension("mood", "Mood", "1-10", attrgetter("mood")),
    Dimension("sleep", "Sleep", "hours", attrgetter("sleep_hours")),
    Dimension("exercise", "Exercise", "minutes", attrgetter("exercise_minutes")),
    Dimension("study", "Study", "hours", attrgetter("study_hours")),
    Dimension("screen_time", "Screen Time", "hours", attrgetter("screen_time")),
    Dimension("water", "Water Intake", "glasses", attrgetter("water_intake")),
    Dimension("meal_quality", "Meal Quality", "1-5", attrgetter("meal_quality")),
)

DIMENSIONS_BY_KEY = {d.key: d for d in DIMENSIONS}

# ─── Wellness score factors ───────────────────────────────────
# Weights sum to 100. Meal quality is logged on a 1-5 scale but scored
# against 10, so it tops out at half its weight.

WellnessFactor = namedtuple("WellnessFactor", ["key", "label", "target", "weight"])

WELLNESS_FACTORS = (
    WellnessFactor("sleep", "Sleep", 8.0, 20),
    WellnessFactor("mood", "Mood", 10.0, 25),
    WellnessFactor("exercise", "Exercise", 30.0, 15),
    WellnessFactor("water", "Water", 8.0, 10),
    WellnessFactor("meal_quality", "Meal Quality", 10.0, 15),
    WellnessFactor("study", "Study", 4.0, 15),
)

# ─── Windows ──────────────────────────────────────────────────

RECENT_WINDOW = 7
DEFAULT_MOVING_AVERAGE_WINDOW = 7
DASHBOARD_TREND_WINDOW = 3
MIN_LOGS_FOR_ANALYSIS = 3

# ─── Correlation thresholds ───────────────────────────────────

CORRELATION_REPORT_MIN = 0.3
STRENGTH_BUCKETS = (
    (0.7, "Strong"),
    (0.4, "Moderate"),
    (0.2, "Weak"),
)
STRENGTH_FLOOR_LABEL = "Very Weak"

# ─── Insight thresholds ───────────────────────────────────────

STREAK_CHAMPION_DAYS = 7
STREAK_MOMENTUM_DAYS = 3
SLEEP_LOW_HOURS = 6.0
SLEEP_OPTIMAL_RANGE = (7.0, 9.0)
EXERCISE_MOOD_MIN_R = 0.4
WATER_LOW_GLASSES = 6.0
SCREEN_TIME_HIGH_HOURS = 8.0
MOOD_THRIVING = 8.0
MOOD_TREND_MIN_DELTA = 2.0

# ─── Report periods ───────────────────────────────────────────

REPORT_PERIODS = {
    "week": ("Weekly", "Last 7 Days", 7),
    "month": ("Monthly", "Last 30 Days", 30),
}
