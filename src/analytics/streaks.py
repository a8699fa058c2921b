"""Consecutive-day logging streak."""

from __future__ import annotations

from typing import Iterable

from models import DailyLogEntry


def calculate_streak(entries: Iterable[DailyLogEntry]) -> int:
    """Count consecutive calendar days walking back from the newest entry.

    The newest entry always counts, whether or not it is today. A repeated
    date neither extends nor breaks the run.
    """
    days = sorted((e.log_date for e in entries), reverse=True)
    if not days:
        return 0

    streak = 1
    prev = days[0]
    for current in days[1:]:
        gap = (prev - current).days
        if gap == 1:
            streak += 1
        elif gap > 1:
            break
        prev = current
    return streak
