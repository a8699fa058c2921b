"""Weighted wellness score over the most recent week of logs."""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List

from constants import DIMENSIONS_BY_KEY, RECENT_WINDOW, WELLNESS_FACTORS
from models import DailyLogEntry
from analytics.statistics import calculate_mean, recent_entries


def wellness_breakdown(entries: Iterable[DailyLogEntry]) -> List[Dict[str, Any]]:
    """Per-factor contribution: min(mean / target, 1) * weight."""
    recent = recent_entries(entries, RECENT_WINDOW)
    rows: List[Dict[str, Any]] = []
    for factor in WELLNESS_FACTORS:
        accessor = DIMENSIONS_BY_KEY[factor.key].accessor
        mean = calculate_mean(accessor(e) for e in recent)
        rows.append({
            "factor": factor.label,
            "mean": mean,
            "target": factor.target,
            "weight": factor.weight,
            "contribution": min(mean / factor.target, 1.0) * factor.weight,
        })
    return rows


def calculate_wellness_score(entries: Iterable[DailyLogEntry]) -> int:
    entries = list(entries)
    if not entries:
        return 0
    total = sum(row["contribution"] for row in wellness_breakdown(entries))
    # Halves round up.
    return int(math.floor(total + 0.5))
