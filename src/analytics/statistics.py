"""Descriptive statistics and trailing moving averages.

Every function is total: an empty sample yields 0 rather than NaN or an
exception, and inputs are never mutated.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence

import numpy as np
import pandas as pd

from constants import DASHBOARD_TREND_WINDOW, DEFAULT_MOVING_AVERAGE_WINDOW, Dimension
from models import DailyLogEntry, Statistics, TrendPoint


def _as_array(values: Iterable[float]) -> np.ndarray:
    return np.asarray(list(values), dtype=np.float64)


def calculate_mean(values: Iterable[float]) -> float:
    arr = _as_array(values)
    if arr.size == 0:
        return 0.0
    return float(arr.mean())


def calculate_median(values: Iterable[float]) -> float:
    arr = _as_array(values)
    if arr.size == 0:
        return 0.0
    return float(np.median(arr))


def calculate_variance(values: Iterable[float]) -> float:
    """Population variance (divides by N)."""
    arr = _as_array(values)
    if arr.size == 0 or arr.min() == arr.max():
        return 0.0
    return float(arr.var(ddof=0))


def calculate_std_dev(values: Iterable[float]) -> float:
    return math.sqrt(calculate_variance(values))


def calculate_statistics(values: Iterable[float]) -> Statistics:
    sample = list(values)
    variance = calculate_variance(sample)
    return Statistics(
        mean=calculate_mean(sample),
        median=calculate_median(sample),
        variance=variance,
        std_dev=math.sqrt(variance),
    )


def calculate_moving_average(
    points: Sequence[TrendPoint],
    window: int = DEFAULT_MOVING_AVERAGE_WINDOW,
) -> List[TrendPoint]:
    """Attach a trailing mean over the last ``window`` points to each point.

    The first ``window - 1`` points average whatever is available.
    """
    if not points:
        return []
    window = max(1, int(window))
    series = pd.Series([p.value for p in points], dtype="float64")
    averages = series.rolling(window=window, min_periods=1).mean()
    return [p.with_average(float(avg)) for p, avg in zip(points, averages)]


def sort_chronologically(entries: Iterable[DailyLogEntry]) -> List[DailyLogEntry]:
    return sorted(entries, key=lambda e: e.log_date)


def recent_entries(entries: Iterable[DailyLogEntry], n: int) -> List[DailyLogEntry]:
    """The ``n`` most recent entries by date, oldest first."""
    ordered = sort_chronologically(entries)
    return ordered[-n:] if n > 0 else []


def build_trend(
    entries: Iterable[DailyLogEntry],
    dimension: Dimension,
    window: int = DASHBOARD_TREND_WINDOW,
) -> List[TrendPoint]:
    points = [
        TrendPoint(label=e.log_date.strftime("%b %d"), value=float(dimension.accessor(e)))
        for e in sort_chronologically(entries)
    ]
    return calculate_moving_average(points, window)
