"""
Pairwise Pearson correlation across the tracked habit dimensions.

Values are paired by position in the entry sequence (one value per entry),
not joined on date. Callers are expected to supply one entry per day.
"""

from __future__ import annotations

import logging
from itertools import combinations
from typing import Dict, List, Sequence

import numpy as np

from constants import (
    CORRELATION_REPORT_MIN,
    DIMENSIONS,
    MIN_LOGS_FOR_ANALYSIS,
    STRENGTH_BUCKETS,
    STRENGTH_FLOOR_LABEL,
)
from models import Correlation, DailyLogEntry

log = logging.getLogger("analytics")


def pearson_correlation(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Pearson r, or 0.0 for mismatched/empty input or a constant series."""
    if len(xs) != len(ys) or len(xs) == 0:
        return 0.0
    x = np.asarray(xs, dtype=np.float64)
    y = np.asarray(ys, dtype=np.float64)
    if np.ptp(x) == 0 or np.ptp(y) == 0:
        return 0.0
    dx = x - x.mean()
    dy = y - y.mean()
    den_x = float((dx * dx).sum())
    den_y = float((dy * dy).sum())
    if den_x == 0 or den_y == 0:
        return 0.0
    r = float((dx * dy).sum()) / np.sqrt(den_x * den_y)
    # Clamp float drift so |r| never exceeds 1.
    return float(max(-1.0, min(1.0, r)))


def correlation_strength(coefficient: float) -> str:
    magnitude = abs(coefficient)
    for threshold, label in STRENGTH_BUCKETS:
        if magnitude >= threshold:
            return label
    return STRENGTH_FLOOR_LABEL


def _projections(entries: Sequence[DailyLogEntry]) -> Dict[str, List[float]]:
    return {d.label: [float(d.accessor(e)) for e in entries] for d in DIMENSIONS}


def find_correlations(entries: Sequence[DailyLogEntry]) -> List[Correlation]:
    """Notable dimension pairs (|r| >= 0.3), strongest first."""
    entries = list(entries)
    if len(entries) < MIN_LOGS_FOR_ANALYSIS:
        return []

    series = _projections(entries)
    found: List[Correlation] = []
    for dim_a, dim_b in combinations(DIMENSIONS, 2):
        r = pearson_correlation(series[dim_a.label], series[dim_b.label])
        if abs(r) >= CORRELATION_REPORT_MIN:
            found.append(Correlation(
                dimension_a=dim_a.label,
                dimension_b=dim_b.label,
                coefficient=r,
                strength=correlation_strength(r),
            ))

    # sorted() is stable, so ties keep pair enumeration order.
    found = sorted(found, key=lambda c: abs(c.coefficient), reverse=True)
    log.debug("find_correlations: %d/%d pairs above threshold over %d logs",
              len(found), len(DIMENSIONS) * (len(DIMENSIONS) - 1) // 2, len(entries))
    return found


def correlation_matrix(entries: Sequence[DailyLogEntry]) -> Dict[str, Dict[str, float]]:
    """Full symmetric r matrix keyed by dimension label."""
    series = _projections(list(entries))
    labels = [d.label for d in DIMENSIONS]
    matrix: Dict[str, Dict[str, float]] = {a: {} for a in labels}
    for a in labels:
        for b in labels:
            if b in matrix[a]:
                continue
            r = pearson_correlation(series[a], series[b])
            matrix[a][b] = r
            matrix[b][a] = r
    return matrix
