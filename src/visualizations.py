"""
Habit Tracker Visualizations
============================
Builds Plotly figures from analytics output. No DB access: callers pass the
DailyLogEntry sequence (or derived values) in, and the API serves the figure
JSON to the frontend.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Sequence

import plotly.graph_objects as go

from constants import DASHBOARD_TREND_WINDOW, DIMENSIONS, Dimension
from models import Correlation, DailyLogEntry
from analytics.correlation import correlation_matrix
from analytics.statistics import build_trend

log = logging.getLogger("visualizations")


class HabitChartBuilder:
    """Creates Plotly visualisations of logged habits."""

    def __init__(self):
        self.colors = {
            "primary": "#00B8A9",
            "danger": "#E63946",
            "success": "#06FFA5",
            "info": "#5C7CFA",
        }

    # ── 1. Metric trend ───────────────────────────────────────

    def create_trend_chart(
        self,
        entries: Sequence[DailyLogEntry],
        dimension: Dimension,
        window: int = DASHBOARD_TREND_WINDOW,
    ) -> Optional[go.Figure]:
        """Daily values with a dashed trailing moving average."""
        points = build_trend(entries, dimension, window)
        if not points:
            log.info("No data available for %s trend", dimension.key)
            return None

        labels = [p.label for p in points]
        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=labels, y=[p.value for p in points],
            mode="lines+markers", name=dimension.label,
            line=dict(color=self.colors["primary"], width=2),
        ))
        fig.add_trace(go.Scatter(
            x=labels, y=[p.moving_average for p in points],
            mode="lines", name=f"{window}-Day Avg",
            line=dict(color=self.colors["info"], width=2, dash="dash"),
        ))
        fig.update_layout(
            title=f"{dimension.label} Trend",
            xaxis_title="Date", yaxis_title=f"{dimension.label} ({dimension.unit})",
            hovermode="x unified", height=400,
        )
        return fig

    # ── 2. Notable correlations ───────────────────────────────

    def create_correlation_bars(self, correlations: Sequence[Correlation]) -> Optional[go.Figure]:
        """Horizontal bars, green for positive and red for negative r."""
        if not correlations:
            return None

        names = [f"{c.dimension_a} ↔ {c.dimension_b}" for c in correlations]
        fig = go.Figure(go.Bar(
            x=[c.coefficient for c in correlations], y=names, orientation="h",
            marker_color=[
                self.colors["success"] if c.coefficient > 0 else self.colors["danger"]
                for c in correlations
            ],
            text=[f"{c.coefficient:.2f} ({c.strength})" for c in correlations],
            textposition="auto",
        ))
        fig.update_layout(
            title="Habit Correlations",
            xaxis=dict(range=[-1, 1], title="Pearson r"),
            yaxis=dict(autorange="reversed"),
            height=max(300, 60 * len(correlations)),
        )
        return fig

    # ── 3. Full matrix ────────────────────────────────────────

    def create_correlation_heatmap(self, entries: Sequence[DailyLogEntry]) -> Optional[go.Figure]:
        """NxN Pearson heatmap across all tracked dimensions."""
        if not entries:
            return None

        matrix = correlation_matrix(entries)
        labels = [d.label for d in DIMENSIONS]
        z = [[matrix[a][b] for b in labels] for a in labels]
        fig = go.Figure(data=go.Heatmap(
            z=z, x=labels, y=labels,
            colorscale="RdBu", zmin=-1, zmax=1,
            text=[[round(v, 2) for v in row] for row in z], texttemplate="%{text}",
            colorbar=dict(title="Correlation"),
        ))
        fig.update_layout(title="Habit Correlation Matrix", height=600, xaxis_tickangle=-45)
        return fig


def figure_payload(fig: Optional[go.Figure]) -> Dict[str, Any]:
    """JSON-safe dict for a figure (empty when there is nothing to plot)."""
    if fig is None:
        return {"figure": None}
    return {"figure": json.loads(fig.to_json())}
