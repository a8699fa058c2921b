"""Plain-text wellness report for export."""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

from constants import DIMENSIONS_BY_KEY, REPORT_PERIODS
from models import Correlation, DailyLogEntry, Statistics
from analytics.correlation import find_correlations
from analytics.statistics import calculate_statistics
from analytics.streaks import calculate_streak
from analytics.wellness import calculate_wellness_score

HEAVY_RULE = "═" * 59
LIGHT_RULE = "─" * 57

# (dimension key, heading) in report order
REPORT_SECTIONS = [
    ("mood", "📊 Mood Score (1-10)"),
    ("sleep", "😴 Sleep (hours)"),
    ("exercise", "🏃 Exercise (minutes)"),
    ("study", "📚 Study (hours)"),
    ("water", "💧 Water Intake (glasses)"),
    ("screen_time", "📱 Screen Time (hours)"),
]


def report_filename(period: str, generated: Optional[date] = None) -> str:
    generated = generated or date.today()
    return f"wellness-report-{period}-{generated.isoformat()}.txt"


def _stats_block(heading: str, stats: Statistics) -> str:
    return (
        f"{heading}\n"
        f"   Mean:     {stats.mean:.2f}\n"
        f"   Median:   {stats.median:.2f}\n"
        f"   Std Dev:  {stats.std_dev:.2f}"
    )


def _correlation_lines(correlations: Sequence[Correlation]) -> str:
    if not correlations:
        return "Not enough data to calculate correlations"
    blocks: List[str] = []
    for i, corr in enumerate(correlations, start=1):
        direction = "↑ Positive" if corr.coefficient > 0 else "↓ Negative"
        blocks.append(
            f"{i}. {corr.dimension_a} ↔ {corr.dimension_b}\n"
            f"     Coefficient: {corr.coefficient:.3f} ({corr.strength})\n"
            f"     {direction} relationship"
        )
    return "\n\n".join(blocks)


def _recommendations(stats: dict) -> List[str]:
    return [
        "• Aim for 7-9 hours of sleep for optimal wellness"
        if stats["sleep"].mean < 7 else "• Sleep is in the recommended range",
        "• Try to achieve 30+ minutes of exercise daily"
        if stats["exercise"].mean < 30 else "• Exercise looks good",
        "• Increase water intake to 8+ glasses per day"
        if stats["water"].mean < 8 else "• Water intake looks good",
        "• Consider activities that boost mood and wellbeing"
        if stats["mood"].mean < 7 else "• Mood looks stable",
        "• Reduce screen time for better mental health"
        if stats["screen_time"].mean > 8 else "• Screen time is reasonable",
    ]


def build_wellness_report(
    period: str,
    period_entries: Sequence[DailyLogEntry],
    all_entries: Sequence[DailyLogEntry],
    generated: Optional[date] = None,
) -> str:
    """Render the report for one period.

    Statistics and correlations cover ``period_entries``; streak and wellness
    score always use the full history in ``all_entries``.
    """
    if period not in REPORT_PERIODS:
        raise ValueError(f"Unknown report period: {period!r}")
    adjective, label, _days = REPORT_PERIODS[period]
    generated = generated or date.today()

    stats = {
        key: calculate_statistics(DIMENSIONS_BY_KEY[key].accessor(e) for e in period_entries)
        for key, _heading in REPORT_SECTIONS
    }
    stats_text = "\n\n".join(_stats_block(heading, stats[key]) for key, heading in REPORT_SECTIONS)

    parts = [
        "PERSONAL WELLNESS REPORT",
        f"{adjective} Summary",
        f"Generated: {generated.strftime('%B')} {generated.day}, {generated.year}",
        f"Period: {label}",
        "",
        HEAVY_RULE,
        "",
        "WELLNESS OVERVIEW",
        LIGHT_RULE,
        f"Overall Wellness Score: {calculate_wellness_score(all_entries)}%",
        f"Current Logging Streak: {calculate_streak(all_entries)} days",
        f"Total Entries This Period: {len(period_entries)}",
        "",
        HEAVY_RULE,
        "",
        "STATISTICAL SUMMARY",
        LIGHT_RULE,
        "",
        stats_text,
        "",
        HEAVY_RULE,
        "",
        "HABIT CORRELATIONS",
        LIGHT_RULE,
        _correlation_lines(find_correlations(period_entries)),
        "",
        HEAVY_RULE,
        "",
        "RECOMMENDATIONS",
        LIGHT_RULE,
        *_recommendations(stats),
        "",
        HEAVY_RULE,
        "",
        "Generated by Personal Cognitive Pattern Analyzer",
    ]
    return "\n".join(parts)
