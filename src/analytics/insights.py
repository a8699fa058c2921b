"""
Rule-based insight generator.

Each rule is an independent function over a shared InsightContext and
returns an Insight or None. INSIGHT_RULES fixes the evaluation order, which
is also the output order; every matching rule contributes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence

from constants import (
    EXERCISE_MOOD_MIN_R,
    MIN_LOGS_FOR_ANALYSIS,
    MOOD_THRIVING,
    MOOD_TREND_MIN_DELTA,
    RECENT_WINDOW,
    SCREEN_TIME_HIGH_HOURS,
    SLEEP_LOW_HOURS,
    SLEEP_OPTIMAL_RANGE,
    STREAK_CHAMPION_DAYS,
    STREAK_MOMENTUM_DAYS,
    WATER_LOW_GLASSES,
)
from models import Correlation, DailyLogEntry, Insight
from analytics.correlation import find_correlations
from analytics.statistics import calculate_mean, recent_entries
from analytics.streaks import calculate_streak

log = logging.getLogger("analytics")

WELCOME_INSIGHT = Insight(
    id="welcome",
    title="Welcome to Your Wellness Journey",
    description=(
        "Start logging your daily habits to unlock personalized insights "
        "and track your progress."
    ),
    severity="info",
)


@dataclass(frozen=True)
class InsightContext:
    """Metrics derived once and shared by every rule."""

    recent: Sequence[DailyLogEntry]
    streak: int
    avg_sleep: float
    avg_water: float
    avg_screen: float
    avg_mood: float
    mood_trend: float
    correlations: Sequence[Correlation] = field(default_factory=tuple)

    @classmethod
    def from_entries(cls, entries: Sequence[DailyLogEntry]) -> "InsightContext":
        recent = recent_entries(entries, RECENT_WINDOW)
        moods = [e.mood for e in recent]
        trend = float(moods[-1] - moods[0]) if len(moods) >= MIN_LOGS_FOR_ANALYSIS else 0.0
        return cls(
            recent=tuple(recent),
            streak=calculate_streak(entries),
            avg_sleep=calculate_mean(e.sleep_hours for e in recent),
            avg_water=calculate_mean(e.water_intake for e in recent),
            avg_screen=calculate_mean(e.screen_time for e in recent),
            avg_mood=calculate_mean(moods),
            mood_trend=trend,
            correlations=tuple(find_correlations(recent)),
        )


Rule = Callable[[InsightContext], Optional[Insight]]


def streak_rule(ctx: InsightContext) -> Optional[Insight]:
    badge = f"{ctx.streak} Day Streak"
    if ctx.streak >= STREAK_CHAMPION_DAYS:
        return Insight(
            id="streak-champion",
            title="🔥 Consistency Champion",
            description=(
                f"Amazing! You've maintained a {ctx.streak}-day logging streak. "
                "Your dedication is building lasting habits."
            ),
            severity="positive",
            badge=badge,
        )
    if ctx.streak >= STREAK_MOMENTUM_DAYS:
        return Insight(
            id="building-momentum",
            title="💪 Building Momentum",
            description=(
                f"{ctx.streak} days in a row! Keep it up - consistency is the key "
                "to meaningful change."
            ),
            severity="positive",
            badge=badge,
        )
    return None


def sleep_rule(ctx: InsightContext) -> Optional[Insight]:
    low, high = SLEEP_OPTIMAL_RANGE
    if ctx.avg_sleep < SLEEP_LOW_HOURS:
        return Insight(
            id="sleep-warning",
            title="😴 Sleep Attention Needed",
            description=(
                f"Your average sleep is {ctx.avg_sleep:.1f} hours. "
                "Aim for 7-9 hours to improve mood and performance."
            ),
            severity="warning",
        )
    if low <= ctx.avg_sleep <= high:
        return Insight(
            id="sleep-optimal",
            title="✨ Excellent Sleep Pattern",
            description=(
                f"Your {ctx.avg_sleep:.1f} hour average is in the optimal range. "
                "Quality rest fuels your success!"
            ),
            severity="positive",
        )
    return None


def exercise_mood_rule(ctx: InsightContext) -> Optional[Insight]:
    link = next((c for c in ctx.correlations if c.involves("Mood", "Exercise")), None)
    if link is None or link.coefficient <= EXERCISE_MOOD_MIN_R:
        return None
    return Insight(
        id="exercise-mood-link",
        title="🏃 Movement = Happiness",
        description=(
            "Your data shows exercise strongly boosts your mood. "
            "Keep moving to keep smiling!"
        ),
        severity="positive",
    )


def hydration_rule(ctx: InsightContext) -> Optional[Insight]:
    if ctx.avg_water >= WATER_LOW_GLASSES:
        return None
    return Insight(
        id="hydration-reminder",
        title="💧 Hydration Matters",
        description=(
            f"You're averaging {ctx.avg_water:.1f} glasses daily. "
            "Try reaching 8 glasses for better energy."
        ),
        severity="info",
    )


def study_rule(ctx: InsightContext) -> Optional[Insight]:
    if not ctx.recent or not all(e.study_hours > 0 for e in ctx.recent):
        return None
    return Insight(
        id="study-consistent",
        title="📚 Learning Champion",
        description=(
            "You studied every day this week! Your consistent effort will "
            "compound into mastery."
        ),
        severity="positive",
    )


def screen_time_rule(ctx: InsightContext) -> Optional[Insight]:
    if ctx.avg_screen <= SCREEN_TIME_HIGH_HOURS:
        return None
    return Insight(
        id="screen-time-high",
        title="📱 Digital Balance Check",
        description=(
            f"{ctx.avg_screen:.1f} hours average screen time. "
            "Consider mindful breaks for better wellbeing."
        ),
        severity="warning",
    )


def mood_rule(ctx: InsightContext) -> Optional[Insight]:
    if ctx.avg_mood >= MOOD_THRIVING:
        return Insight(
            id="wellness-excellent",
            title="🌟 Thriving State",
            description=(
                f"Your average mood score of {ctx.avg_mood:.1f}/10 indicates "
                "excellent wellbeing. You're doing great!"
            ),
            severity="positive",
        )
    if ctx.mood_trend > MOOD_TREND_MIN_DELTA:
        return Insight(
            id="mood-improving",
            title="📈 Positive Trajectory",
            description="Your mood has been improving! Your healthy habits are paying off.",
            severity="positive",
        )
    return None


INSIGHT_RULES: Sequence[Rule] = (
    streak_rule,
    sleep_rule,
    exercise_mood_rule,
    hydration_rule,
    study_rule,
    screen_time_rule,
    mood_rule,
)


def generate_insights(
    entries: Iterable[DailyLogEntry],
    rules: Sequence[Rule] = INSIGHT_RULES,
) -> List[Insight]:
    entries = list(entries)
    if len(entries) < MIN_LOGS_FOR_ANALYSIS:
        return [WELCOME_INSIGHT]

    ctx = InsightContext.from_entries(entries)
    insights: List[Insight] = []
    for rule in rules:
        insight = rule(ctx)
        if insight is not None:
            insights.append(insight)
    log.debug("generate_insights: %d insights from %d logs (streak=%d)",
              len(insights), len(entries), ctx.streak)
    return insights
