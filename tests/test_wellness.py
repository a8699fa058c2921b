"""Tests for the weighted wellness score."""
import pytest

from constants import WELLNESS_FACTORS
from analytics.wellness import calculate_wellness_score, wellness_breakdown

ON_TARGET = dict(
    sleep_hours=8, mood=10, exercise_minutes=30,
    water_intake=8, meal_quality=10, study_hours=4,
)


class TestWellnessScore:

    def test_empty_is_zero(self):
        assert calculate_wellness_score([]) == 0

    def test_weights_sum_to_hundred(self):
        assert sum(f.weight for f in WELLNESS_FACTORS) == 100

    def test_all_targets_hit_is_hundred(self, consecutive_days):
        assert calculate_wellness_score(consecutive_days(7, **ON_TARGET)) == 100

    def test_exceeding_targets_is_capped(self, consecutive_days):
        over = {k: v * 3 for k, v in ON_TARGET.items()}
        assert calculate_wellness_score(consecutive_days(7, **over)) == 100

    def test_all_zero_is_zero(self, consecutive_days):
        zeros = {k: 0 for k in ON_TARGET}
        assert calculate_wellness_score(consecutive_days(3, **zeros)) == 0

    def test_half_of_every_target(self, consecutive_days):
        half = {k: v / 2 for k, v in ON_TARGET.items()}
        assert calculate_wellness_score(consecutive_days(7, **half)) == 50

    def test_meal_quality_scale_caps_at_half_weight(self, consecutive_days):
        entries = consecutive_days(7, **dict(ON_TARGET, meal_quality=5))
        # 1-5 scale scored against 10 → 7.5 of 15 points
        assert calculate_wellness_score(entries) == 93

    def test_only_recent_week_counts(self, make_entry):
        recent = [make_entry(i, **ON_TARGET) for i in range(7)]
        old = [make_entry(30 + i, **{k: 0 for k in ON_TARGET}) for i in range(10)]
        assert calculate_wellness_score(old + recent) == 100

    def test_within_bounds(self, make_entry):
        entries = [make_entry(i, sleep_hours=5 + i, mood=3 + i, exercise_minutes=5 * i) for i in range(5)]
        assert 0 <= calculate_wellness_score(entries) <= 100


class TestWellnessBreakdown:

    def test_rows_follow_factor_table(self, consecutive_days):
        rows = wellness_breakdown(consecutive_days(7, **ON_TARGET))
        assert [r["factor"] for r in rows] == [f.label for f in WELLNESS_FACTORS]
        assert sum(r["contribution"] for r in rows) == pytest.approx(100)

    def test_contribution_formula(self, consecutive_days):
        rows = wellness_breakdown(consecutive_days(4, sleep_hours=6))
        sleep = next(r for r in rows if r["factor"] == "Sleep")
        assert sleep["mean"] == pytest.approx(6)
        assert sleep["contribution"] == pytest.approx(6 / 8 * 20)
