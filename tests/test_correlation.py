"""
Tests for the correlation engine.

Covers: Pearson guards (length, empty, constant), symmetry, self-correlation,
strength buckets, the |r| >= 0.3 filter, magnitude ordering with stable ties,
and the full matrix used by the heatmap.
"""
import pytest

from constants import DIMENSIONS
from analytics.correlation import (
    correlation_matrix,
    correlation_strength,
    find_correlations,
    pearson_correlation,
)


# ─── pearson_correlation ─────────────────────────────────────


class TestPearson:

    def test_perfect_positive(self):
        assert pearson_correlation([1, 2, 3, 4], [2, 4, 6, 8]) == pytest.approx(1.0)

    def test_perfect_negative(self):
        assert pearson_correlation([1, 2, 3], [9, 6, 3]) == pytest.approx(-1.0)

    def test_known_value(self):
        # x̄=3, ȳ=4; Σdxdy=6, Σdx²=10, Σdy²=6 → 6/√60
        r = pearson_correlation([1, 2, 3, 4, 5], [2, 4, 5, 4, 5])
        assert r == pytest.approx(6 / 60 ** 0.5)

    def test_symmetric(self):
        x = [3, 1, 4, 1, 5, 9]
        y = [2, 7, 1, 8, 2, 8]
        assert pearson_correlation(x, y) == pytest.approx(pearson_correlation(y, x))

    def test_self_correlation_is_one(self):
        x = [0.3, 1.7, 2.2, 9.1]
        assert pearson_correlation(x, x) == pytest.approx(1.0)

    @pytest.mark.parametrize("constant", [[5, 5, 5, 5], [0.1, 0.1, 0.1, 0.1]])
    def test_constant_series_is_zero(self, constant):
        assert pearson_correlation(constant, [1, 2, 3, 4]) == 0.0
        assert pearson_correlation([1, 2, 3, 4], constant) == 0.0

    def test_mismatched_length_is_zero(self):
        assert pearson_correlation([1, 2, 3], [1, 2]) == 0.0

    def test_empty_is_zero(self):
        assert pearson_correlation([], []) == 0.0

    def test_within_unit_interval(self):
        r = pearson_correlation([1e-9, 2e-9, 3e-9], [1e9, 2e9, 3e9])
        assert -1.0 <= r <= 1.0


# ─── correlation_strength ────────────────────────────────────


class TestStrength:

    @pytest.mark.parametrize("r,label", [
        (0.7, "Strong"), (-0.95, "Strong"),
        (0.4, "Moderate"), (-0.69, "Moderate"),
        (0.2, "Weak"), (-0.39, "Weak"),
        (0.19, "Very Weak"), (0.0, "Very Weak"),
    ])
    def test_buckets(self, r, label):
        assert correlation_strength(r) == label


# ─── find_correlations ───────────────────────────────────────


class TestFindCorrelations:

    def test_fewer_than_three_logs_is_empty(self, make_entry):
        entries = [make_entry(0, mood=2, exercise_minutes=10), make_entry(1, mood=9, exercise_minutes=60)]
        assert find_correlations(entries) == []

    def test_single_pair_detected(self, make_entry):
        entries = [
            make_entry(0, mood=4, exercise_minutes=10),
            make_entry(1, mood=6, exercise_minutes=30),
            make_entry(2, mood=8, exercise_minutes=50),
        ]
        found = find_correlations(entries)
        assert len(found) == 1
        corr = found[0]
        assert (corr.dimension_a, corr.dimension_b) == ("Mood", "Exercise")
        assert corr.coefficient == pytest.approx(1.0)
        assert corr.strength == "Strong"

    def test_negative_relationship_kept(self, make_entry):
        entries = [
            make_entry(0, mood=4, screen_time=8),
            make_entry(1, mood=6, screen_time=6),
            make_entry(2, mood=8, screen_time=4),
        ]
        found = find_correlations(entries)
        assert [(c.dimension_a, c.dimension_b) for c in found] == [("Mood", "Screen Time")]
        assert found[0].coefficient == pytest.approx(-1.0)

    def test_constant_dimensions_never_reported(self, consecutive_days):
        assert find_correlations(consecutive_days(10)) == []

    def test_ties_keep_enumeration_order(self, make_entry):
        entries = [
            make_entry(0, mood=4, sleep_hours=5, exercise_minutes=10),
            make_entry(1, mood=6, sleep_hours=6, exercise_minutes=30),
            make_entry(2, mood=8, sleep_hours=7, exercise_minutes=50),
        ]
        pairs = [(c.dimension_a, c.dimension_b) for c in find_correlations(entries)]
        assert pairs == [("Mood", "Sleep"), ("Mood", "Exercise"), ("Sleep", "Exercise")]

    def test_filtered_and_sorted_by_magnitude(self, make_entry):
        moods = [3, 7, 5, 8, 2, 6, 9, 4]
        sleep = [5, 8, 6, 7, 6, 6, 8, 7]
        exercise = [0, 45, 20, 30, 10, 0, 60, 25]
        screen = [9, 3, 6, 4, 8, 2, 5, 7]
        water = [4, 8, 6, 9, 5, 7, 8, 6]
        study = [1, 0, 2, 3, 0, 1, 2, 1]
        entries = [
            make_entry(i, mood=m, sleep_hours=s, exercise_minutes=e,
                       screen_time=sc, water_intake=w, study_hours=st)
            for i, (m, s, e, sc, w, st) in enumerate(zip(moods, sleep, exercise, screen, water, study))
        ]
        found = find_correlations(entries)
        assert found
        magnitudes = [abs(c.coefficient) for c in found]
        assert all(m >= 0.3 for m in magnitudes)
        assert magnitudes == sorted(magnitudes, reverse=True)
        for c in found:
            assert c.strength == correlation_strength(c.coefficient)

    def test_order_of_input_does_not_change_result(self, make_entry):
        entries = [
            make_entry(0, mood=4, exercise_minutes=15),
            make_entry(1, mood=7, exercise_minutes=40),
            make_entry(2, mood=5, exercise_minutes=20),
            make_entry(3, mood=9, exercise_minutes=35),
        ]
        forward = find_correlations(entries)
        backward = find_correlations(list(reversed(entries)))
        assert [c.dimension_a for c in forward] == [c.dimension_a for c in backward]
        assert [c.coefficient for c in forward] == pytest.approx([c.coefficient for c in backward])

    def test_idempotent(self, make_entry):
        entries = [make_entry(i, mood=m, exercise_minutes=10 * m) for i, m in enumerate([3, 5, 8, 6])]
        assert find_correlations(entries) == find_correlations(entries)


# ─── correlation_matrix ──────────────────────────────────────


class TestCorrelationMatrix:

    def test_square_and_symmetric(self, make_entry):
        entries = [make_entry(i, mood=m, exercise_minutes=e)
                   for i, (m, e) in enumerate([(3, 10), (6, 25), (8, 50), (5, 20)])]
        matrix = correlation_matrix(entries)
        labels = [d.label for d in DIMENSIONS]
        assert list(matrix) == labels
        for a in labels:
            assert set(matrix[a]) == set(labels)
            for b in labels:
                assert matrix[a][b] == matrix[b][a]

    def test_diagonal(self, make_entry):
        entries = [make_entry(i, mood=m) for i, m in enumerate([3, 6, 8])]
        matrix = correlation_matrix(entries)
        assert matrix["Mood"]["Mood"] == pytest.approx(1.0)
        # constant dimension
        assert matrix["Sleep"]["Sleep"] == 0.0
