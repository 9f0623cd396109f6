"""Tests for achievement evaluation."""

from datetime import date, datetime

import pytest

from repwise.services.achievements import ACHIEVEMENTS, AchievementEvaluator, streak_achievement


@pytest.fixture
def evaluator():
    return AchievementEvaluator()


class TestStreakBuckets:
    """Tests for the mutually exclusive streak achievements."""

    @pytest.mark.parametrize(
        "streak,expected",
        [
            (0, None),
            (2, None),
            (3, "streak_3"),
            (4, "streak_3"),
            (5, "streak_5"),
            (6, "streak_5"),
            (7, "streak_7_plus"),
            (30, "streak_7_plus"),
        ],
    )
    def test_bucket(self, streak, expected):
        """Test the bucket each streak length falls into."""
        assert streak_achievement(streak) == expected

    def test_at_most_one_streak_achievement(self, evaluator, progress):
        """Test that streak achievements never stack."""
        for streak in range(0, 20):
            progress.streak_days = streak
            ids = [a for a in evaluator.evaluate(progress) if a.startswith("streak_")]
            assert len(ids) <= 1


class TestEvaluate:
    """Tests for AchievementEvaluator.evaluate."""

    def test_empty_progress(self, evaluator, progress):
        """Test that a new user has nothing unlocked."""
        assert evaluator.evaluate(progress) == []

    @pytest.mark.parametrize(
        "total,expected",
        [(10, "workouts_10"), (25, "workouts_25"), (50, "workouts_50"), (100, "workouts_100")],
    )
    def test_workout_milestones(self, evaluator, progress, total, expected):
        """Test milestones at exactly 10, 25, 50 and 100 workouts."""
        progress.total_workouts = total
        assert expected in evaluator.evaluate(progress)

    @pytest.mark.parametrize("total", [9, 11, 24, 26, 99, 101])
    def test_workout_milestones_exact_only(self, evaluator, progress, total):
        """Test that nearby totals earn no milestone."""
        progress.total_workouts = total
        assert not any(a.startswith("workouts_") for a in evaluator.evaluate(progress))

    def test_weekly_target(self, evaluator, progress):
        """Test the weekly target achievement."""
        progress.weekly_progress.completed = 3
        assert "weekly_target_met" not in evaluator.evaluate(progress)

        progress.weekly_progress.completed = 4
        assert "weekly_target_met" in evaluator.evaluate(progress)

    def test_combined(self, evaluator, progress):
        """Test that independent achievements are reported together."""
        progress.streak_days = 5
        progress.weekly_progress.completed = 5
        progress.total_workouts = 25

        assert evaluator.evaluate(progress) == ["streak_5", "weekly_target_met", "workouts_25"]

    def test_broken_streak_with_now(self, evaluator, progress):
        """Test that a lapsed streak earns nothing when now is given."""
        progress.streak_days = 3
        progress.last_workout_date = date(2024, 1, 3)

        assert evaluator.evaluate(progress) == ["streak_3"]
        assert evaluator.evaluate(progress, datetime(2024, 1, 4, 12, 0)) == ["streak_3"]
        assert evaluator.evaluate(progress, datetime(2024, 1, 17, 18, 0)) == []


def test_catalog_covers_every_id():
    """Test that every id the evaluator can produce has display metadata."""
    ids = {"streak_3", "streak_5", "streak_7_plus", "weekly_target_met"}
    ids |= {f"workouts_{n}" for n in (10, 25, 50, 100)}
    assert ids == set(ACHIEVEMENTS)
