"""Tests for the bounded feedback log."""

from datetime import datetime, timedelta

import pytest

from repwise.exceptions import ValidationError
from repwise.models.progress import ProgressState
from repwise.services.feedback_log import WorkoutFeedbackLog


@pytest.fixture
def feedback_log():
    return WorkoutFeedbackLog()


class TestRecord:
    """Tests for WorkoutFeedbackLog.record."""

    def test_returns_updated_progress(self, feedback_log, progress, make_entry):
        """Test that record returns the progress it appended to."""
        entry = make_entry("2024-01-01T08:00:00")

        result = feedback_log.record(progress, entry)

        assert result is progress
        assert result.history[0] == entry
        assert result.total_workouts == 1

    def test_accepts_mapping(self, feedback_log, progress):
        """Test that raw dictionaries are validated into entries."""
        feedback_log.record(
            progress,
            {"workoutId": "w1", "difficulty": "too-hard", "timestamp": "2024-01-01T08:00:00"},
        )
        assert progress.history[0].workout_id == "w1"

    def test_rejected_entry_changes_nothing(self, feedback_log, progress):
        """Test that validation happens before any mutation."""
        with pytest.raises(ValidationError):
            feedback_log.record(
                progress,
                {"workoutId": "w1", "difficulty": "hard", "timestamp": "2024-01-01T08:00:00"},
            )

        assert len(progress.history) == 0
        assert progress.total_workouts == 0

    def test_evicts_oldest_at_cap(self, feedback_log, make_entry):
        """Test that a full history drops its oldest entry."""
        progress = ProgressState.initial(history_cap=2)
        start = datetime(2024, 1, 1, 8, 0)
        for i in range(3):
            feedback_log.record(progress, make_entry(start + timedelta(days=i)))

        assert [e.timestamp.day for e in progress.history] == [3, 2]
        assert progress.total_workouts == 3


class TestRecent:
    """Tests for WorkoutFeedbackLog.recent."""

    def test_newest_first_with_limit(self, feedback_log, progress, make_entry):
        """Test ordering and limit."""
        start = datetime(2024, 1, 1, 8, 0)
        for i in range(5):
            feedback_log.record(progress, make_entry(start + timedelta(days=i)))

        recent = feedback_log.recent(progress, 2)

        assert [e.timestamp.day for e in recent] == [5, 4]

    def test_non_positive_limit(self, feedback_log, progress, make_entry):
        """Test that a zero limit returns nothing."""
        feedback_log.record(progress, make_entry("2024-01-01T08:00:00"))
        assert feedback_log.recent(progress, 0) == []
