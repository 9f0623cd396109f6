"""Tests for data models."""

from datetime import date, datetime, timedelta, timezone

import pytest

from repwise.exceptions import ValidationError
from repwise.models.feedback import Difficulty, WorkoutFeedbackEntry
from repwise.models.notifications import NotificationPreferences, NotificationType
from repwise.models.progress import ExerciseAdaptation, ProgressState


class TestWorkoutFeedbackEntry:
    """Tests for WorkoutFeedbackEntry model."""

    def test_from_dict_camel_case(self):
        """Test deserialization from stored camelCase keys."""
        entry = WorkoutFeedbackEntry.from_dict(
            {
                "workoutId": "w1",
                "difficulty": "too-easy",
                "timestamp": "2024-01-02T10:30:00",
                "feedback": "Felt light",
                "targetReps": 10,
                "targetWeight": 50,
                "exerciseId": "squat",
            }
        )

        assert entry.workout_id == "w1"
        assert entry.difficulty == Difficulty.TOO_EASY
        assert entry.timestamp == datetime(2024, 1, 2, 10, 30)
        assert entry.feedback_text == "Felt light"
        assert entry.target_reps == 10
        assert entry.target_weight == 50
        assert entry.exercise_id == "squat"

    def test_from_dict_snake_case(self):
        """Test deserialization from snake_case keys."""
        entry = WorkoutFeedbackEntry.from_dict(
            {
                "workout_id": "w2",
                "difficulty": "too-hard",
                "timestamp": "2024-01-02T10:30:00",
                "completed_reps": 6,
            }
        )

        assert entry.workout_id == "w2"
        assert entry.difficulty == Difficulty.TOO_HARD
        assert entry.completed_reps == 6
        assert entry.exercise_id is None

    def test_to_dict_round_trip(self):
        """Test serialization keeps every provided field."""
        entry = WorkoutFeedbackEntry(
            workout_id="w3",
            difficulty=Difficulty.PERFECT,
            timestamp=datetime(2024, 1, 3, 8, 0),
            weight_used=42.5,
            exercise_id="bench",
        )
        data = entry.to_dict()

        assert data == {
            "workoutId": "w3",
            "difficulty": "perfect",
            "timestamp": "2024-01-03T08:00:00",
            "weightUsed": 42.5,
            "exerciseId": "bench",
        }
        assert WorkoutFeedbackEntry.from_dict(data) == entry

    def test_string_difficulty_is_coerced(self):
        """Test that a plain string difficulty becomes the enum."""
        entry = WorkoutFeedbackEntry(
            workout_id="w", difficulty="perfect", timestamp=datetime(2024, 1, 1)
        )
        assert entry.difficulty is Difficulty.PERFECT

    def test_aware_timestamp_converted_to_local(self):
        """Test that timezone-aware timestamps become naive local time."""
        aware = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        entry = WorkoutFeedbackEntry(workout_id="w", difficulty="perfect", timestamp=aware)

        assert entry.timestamp.tzinfo is None
        assert entry.timestamp == aware.astimezone().replace(tzinfo=None)

    def test_entry_is_immutable(self):
        """Test that recorded entries cannot be modified."""
        entry = WorkoutFeedbackEntry(
            workout_id="w", difficulty="perfect", timestamp=datetime(2024, 1, 1)
        )
        with pytest.raises(AttributeError):
            entry.difficulty = Difficulty.TOO_HARD

    def test_missing_timestamp_rejected(self):
        """Test that a missing timestamp is a validation error."""
        with pytest.raises(ValidationError) as exc_info:
            WorkoutFeedbackEntry.from_dict({"workoutId": "w", "difficulty": "perfect"})
        assert exc_info.value.field == "timestamp"

    def test_unparseable_timestamp_rejected(self):
        """Test that garbage timestamps are a validation error."""
        with pytest.raises(ValidationError) as exc_info:
            WorkoutFeedbackEntry.from_dict(
                {"workoutId": "w", "difficulty": "perfect", "timestamp": "yesterday"}
            )
        assert exc_info.value.field == "timestamp"

    @pytest.mark.parametrize("difficulty", ["easy", "PERFECT", "", None])
    def test_invalid_difficulty_rejected(self, difficulty):
        """Test that only the three difficulty values are accepted."""
        with pytest.raises(ValidationError) as exc_info:
            WorkoutFeedbackEntry.from_dict(
                {"workoutId": "w", "difficulty": difficulty, "timestamp": "2024-01-01T00:00:00"}
            )
        assert exc_info.value.field == "difficulty"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("targetReps", -1),
            ("targetWeight", float("nan")),
            ("weightUsed", float("inf")),
            ("completedReps", "ten"),
            ("targetReps", True),
            ("targetReps", 10**400),
        ],
    )
    def test_invalid_numbers_rejected(self, field, value):
        """Test that numeric fields must be finite and non-negative."""
        with pytest.raises(ValidationError):
            WorkoutFeedbackEntry.from_dict(
                {
                    "workoutId": "w",
                    "difficulty": "perfect",
                    "timestamp": "2024-01-01T00:00:00",
                    field: value,
                }
            )

    def test_zero_is_a_valid_number(self):
        """Test that zero passes the non-negative check."""
        entry = WorkoutFeedbackEntry.from_dict(
            {
                "workoutId": "w",
                "difficulty": "perfect",
                "timestamp": "2024-01-01T00:00:00",
                "targetWeight": 0,
            }
        )
        assert entry.target_weight == 0

    def test_missing_workout_id_rejected(self):
        """Test that feedback must name its workout."""
        with pytest.raises(ValidationError) as exc_info:
            WorkoutFeedbackEntry.from_dict(
                {"difficulty": "perfect", "timestamp": "2024-01-01T00:00:00"}
            )
        assert exc_info.value.field == "workout_id"


class TestProgressState:
    """Tests for ProgressState model."""

    def test_initial_defaults(self):
        """Test default values for a new user."""
        state = ProgressState.initial()

        assert len(state.history) == 0
        assert state.history_cap == 100
        assert state.streak_days == 0
        assert state.last_workout_date is None
        assert state.total_workouts == 0
        assert state.weekly_progress.target == 4
        assert state.monthly_progress.target == 16
        assert state.adaptations == {}

    def test_round_trip(self, make_entry):
        """Test that to_dict/from_dict reproduce an equal state."""
        state = ProgressState.initial()
        state.history.appendleft(make_entry("2024-01-01T09:00:00", exercise_id="squat"))
        state.history.appendleft(make_entry("2024-01-02T09:00:00", "too-hard"))
        state.streak_days = 2
        state.longest_streak = 5
        state.last_workout_date = date(2024, 1, 2)
        state.streak_start_date = date(2024, 1, 1)
        state.total_workouts = 2
        state.weekly_progress.completed = 2
        state.adaptations["squat"] = ExerciseAdaptation(12, 55, 0.15)

        assert ProgressState.from_dict(state.to_dict()) == state

    def test_from_dict_reads_legacy_timestamp_date(self):
        """Test that a full ISO timestamp in lastWorkoutDate is accepted."""
        state = ProgressState.from_dict(
            {"streakDays": 2, "lastWorkoutDate": "2024-01-02T18:45:00.000Z"}
        )
        assert state.last_workout_date == date(2024, 1, 2)
        assert state.longest_streak == 2

    def test_from_dict_respects_history_cap(self, make_entry):
        """Test that loading never exceeds the stored cap."""
        start = datetime(2024, 1, 1)
        entries = [make_entry(start + timedelta(hours=i)).to_dict() for i in range(5)]
        state = ProgressState.from_dict({"workoutHistory": entries, "historyCap": 3})

        assert len(state.history) == 3
        assert state.history_cap == 3

    def test_streak_record_projection(self):
        """Test the legacy streak record shape."""
        state = ProgressState.initial(weekly_target=3, monthly_target=12)
        state.streak_days = 4
        state.longest_streak = 9
        state.last_workout_date = date(2024, 1, 4)
        state.streak_start_date = date(2024, 1, 1)

        record = state.streak_record().to_dict()

        assert record == {
            "currentStreak": 4,
            "longestStreak": 9,
            "lastWorkoutDate": "2024-01-04",
            "streakStartDate": "2024-01-01",
            "weeklyStreakGoal": 3,
            "monthlyStreakGoal": 12,
        }


class TestNotificationPreferences:
    """Tests for NotificationPreferences model."""

    def test_defaults_allow_everything(self):
        """Test that all categories are enabled by default."""
        prefs = NotificationPreferences()
        assert all(prefs.allows(t) for t in NotificationType)

    def test_update_and_allows(self):
        """Test partial updates gate the matching type."""
        prefs = NotificationPreferences()
        prefs.update(streak_alerts=False)

        assert not prefs.allows(NotificationType.STREAK)
        assert prefs.allows(NotificationType.PROGRESS)

    def test_update_unknown_name(self):
        """Test that unknown preference names are rejected."""
        with pytest.raises(ValueError):
            NotificationPreferences().update(push_everything=True)

    def test_from_dict_ignores_unknown_keys(self):
        """Test deserialization tolerates extra keys."""
        prefs = NotificationPreferences.from_dict({"meal_reminders": False, "legacy": True})
        assert prefs.meal_reminders is False
        assert prefs.hydration_reminders is True
