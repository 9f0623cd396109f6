"""Workout feedback model."""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from ..exceptions import ValidationError
from ..utils.dates import parse_timestamp, to_local


class Difficulty(str, Enum):
    """How a workout felt to the user."""

    TOO_EASY = "too-easy"
    PERFECT = "perfect"
    TOO_HARD = "too-hard"


# Numeric fields: attribute name -> serialized key
NUMERIC_FIELDS = {
    "completed_reps": "completedReps",
    "target_reps": "targetReps",
    "weight_used": "weightUsed",
    "target_weight": "targetWeight",
}


def validate_number(name: str, value: Any) -> float | int:
    """Check that a provided numeric field is finite and non-negative."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number", field=name, value=value)
    try:
        finite = math.isfinite(value)
    except OverflowError as e:
        # Ints beyond float range; repr() of such values can itself fail
        raise ValidationError(f"{name} must be finite", field=name) from e
    if not finite:
        raise ValidationError(f"{name} must be finite", field=name, value=value)
    if value < 0:
        raise ValidationError(f"{name} must not be negative", field=name, value=value)
    return value


@dataclass(frozen=True)
class WorkoutFeedbackEntry:
    """A single piece of post-workout feedback.

    Entries are immutable once recorded. Timestamps are kept as naive
    local datetimes.
    """

    workout_id: str
    difficulty: Difficulty
    timestamp: datetime
    feedback_text: str | None = None
    completed_reps: int | None = None
    target_reps: int | None = None
    weight_used: float | None = None
    target_weight: float | None = None
    exercise_id: str | None = None

    def __post_init__(self) -> None:
        if not self.workout_id:
            raise ValidationError("workout_id is required", field="workout_id")
        if not isinstance(self.difficulty, Difficulty):
            try:
                object.__setattr__(self, "difficulty", Difficulty(self.difficulty))
            except ValueError as e:
                raise ValidationError(
                    "difficulty must be one of: too-easy, perfect, too-hard",
                    field="difficulty",
                    value=self.difficulty,
                ) from e
        if not isinstance(self.timestamp, datetime):
            raise ValidationError("timestamp is required", field="timestamp")
        object.__setattr__(self, "timestamp", to_local(self.timestamp))
        for name in NUMERIC_FIELDS:
            value = getattr(self, name)
            if value is not None:
                validate_number(name, value)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        data = {
            "workoutId": self.workout_id,
            "difficulty": self.difficulty.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.feedback_text is not None:
            data["feedback"] = self.feedback_text
        for name, key in NUMERIC_FIELDS.items():
            value = getattr(self, name)
            if value is not None:
                data[key] = value
        if self.exercise_id is not None:
            data["exerciseId"] = self.exercise_id
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutFeedbackEntry":
        """Create from a dictionary.

        Accepts the camelCase keys used in storage as well as snake_case.
        Raises ValidationError for anything malformed.
        """

        def pick(snake: str, camel: str):
            if snake in data:
                return data[snake]
            return data.get(camel)

        raw_timestamp = data.get("timestamp")
        if raw_timestamp is None or raw_timestamp == "":
            raise ValidationError("timestamp is required", field="timestamp")
        try:
            timestamp = parse_timestamp(raw_timestamp)
        except (TypeError, ValueError, AttributeError) as e:
            raise ValidationError(
                f"timestamp is not a valid ISO-8601 datetime: {e}",
                field="timestamp",
                value=raw_timestamp,
            ) from e

        raw_difficulty = data.get("difficulty")
        try:
            difficulty = Difficulty(raw_difficulty)
        except ValueError as e:
            raise ValidationError(
                "difficulty must be one of: too-easy, perfect, too-hard",
                field="difficulty",
                value=raw_difficulty,
            ) from e

        workout_id = pick("workout_id", "workoutId")
        feedback_text = data.get("feedback_text", data.get("feedback"))
        exercise_id = pick("exercise_id", "exerciseId")

        return cls(
            workout_id=str(workout_id) if workout_id is not None else "",
            difficulty=difficulty,
            timestamp=timestamp,
            feedback_text=feedback_text or None,
            completed_reps=pick("completed_reps", "completedReps"),
            target_reps=pick("target_reps", "targetReps"),
            weight_used=pick("weight_used", "weightUsed"),
            target_weight=pick("target_weight", "targetWeight"),
            exercise_id=str(exercise_id) if exercise_id else None,
        )
