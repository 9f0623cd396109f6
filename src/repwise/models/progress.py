"""Progress state model: the aggregate root persisted per user."""

from collections import deque
from dataclasses import dataclass, field
from datetime import date

from .feedback import WorkoutFeedbackEntry

DEFAULT_HISTORY_CAP = 100
DEFAULT_WEEKLY_TARGET = 4
DEFAULT_MONTHLY_TARGET = 16
DEFAULT_REPS = 10
DEFAULT_WEIGHT = 0


@dataclass
class PeriodProgress:
    """Completed workouts in a period against a goal."""

    completed: int = 0
    target: int = DEFAULT_WEEKLY_TARGET

    def to_dict(self) -> dict:
        return {"completed": self.completed, "target": self.target}

    @classmethod
    def from_dict(cls, data: dict, default_target: int) -> "PeriodProgress":
        return cls(
            completed=data.get("completed", 0),
            target=data.get("target", default_target),
        )


@dataclass
class ExerciseAdaptation:
    """Recommended load for one exercise.

    progression is a signed running total of the adjustments applied so
    far; it is a trend indicator and is never clamped.
    """

    current_reps: int = DEFAULT_REPS
    current_weight: float = DEFAULT_WEIGHT
    progression: float = 0.0

    def to_dict(self) -> dict:
        return {
            "currentReps": self.current_reps,
            "currentWeight": self.current_weight,
            "progression": self.progression,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseAdaptation":
        return cls(
            current_reps=data.get("currentReps", DEFAULT_REPS),
            current_weight=data.get("currentWeight", DEFAULT_WEIGHT),
            progression=data.get("progression", 0.0),
        )


@dataclass
class StreakSnapshot:
    """Point-in-time streak status. Derived, never persisted."""

    current_streak: int
    is_on_streak: bool
    days_until_break: int
    motivational_message: str

    def to_dict(self) -> dict:
        return {
            "current_streak": self.current_streak,
            "is_on_streak": self.is_on_streak,
            "days_until_break": self.days_until_break,
            "motivational_message": self.motivational_message,
        }


@dataclass(frozen=True)
class StreakRecord:
    """Read-only streak summary in the shape older clients expect."""

    current_streak: int
    longest_streak: int
    last_workout_date: date | None
    streak_start_date: date | None
    weekly_streak_goal: int
    monthly_streak_goal: int

    def to_dict(self) -> dict:
        return {
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "lastWorkoutDate": (
                self.last_workout_date.isoformat() if self.last_workout_date else None
            ),
            "streakStartDate": (
                self.streak_start_date.isoformat() if self.streak_start_date else None
            ),
            "weeklyStreakGoal": self.weekly_streak_goal,
            "monthlyStreakGoal": self.monthly_streak_goal,
        }


def new_history(cap: int = DEFAULT_HISTORY_CAP, entries=()) -> deque:
    """Create a bounded newest-first feedback history.

    Entries are added with appendleft, so once the deque is full the
    oldest entry (rightmost) is dropped.
    """
    return deque(entries, maxlen=cap)


@dataclass
class ProgressState:
    """Everything the engine knows about one user's training progress.

    Created with defaults on first load and mutated only by the engine.
    streak_days is the single source of truth for the streak; the legacy
    streak shape is available through streak_record().
    """

    history: deque = field(default_factory=new_history)
    streak_days: int = 0
    last_workout_date: date | None = None
    streak_start_date: date | None = None
    longest_streak: int = 0
    total_workouts: int = 0
    weekly_progress: PeriodProgress = field(
        default_factory=lambda: PeriodProgress(target=DEFAULT_WEEKLY_TARGET)
    )
    monthly_progress: PeriodProgress = field(
        default_factory=lambda: PeriodProgress(target=DEFAULT_MONTHLY_TARGET)
    )
    adaptations: dict[str, ExerciseAdaptation] = field(default_factory=dict)

    @classmethod
    def initial(
        cls,
        history_cap: int = DEFAULT_HISTORY_CAP,
        weekly_target: int = DEFAULT_WEEKLY_TARGET,
        monthly_target: int = DEFAULT_MONTHLY_TARGET,
    ) -> "ProgressState":
        """Create a fresh state for a user with no recorded workouts."""
        return cls(
            history=new_history(history_cap),
            weekly_progress=PeriodProgress(target=weekly_target),
            monthly_progress=PeriodProgress(target=monthly_target),
        )

    @property
    def history_cap(self) -> int:
        return self.history.maxlen

    def streak_record(self) -> StreakRecord:
        """Project the streak fields into the legacy streak record shape."""
        return StreakRecord(
            current_streak=self.streak_days,
            longest_streak=self.longest_streak,
            last_workout_date=self.last_workout_date,
            streak_start_date=self.streak_start_date,
            weekly_streak_goal=self.weekly_progress.target,
            monthly_streak_goal=self.monthly_progress.target,
        )

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary for storage."""
        return {
            "workoutHistory": [entry.to_dict() for entry in self.history],
            "historyCap": self.history.maxlen,
            "streakDays": self.streak_days,
            "lastWorkoutDate": (
                self.last_workout_date.isoformat() if self.last_workout_date else None
            ),
            "streakStartDate": (
                self.streak_start_date.isoformat() if self.streak_start_date else None
            ),
            "longestStreak": self.longest_streak,
            "totalWorkouts": self.total_workouts,
            "weeklyProgress": self.weekly_progress.to_dict(),
            "monthlyProgress": self.monthly_progress.to_dict(),
            "adaptations": {
                exercise_id: adaptation.to_dict()
                for exercise_id, adaptation in self.adaptations.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProgressState":
        """Create from dictionary."""
        cap = data.get("historyCap") or DEFAULT_HISTORY_CAP
        entries = [WorkoutFeedbackEntry.from_dict(e) for e in data.get("workoutHistory", [])]

        last_workout_date = None
        if data.get("lastWorkoutDate"):
            # Older records stored a full timestamp here
            last_workout_date = date.fromisoformat(data["lastWorkoutDate"][:10])

        streak_start_date = None
        if data.get("streakStartDate"):
            streak_start_date = date.fromisoformat(data["streakStartDate"][:10])

        streak_days = data.get("streakDays", 0)

        return cls(
            history=new_history(cap, entries[:cap]),
            streak_days=streak_days,
            last_workout_date=last_workout_date,
            streak_start_date=streak_start_date,
            longest_streak=max(data.get("longestStreak", 0), streak_days),
            total_workouts=data.get("totalWorkouts", len(entries)),
            weekly_progress=PeriodProgress.from_dict(
                data.get("weeklyProgress", {}), DEFAULT_WEEKLY_TARGET
            ),
            monthly_progress=PeriodProgress.from_dict(
                data.get("monthlyProgress", {}), DEFAULT_MONTHLY_TARGET
            ),
            adaptations={
                exercise_id: ExerciseAdaptation.from_dict(adaptation)
                for exercise_id, adaptation in data.get("adaptations", {}).items()
            },
        )
