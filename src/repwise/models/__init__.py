"""Data models for repwise."""

from .feedback import Difficulty, WorkoutFeedbackEntry
from .notifications import (
    Notification,
    NotificationPreferences,
    NotificationState,
    NotificationType,
)
from .progress import (
    ExerciseAdaptation,
    PeriodProgress,
    ProgressState,
    StreakRecord,
    StreakSnapshot,
)

__all__ = [
    "Difficulty",
    "ExerciseAdaptation",
    "Notification",
    "NotificationPreferences",
    "NotificationState",
    "NotificationType",
    "PeriodProgress",
    "ProgressState",
    "StreakRecord",
    "StreakSnapshot",
    "WorkoutFeedbackEntry",
]
