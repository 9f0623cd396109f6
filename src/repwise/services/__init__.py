"""Progress engine services."""

from .achievements import ACHIEVEMENTS, AchievementEvaluator
from .adaptation import AdaptiveDifficultyEngine
from .engine import ProgressEngine
from .feedback_log import WorkoutFeedbackLog
from .notifications import NotificationDispatcher
from .periods import PeriodAggregator
from .streaks import STREAK_BADGES, StreakTracker

__all__ = [
    "ACHIEVEMENTS",
    "AchievementEvaluator",
    "AdaptiveDifficultyEngine",
    "NotificationDispatcher",
    "PeriodAggregator",
    "ProgressEngine",
    "STREAK_BADGES",
    "StreakTracker",
    "WorkoutFeedbackLog",
]
