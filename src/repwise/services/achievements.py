"""Achievement evaluation over the progress snapshot."""

from dataclasses import dataclass
from datetime import datetime

from ..models.progress import ProgressState
from .streaks import StreakTracker


@dataclass(frozen=True)
class Achievement:
    """Display metadata for an achievement id."""

    id: str
    title: str
    message: str
    icon: str


ACHIEVEMENTS: dict[str, Achievement] = {
    a.id: a
    for a in [
        Achievement("streak_3", "3-Day Streak Starter", "3-Day Streak Starter!", "🔥"),
        Achievement("streak_5", "5-Day Streak Champion", "5-Day Streak Champion!", "🔥"),
        Achievement("streak_7_plus", "Weekly Streak Legend", "Weekly Streak Legend!", "🔥"),
        Achievement("weekly_target_met", "Weekly Target", "Weekly Target Achieved!", "🎯"),
        Achievement("workouts_10", "First 10 Workouts", "First 10 Workouts Complete!", "💪"),
        Achievement("workouts_25", "25 Workouts", "25 Workout Milestone!", "💪"),
        Achievement("workouts_50", "50 Workouts", "50 Workout Champion!", "💪"),
        Achievement("workouts_100", "Century Club", "Century Club Member!", "💪"),
    ]
}

# (lower bound inclusive, upper bound exclusive or None, id), checked top down
STREAK_BUCKETS = [
    (7, None, "streak_7_plus"),
    (5, 7, "streak_5"),
    (3, 5, "streak_3"),
]

WORKOUT_MILESTONES = {
    10: "workouts_10",
    25: "workouts_25",
    50: "workouts_50",
    100: "workouts_100",
}


def streak_achievement(streak: int) -> str | None:
    """The single streak bucket a streak falls into, if any."""
    for lower, upper, achievement_id in STREAK_BUCKETS:
        if streak >= lower and (upper is None or streak < upper):
            return achievement_id
    return None


class AchievementEvaluator:
    """Derives achievement ids from a progress snapshot.

    The evaluator is stateless and does not remember what was already
    shown; whoever displays the results dedupes by id.
    """

    def __init__(self, streaks: StreakTracker | None = None):
        self.streaks = streaks or StreakTracker()

    def evaluate(self, progress: ProgressState, now: datetime | None = None) -> list[str]:
        """List the achievement ids the snapshot currently satisfies.

        Args:
            progress: Snapshot to evaluate
            now: If given, a streak that is already broken as of now is
                treated as 0. Otherwise the stored streak is used.
        """
        achievements = []

        streak = progress.streak_days
        if now is not None:
            streak = self.streaks.effective_streak(progress, now)

        streak_id = streak_achievement(streak)
        if streak_id:
            achievements.append(streak_id)

        if progress.weekly_progress.completed >= progress.weekly_progress.target:
            achievements.append("weekly_target_met")

        # Exact match only: a count that skips past a milestone never earns it
        milestone = WORKOUT_MILESTONES.get(progress.total_workouts)
        if milestone:
            achievements.append(milestone)

        return achievements
