"""Continuous-day streak tracking."""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime

from ..models.progress import ProgressState, StreakSnapshot
from ..utils.dates import days_between, to_local

logger = logging.getLogger(__name__)

# Days without a workout after which the streak no longer counts as alive
BREAK_AFTER_DAYS = 2

# Streak length at which a same-day workout suggests a rest day
REST_DAY_STREAK = 5

AT_RISK_MESSAGE = "Your streak is at risk! A quick workout today will keep it alive."


@dataclass(frozen=True)
class StreakBadge:
    """A badge for reaching a streak length at least once."""

    name: str
    description: str
    threshold: int


STREAK_BADGES = [
    StreakBadge("Starter", "Complete 3 workouts in a row", 3),
    StreakBadge("Consistent", "Complete 5 workouts in a row", 5),
    StreakBadge("Champion", "Complete 7 workouts in a row", 7),
    StreakBadge("Legend", "Complete 14 workouts in a row", 14),
    StreakBadge("Unstoppable", "Complete 30 workouts in a row", 30),
]


@dataclass(frozen=True)
class BadgeStatus:
    """Whether a badge is earned and how close the current streak is to it."""

    badge: StreakBadge
    earned: bool
    progress: int

    def to_dict(self) -> dict:
        return {
            "name": self.badge.name,
            "description": self.badge.description,
            "threshold": self.badge.threshold,
            "earned": self.earned,
            "progress": self.progress,
        }


def motivational_message(streak: int, is_on_streak: bool) -> str:
    """Pick the message shown next to the streak counter."""
    if not is_on_streak and streak > 0:
        return AT_RISK_MESSAGE

    if streak == 0:
        return "Ready to start a new streak? Every journey begins with a single step!"
    if streak == 1:
        return "Great start! One more day to build momentum."
    if streak == 2:
        return "Two days strong! You're building a habit."
    if streak < 7:
        return f"{streak} days and counting! You're on fire!"
    if streak < 14:
        return f"{streak}-day streak! You're in the zone!"
    return f"{streak} days! You're a fitness legend!"


def is_milestone(streak: int) -> bool:
    """Check whether a streak length deserves a celebration.

    Milestones are 3, 5, 7 and every multiple of 7 after that.
    """
    if streak in (3, 5, 7):
        return True
    return streak > 7 and streak % 7 == 0


class StreakTracker:
    """Maintains the consecutive-day workout streak."""

    def update(self, progress: ProgressState, timestamp: datetime) -> bool:
        """Apply a newly recorded workout to the streak.

        Backdated workouts (earlier than the last workout day) are ignored
        here; they still count for history and adaptations.

        Returns:
            True if the streak fields were considered, False if the
            workout was backdated and ignored
        """
        day = to_local(timestamp).date()

        if progress.last_workout_date is None:
            self._start(progress, day)
        else:
            diff = days_between(progress.last_workout_date, day)
            if diff < 0:
                logger.debug(
                    "Backdated workout on %s (last workout %s), streak unchanged",
                    day,
                    progress.last_workout_date,
                )
                return False
            if diff == 1:
                if progress.streak_days == 0:
                    self._start(progress, day)
                else:
                    progress.streak_days += 1
            elif diff > 1:
                if progress.streak_days > 1:
                    logger.info(
                        "Streak of %d days broken after %d-day gap",
                        progress.streak_days,
                        diff,
                    )
                self._start(progress, day)

        progress.last_workout_date = day
        progress.longest_streak = max(progress.longest_streak, progress.streak_days)
        return True

    def _start(self, progress: ProgressState, day: date) -> None:
        progress.streak_days = 1
        progress.streak_start_date = day

    def days_since_last_workout(self, progress: ProgressState, now: datetime) -> int | None:
        """Whole calendar days since the last workout, or None if there is none."""
        if progress.last_workout_date is None:
            return None
        return max(0, days_between(progress.last_workout_date, to_local(now).date()))

    def status(self, progress: ProgressState, now: datetime) -> StreakSnapshot:
        """Compute the streak status as of now."""
        days_since = self.days_since_last_workout(progress, now)

        is_on_streak = False
        days_until_break = 0
        if days_since is not None:
            is_on_streak = days_since <= 1
            days_until_break = max(0, BREAK_AFTER_DAYS - days_since)

        return StreakSnapshot(
            current_streak=progress.streak_days,
            is_on_streak=is_on_streak,
            days_until_break=days_until_break,
            motivational_message=motivational_message(progress.streak_days, is_on_streak),
        )

    def effective_streak(self, progress: ProgressState, now: datetime) -> int:
        """The stored streak if it is still alive as of now, else 0."""
        days_since = self.days_since_last_workout(progress, now)
        if days_since is None or days_since > 1:
            return 0
        return progress.streak_days

    def needs_rest_day(self, progress: ProgressState, now: datetime) -> bool:
        """Suggest a rest day after a long streak once today's workout is in."""
        return (
            progress.streak_days >= REST_DAY_STREAK
            and self.days_since_last_workout(progress, now) == 0
        )

    def reset(self, progress: ProgressState) -> int:
        """Explicitly end the current streak.

        History, last workout date and longest streak are kept.

        Returns:
            The streak length that was reset
        """
        broken = progress.streak_days
        progress.streak_days = 0
        progress.streak_start_date = None
        return broken

    def badges(self, progress: ProgressState) -> list[BadgeStatus]:
        """Project the streak onto the badge catalog.

        A badge stays earned once the longest streak reached it. Progress is
        the current streak as a percentage of the threshold, capped at 100
        and rounded half up.
        """
        return [
            BadgeStatus(
                badge=badge,
                earned=progress.longest_streak >= badge.threshold,
                progress=min(
                    100, math.floor(progress.streak_days / badge.threshold * 100 + 0.5)
                ),
            )
            for badge in STREAK_BADGES
        ]
