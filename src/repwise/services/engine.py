"""Progress engine: the single entry point for recording and reading progress."""

import asyncio
import calendar
import logging
from collections.abc import Callable, Mapping
from datetime import datetime

from ..db.repositories import ProgressStore
from ..exceptions import ValidationError
from ..models.feedback import WorkoutFeedbackEntry
from ..models.progress import ProgressState, StreakRecord, StreakSnapshot
from .achievements import AchievementEvaluator
from .adaptation import AdaptiveDifficultyEngine
from .feedback_log import WorkoutFeedbackLog, coerce_entry
from .notifications import NotificationDispatcher
from .periods import PeriodAggregator, week_start
from .streaks import BadgeStatus, StreakTracker

logger = logging.getLogger(__name__)


class ProgressEngine:
    """Tracks one user's workout feedback, streak, goals and adaptations.

    Every mutation is a load -> mutate -> save cycle against the store.
    Mutations on the same engine are serialized with a lock, so callers
    may fire them concurrently; two engines for the same user still race
    with last-write-wins.

    Args:
        store: Where progress is persisted
        user_id: The user this engine is bound to
        clock: Returns the current time
        first_weekday: Week anchor for weekly progress
        dispatcher: Optional receiver of streak and achievement facts
    """

    def __init__(
        self,
        store: ProgressStore,
        user_id: str = "default",
        clock: Callable[[], datetime] = datetime.now,
        first_weekday: int = calendar.MONDAY,
        dispatcher: NotificationDispatcher | None = None,
    ):
        self.store = store
        self.user_id = user_id
        self.clock = clock
        self.dispatcher = dispatcher

        self.feedback_log = WorkoutFeedbackLog()
        self.streaks = StreakTracker()
        self.periods = PeriodAggregator(first_weekday)
        self.adaptation = AdaptiveDifficultyEngine()
        self.achievements = AchievementEvaluator(self.streaks)

        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        """Whether a mutation is running or waiting on this engine."""
        return self._lock.locked()

    async def load(self) -> ProgressState:
        """Load the user's current progress."""
        return await self.store.load(self.user_id)

    async def record_feedback(
        self, entry: WorkoutFeedbackEntry | Mapping
    ) -> ProgressState:
        """Record feedback for a completed workout.

        Raises:
            ValidationError: If the entry is malformed (nothing is changed)
            PersistenceError: If the store fails (the stored state is unchanged)
        """
        entry = coerce_entry(entry)

        async with self._lock:
            progress = await self.store.load(self.user_id)
            previous_streak = progress.streak_days
            now = self.clock()

            self.feedback_log.record(progress, entry)
            counted = self.streaks.update(progress, entry.timestamp)
            self.periods.recompute(progress, now)
            self.adaptation.adapt(progress, entry)

            await self.store.save(self.user_id, progress)

        logger.info(
            "Recorded %s feedback for workout %s (user=%s, streak=%d, total=%d%s)",
            entry.difficulty.value,
            entry.workout_id,
            self.user_id,
            progress.streak_days,
            progress.total_workouts,
            "" if counted else ", backdated",
        )

        if self.dispatcher is not None:
            self.dispatcher.publish_progress(
                previous_streak,
                progress.streak_days,
                self.achievements.evaluate(progress, now),
                week_start(now, self.periods.first_weekday).date(),
            )

        return progress

    async def get_adaptation(self, exercise_id: str) -> dict:
        """Get recommended reps and weight for an exercise."""
        progress = await self.load()
        return self.adaptation.get(progress, exercise_id)

    async def get_streak_status(self, now: datetime | None = None) -> StreakSnapshot:
        """Get the streak status as of now (defaults to the engine clock)."""
        progress = await self.load()
        return self.streaks.status(progress, now or self.clock())

    async def get_streak_record(self) -> StreakRecord:
        """Get the streak in the legacy record shape."""
        progress = await self.load()
        return progress.streak_record()

    async def get_streak_badges(self) -> list[BadgeStatus]:
        """Get the streak badges with earned flags and progress."""
        progress = await self.load()
        return self.streaks.badges(progress)

    async def get_weekly_progress(self) -> dict:
        """Get weekly completed count, target and percentage."""
        progress = await self.load()
        self.periods.recompute(progress, self.clock())
        return self.periods.summary(progress.weekly_progress)

    async def get_monthly_progress(self) -> dict:
        """Get monthly completed count, target and percentage."""
        progress = await self.load()
        self.periods.recompute(progress, self.clock())
        return self.periods.summary(progress.monthly_progress)

    async def get_recent_workouts(self, limit: int = 10) -> list[WorkoutFeedbackEntry]:
        """Get the most recent feedback entries, newest first."""
        progress = await self.load()
        return self.feedback_log.recent(progress, limit)

    async def check_achievements(self) -> list[str]:
        """List achievement ids satisfied as of now."""
        progress = await self.load()
        now = self.clock()
        self.periods.recompute(progress, now)
        return self.achievements.evaluate(progress, now)

    async def needs_rest_day(self) -> bool:
        """Whether a rest-day reminder is appropriate right now."""
        progress = await self.load()
        return self.streaks.needs_rest_day(progress, self.clock())

    async def reset_streak(self) -> ProgressState:
        """Explicitly reset the streak; history is kept."""
        async with self._lock:
            progress = await self.store.load(self.user_id)
            broken = self.streaks.reset(progress)
            await self.store.save(self.user_id, progress)

        logger.info("Reset %d-day streak for user %s", broken, self.user_id)
        if self.dispatcher is not None:
            self.dispatcher.streak_reset(broken)
        return progress

    async def set_targets(
        self, weekly: int | None = None, monthly: int | None = None
    ) -> ProgressState:
        """Change the weekly and/or monthly workout goals."""
        for name, value in (("weekly_target", weekly), ("monthly_target", monthly)):
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 1):
                raise ValidationError(f"{name} must be a positive integer", field=name, value=value)

        async with self._lock:
            progress = await self.store.load(self.user_id)
            if weekly is not None:
                progress.weekly_progress.target = weekly
            if monthly is not None:
                progress.monthly_progress.target = monthly
            await self.store.save(self.user_id, progress)
        return progress
