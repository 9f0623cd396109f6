"""Notification dispatch for progress facts and reminders.

The engine emits facts (new streak length, unlocked achievements) and the
dispatcher decides whether and how they reach the user. Display
preferences are applied here and nowhere else.
"""

import logging
from collections import deque
from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta
from uuid import uuid4

from ..models.notifications import (
    Notification,
    NotificationPreferences,
    NotificationState,
    NotificationType,
)
from .achievements import ACHIEVEMENTS
from .streaks import is_milestone

logger = logging.getLogger(__name__)

WORKOUT_REMINDER_LEAD = timedelta(minutes=30)
HISTORY_LIMIT = 50

Sink = Callable[[Notification], None]


def log_sink(notification: Notification) -> None:
    """Default sink: write the notification to the log."""
    logger.info("%s %s: %s", notification.icon, notification.title, notification.message)


def streak_message(streak: int) -> str:
    if streak == 3:
        return "3-day streak! You're building momentum!"
    if streak == 5:
        return "5-day streak! Almost at your weekly badge!"
    if streak == 7:
        return "7-day streak! Weekly champion!"
    return f"Incredible {streak}-day streak! You're unstoppable!"


class NotificationDispatcher:
    """Filters facts through the user's preferences and renders them.

    Args:
        preferences: Display preferences (all enabled by default)
        sink: Called with every notification that passes the filter
        clock: Returns the current time; used for reminder scheduling
        state: What was already announced; load it from and save it to
            NotificationStateRepository to dedupe across sessions
    """

    def __init__(
        self,
        preferences: NotificationPreferences | None = None,
        sink: Sink | None = None,
        clock: Callable[[], datetime] = datetime.now,
        state: NotificationState | None = None,
    ):
        self.preferences = preferences or NotificationPreferences()
        self.sink = sink or log_sink
        self.clock = clock
        self.history: deque[Notification] = deque(maxlen=HISTORY_LIMIT)
        self.scheduled: dict[str, Notification] = {}
        self.state = state if state is not None else NotificationState()

    def _build(
        self,
        notification_type: NotificationType,
        title: str,
        message: str,
        icon: str,
        scheduled_at: datetime | None = None,
    ) -> Notification:
        return Notification(
            id=f"{notification_type.value}-{uuid4().hex[:12]}",
            type=notification_type,
            title=title,
            message=message,
            icon=icon,
            scheduled_at=scheduled_at,
            created_at=self.clock(),
        )

    def deliver(self, notification: Notification) -> bool:
        """Render a notification if its category is enabled.

        Returns:
            True if the notification was rendered
        """
        if not self.preferences.allows(notification.type):
            logger.debug("Suppressed %s notification (disabled)", notification.type.value)
            return False
        self.sink(notification)
        self.history.appendleft(notification)
        return True

    # Reminders

    def schedule_workout_reminder(
        self, workout_time: datetime, workout_name: str
    ) -> Notification | None:
        """Queue a reminder 30 minutes before a workout.

        Nothing is queued if workout reminders are off or the reminder time
        has already passed. Call due() periodically to release it.
        """
        if not self.preferences.workout_reminders:
            return None

        reminder_time = workout_time - WORKOUT_REMINDER_LEAD
        if reminder_time <= self.clock():
            return None

        notification = self._build(
            NotificationType.WORKOUT,
            "Workout Reminder",
            f"It's 30 mins before your {workout_name}, ready to go?",
            "💪",
            scheduled_at=reminder_time,
        )
        self.scheduled[f"workout-{workout_time.isoformat()}"] = notification
        return notification

    def due(self) -> list[Notification]:
        """Deliver every scheduled reminder whose time has come."""
        now = self.clock()
        delivered = []
        for key, notification in sorted(
            self.scheduled.items(), key=lambda item: item[1].scheduled_at
        ):
            if notification.scheduled_at <= now:
                del self.scheduled[key]
                if self.deliver(notification):
                    delivered.append(notification)
        return delivered

    def clear_scheduled(self) -> None:
        self.scheduled.clear()

    def hydration_reminder(self) -> Notification | None:
        return self._emit(
            NotificationType.HYDRATION, "Stay Hydrated", "You haven't logged water today.", "💧"
        )

    def meal_reminder(self, meal_type: str = "meal") -> Notification | None:
        return self._emit(
            NotificationType.MEAL, "Meal Time", f"Time to log your next {meal_type}?", "🍽️"
        )

    def rest_day_reminder(self) -> Notification | None:
        return self._emit(
            NotificationType.REST,
            "Rest Day Tomorrow",
            "Rest day tomorrow. Want a recovery suggestion?",
            "💤",
        )

    # Progress facts

    def streak_milestone(self, streak: int) -> Notification | None:
        """Celebrate 3, 5, 7 and every multiple of 7 after that."""
        if not is_milestone(streak):
            return None
        return self._emit(NotificationType.STREAK, "Streak Alert", streak_message(streak), "🔥")

    def streak_reset(self, broken_streak: int) -> Notification | None:
        """Encourage the user after an explicit reset of a 3+ day streak."""
        if broken_streak < 3:
            return None
        return self._emit(
            NotificationType.STREAK,
            "Streak Reset",
            f"Your {broken_streak}-day streak ended, but every champion faces "
            "setbacks. Ready to start a new one?",
            "💪",
        )

    def achievement_unlocked(self, achievement_id: str) -> Notification | None:
        """Announce an achievement once, deduped by id."""
        if achievement_id in self.state.shown_achievements:
            return None
        achievement = ACHIEVEMENTS.get(achievement_id)
        message = achievement.message if achievement else achievement_id
        icon = achievement.icon if achievement else "🏆"
        notification = self._emit(
            NotificationType.PROGRESS, "Achievement Unlocked", message, icon
        )
        if notification is not None:
            self.state.shown_achievements.add(achievement_id)
        return notification

    def weekly_target_met(self, week_of: date) -> Notification | None:
        """Announce the weekly target once per week."""
        if self.state.weekly_target_week == week_of:
            return None
        notification = self._emit(
            NotificationType.PROGRESS,
            "Weekly Target Hit",
            "You've hit your weekly target, amazing!",
            "🎯",
        )
        if notification is not None:
            self.state.weekly_target_week = week_of
        return notification

    def publish_progress(
        self,
        previous_streak: int,
        streak: int,
        achievements: Iterable[str],
        week_of: date,
    ) -> list[Notification]:
        """Turn the facts from one recorded workout into notifications."""
        delivered = []
        if streak != previous_streak:
            delivered.append(self.streak_milestone(streak))
        for achievement_id in achievements:
            if achievement_id == "weekly_target_met":
                delivered.append(self.weekly_target_met(week_of))
            else:
                delivered.append(self.achievement_unlocked(achievement_id))
        return [n for n in delivered if n is not None]

    def _emit(
        self, notification_type: NotificationType, title: str, message: str, icon: str
    ) -> Notification | None:
        notification = self._build(notification_type, title, message, icon)
        if self.deliver(notification):
            return notification
        return None
