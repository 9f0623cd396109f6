"""Notification models."""

from dataclasses import asdict, dataclass, field, fields
from datetime import date, datetime
from enum import Enum


class NotificationType(str, Enum):
    """Category of a notification; each maps to one display preference."""

    WORKOUT = "workout"
    HYDRATION = "hydration"
    MEAL = "meal"
    REST = "rest"
    STREAK = "streak"
    PROGRESS = "progress"


@dataclass
class NotificationPreferences:
    """Which notification categories the user wants to see."""

    workout_reminders: bool = True
    hydration_reminders: bool = True
    meal_reminders: bool = True
    rest_day_reminders: bool = True
    streak_alerts: bool = True
    progress_updates: bool = True

    def allows(self, notification_type: NotificationType) -> bool:
        """Check whether a notification type may be displayed."""
        return {
            NotificationType.WORKOUT: self.workout_reminders,
            NotificationType.HYDRATION: self.hydration_reminders,
            NotificationType.MEAL: self.meal_reminders,
            NotificationType.REST: self.rest_day_reminders,
            NotificationType.STREAK: self.streak_alerts,
            NotificationType.PROGRESS: self.progress_updates,
        }[notification_type]

    def update(self, **changes: bool) -> None:
        """Apply a partial update; unknown names raise ValueError."""
        known = {f.name for f in fields(self)}
        for name, value in changes.items():
            if name not in known:
                raise ValueError(f"Unknown notification preference: {name}")
            setattr(self, name, bool(value))

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "NotificationPreferences":
        known = {f.name for f in fields(cls)}
        return cls(**{k: bool(v) for k, v in data.items() if k in known})


@dataclass
class Notification:
    """A fact ready to be shown to the user."""

    id: str
    type: NotificationType
    title: str
    message: str
    icon: str = ""
    scheduled_at: datetime | None = None
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "icon": self.icon,
            "scheduled_at": self.scheduled_at.isoformat() if self.scheduled_at else None,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class NotificationState:
    """Announcements a user has already seen.

    Persisted between sessions so an achievement is announced once per id
    and the weekly target once per week.
    """

    shown_achievements: set[str] = field(default_factory=set)
    weekly_target_week: date | None = None

    def to_dict(self) -> dict:
        return {
            "shown_achievements": sorted(self.shown_achievements),
            "weekly_target_week": (
                self.weekly_target_week.isoformat() if self.weekly_target_week else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NotificationState":
        week = data.get("weekly_target_week")
        return cls(
            shown_achievements=set(data.get("shown_achievements", [])),
            weekly_target_week=date.fromisoformat(week) if week else None,
        )
