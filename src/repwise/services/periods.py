"""Weekly and monthly completion counts."""

import calendar
import math
from datetime import datetime, timedelta

from ..models.progress import PeriodProgress, ProgressState
from ..utils.dates import start_of_day, to_local


def week_start(now: datetime, first_weekday: int = calendar.MONDAY) -> datetime:
    """Midnight on the first day of the week containing now.

    Args:
        now: Reference time
        first_weekday: calendar.MONDAY (ISO weeks) or calendar.SUNDAY
    """
    now = to_local(now)
    offset = (now.weekday() - first_weekday) % 7
    return start_of_day(now - timedelta(days=offset))


def month_start(now: datetime) -> datetime:
    """Midnight on the first of the month containing now."""
    return start_of_day(to_local(now)).replace(day=1)


def percentage(period: PeriodProgress) -> int:
    """Completion percentage, rounded half up. 0 when there is no target."""
    if period.target <= 0:
        return 0
    return math.floor(period.completed / period.target * 100 + 0.5)


class PeriodAggregator:
    """Counts history entries inside the current week and month windows.

    Both windows run from their start through now, inclusive at both ends.
    """

    def __init__(self, first_weekday: int = calendar.MONDAY):
        self.first_weekday = first_weekday

    def recompute(self, progress: ProgressState, now: datetime) -> None:
        """Refresh weekly and monthly completed counts from history."""
        now = to_local(now)
        progress.weekly_progress.completed = self._count_since(
            progress, week_start(now, self.first_weekday), now
        )
        progress.monthly_progress.completed = self._count_since(
            progress, month_start(now), now
        )

    def _count_since(self, progress: ProgressState, start: datetime, end: datetime) -> int:
        return sum(1 for entry in progress.history if start <= entry.timestamp <= end)

    def summary(self, period: PeriodProgress) -> dict:
        """Period progress with its completion percentage."""
        return {
            "completed": period.completed,
            "target": period.target,
            "percentage": percentage(period),
        }
