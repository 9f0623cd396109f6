"""Calendar helpers shared by the streak and period logic."""

from datetime import date, datetime


def to_local(value: datetime) -> datetime:
    """Normalize a datetime to naive local time.

    Aware values are converted to the local zone first, so calendar days
    always refer to the user's own day.
    """
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO-8601 string (a trailing 'Z' is accepted) or pass through."""
    if isinstance(value, datetime):
        return to_local(value)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_local(datetime.fromisoformat(text))


def days_between(earlier: date, later: date) -> int:
    """Whole calendar days from earlier to later (negative if reversed)."""
    return (later - earlier).days


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)
