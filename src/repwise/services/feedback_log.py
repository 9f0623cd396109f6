"""Validation and bounded storage of workout feedback."""

import logging
from collections.abc import Mapping

from ..exceptions import ValidationError
from ..models.feedback import WorkoutFeedbackEntry
from ..models.progress import ProgressState

logger = logging.getLogger(__name__)


def coerce_entry(entry: WorkoutFeedbackEntry | Mapping) -> WorkoutFeedbackEntry:
    """Turn caller input into a validated entry.

    Raises:
        ValidationError: If the input is not an entry or a mapping, or if
            any of its fields is malformed.
    """
    if isinstance(entry, WorkoutFeedbackEntry):
        return entry
    if isinstance(entry, Mapping):
        return WorkoutFeedbackEntry.from_dict(dict(entry))
    raise ValidationError(
        f"Expected feedback entry or mapping, got {type(entry).__name__}",
        field="entry",
    )


class WorkoutFeedbackLog:
    """Appends validated feedback to a user's history.

    History is newest-first and bounded; once the cap is reached each new
    entry evicts the oldest one.
    """

    def record(
        self, progress: ProgressState, entry: WorkoutFeedbackEntry | Mapping
    ) -> ProgressState:
        """Validate and prepend an entry.

        Validation happens before anything is touched, so a rejected entry
        leaves progress exactly as it was.

        Returns:
            The updated progress
        """
        entry = coerce_entry(entry)

        evicted = None
        if len(progress.history) == progress.history.maxlen:
            evicted = progress.history[-1]

        progress.history.appendleft(entry)
        progress.total_workouts += 1

        if evicted is not None:
            logger.debug(
                "History full (%d), evicted workout %s from %s",
                progress.history.maxlen,
                evicted.workout_id,
                evicted.timestamp.isoformat(),
            )
        return progress

    def recent(self, progress: ProgressState, limit: int = 10) -> list[WorkoutFeedbackEntry]:
        """Get the newest entries, most recent first."""
        if limit <= 0:
            return []
        return list(progress.history)[:limit]
