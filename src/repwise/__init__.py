"""repwise: adaptive training progress engine."""

from .exceptions import PersistenceError, RepwiseError, ValidationError
from .models import Difficulty, ProgressState, WorkoutFeedbackEntry
from .services import NotificationDispatcher, ProgressEngine

__version__ = "0.1.0"

__all__ = [
    "Difficulty",
    "NotificationDispatcher",
    "PersistenceError",
    "ProgressEngine",
    "ProgressState",
    "RepwiseError",
    "ValidationError",
    "WorkoutFeedbackEntry",
]
