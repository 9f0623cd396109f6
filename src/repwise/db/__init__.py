"""Database layer for repwise."""

from .engine import get_db_path, init_db
from .repositories import (
    InMemoryProgressStore,
    NotificationPreferencesRepository,
    NotificationStateRepository,
    ProgressStateRepository,
    ProgressStore,
)

__all__ = [
    "get_db_path",
    "init_db",
    "InMemoryProgressStore",
    "NotificationPreferencesRepository",
    "NotificationStateRepository",
    "ProgressStateRepository",
    "ProgressStore",
]
