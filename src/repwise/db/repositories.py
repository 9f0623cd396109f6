"""Data access layer for repwise."""

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

import aiosqlite

from ..exceptions import PersistenceError, ValidationError
from ..models.notifications import NotificationPreferences, NotificationState
from ..models.progress import ProgressState
from .engine import get_db_path, init_db

logger = logging.getLogger(__name__)


@runtime_checkable
class ProgressStore(Protocol):
    """Durable load/save of one ProgressState per user.

    load() returns a default state when nothing is stored. save() raises
    PersistenceError on failure and never modifies the state it is given.
    """

    async def load(self, user_id: str) -> ProgressState:
        ...

    async def save(self, user_id: str, state: ProgressState) -> None:
        ...


class InMemoryProgressStore:
    """Progress store backed by a dict of serialized states.

    States are stored as dictionaries so callers never share objects with
    the store.
    """

    def __init__(
        self,
        history_cap: int | None = None,
        weekly_target: int | None = None,
        monthly_target: int | None = None,
    ):
        self.defaults = _state_defaults(history_cap, weekly_target, monthly_target)
        self._records: dict[str, dict] = {}

    async def load(self, user_id: str) -> ProgressState:
        data = self._records.get(user_id)
        if data is None:
            return ProgressState.initial(**self.defaults)
        return ProgressState.from_dict(json.loads(json.dumps(data)))

    async def save(self, user_id: str, state: ProgressState) -> None:
        self._records[user_id] = json.loads(json.dumps(state.to_dict()))

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._records


def _state_defaults(
    history_cap: int | None, weekly_target: int | None, monthly_target: int | None
) -> dict:
    """Overrides for ProgressState.initial, skipping unset values."""
    values = {
        "history_cap": history_cap,
        "weekly_target": weekly_target,
        "monthly_target": monthly_target,
    }
    return {k: v for k, v in values.items() if v is not None}


class ProgressStateRepository:
    """Repository for per-user progress state in SQLite."""

    def __init__(
        self,
        db_path: Path | None = None,
        history_cap: int | None = None,
        weekly_target: int | None = None,
        monthly_target: int | None = None,
    ):
        self.db_path = db_path or get_db_path()
        self.defaults = _state_defaults(history_cap, weekly_target, monthly_target)
        self._schema_ready = False

    async def _ensure_schema(self) -> None:
        if not self._schema_ready:
            await init_db(self.db_path)
            self._schema_ready = True

    async def load(self, user_id: str) -> ProgressState:
        """Load a user's progress, or a fresh state if none is stored."""
        try:
            await self._ensure_schema()
            async with aiosqlite.connect(self.db_path) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute(
                    "SELECT data FROM progress_state WHERE user_id = ?", (user_id,)
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            logger.error("Failed to load progress for %s: %s", user_id, e)
            raise PersistenceError(
                f"Could not load progress: {e}", operation="load", user_id=user_id
            ) from e

        if row is None:
            return ProgressState.initial(**self.defaults)

        try:
            return ProgressState.from_dict(json.loads(row["data"]))
        except (json.JSONDecodeError, ValidationError, KeyError, TypeError, ValueError) as e:
            logger.error("Stored progress for %s is corrupt: %s", user_id, e)
            raise PersistenceError(
                f"Stored progress is corrupt: {e}", operation="load", user_id=user_id
            ) from e

    async def save(self, user_id: str, state: ProgressState) -> None:
        """Insert or replace a user's progress."""
        payload = json.dumps(state.to_dict())
        try:
            await self._ensure_schema()
            async with aiosqlite.connect(self.db_path) as db:
                await db.execute(
                    """
                    INSERT INTO progress_state (user_id, data, revision)
                    VALUES (?, ?, 1)
                    ON CONFLICT(user_id) DO UPDATE SET
                        data = excluded.data,
                        revision = progress_state.revision + 1,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (user_id, payload),
                )
                await db.commit()
        except aiosqlite.Error as e:
            logger.error("Failed to save progress for %s: %s", user_id, e)
            raise PersistenceError(
                f"Could not save progress: {e}", operation="save", user_id=user_id
            ) from e

    async def list_users(self) -> list[str]:
        """List users with stored progress."""
        try:
            await self._ensure_schema()
            async with aiosqlite.connect(self.db_path) as db:
                cursor = await db.execute(
                    "SELECT user_id FROM progress_state ORDER BY user_id"
                )
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise PersistenceError(f"Could not list users: {e}", operation="list") from e
        return [row[0] for row in rows]


class NotificationPreferencesRepository:
    """Repository for notification display preferences."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self, user_id: str) -> NotificationPreferences:
        """Get preferences, defaulting to everything enabled."""
        try:
            await init_db(self.db_path)
            async with aiosqlite.connect(self.db_path) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute(
                    "SELECT data FROM notification_preferences WHERE user_id = ?",
                    (user_id,),
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise PersistenceError(
                f"Could not load preferences: {e}", operation="load", user_id=user_id
            ) from e

        if row is None:
            return NotificationPreferences()
        return NotificationPreferences.from_dict(json.loads(row["data"]))

    async def upsert(self, user_id: str, preferences: NotificationPreferences) -> None:
        """Insert or replace preferences."""
        try:
            await init_db(self.db_path)
            async with aiosqlite.connect(self.db_path) as db:
                await db.execute(
                    """
                    INSERT INTO notification_preferences (user_id, data)
                    VALUES (?, ?)
                    ON CONFLICT(user_id) DO UPDATE SET
                        data = excluded.data,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (user_id, json.dumps(preferences.to_dict())),
                )
                await db.commit()
        except aiosqlite.Error as e:
            raise PersistenceError(
                f"Could not save preferences: {e}", operation="save", user_id=user_id
            ) from e


class NotificationStateRepository:
    """Repository for the announcements each user has already seen."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self, user_id: str) -> NotificationState:
        """Get the announcement state, empty for a new user."""
        try:
            await init_db(self.db_path)
            async with aiosqlite.connect(self.db_path) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute(
                    "SELECT data FROM notification_state WHERE user_id = ?",
                    (user_id,),
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise PersistenceError(
                f"Could not load notification state: {e}", operation="load", user_id=user_id
            ) from e

        if row is None:
            return NotificationState()
        return NotificationState.from_dict(json.loads(row["data"]))

    async def upsert(self, user_id: str, state: NotificationState) -> None:
        """Insert or replace the announcement state."""
        try:
            await init_db(self.db_path)
            async with aiosqlite.connect(self.db_path) as db:
                await db.execute(
                    """
                    INSERT INTO notification_state (user_id, data)
                    VALUES (?, ?)
                    ON CONFLICT(user_id) DO UPDATE SET
                        data = excluded.data,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (user_id, json.dumps(state.to_dict())),
                )
                await db.commit()
        except aiosqlite.Error as e:
            raise PersistenceError(
                f"Could not save notification state: {e}", operation="save", user_id=user_id
            ) from e
