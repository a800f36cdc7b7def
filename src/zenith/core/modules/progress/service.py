from datetime import date
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from zenith.core.core import Service
from zenith.core.db import upsert_update
from zenith.core.modules.progress.debouncer import ProgressSyncDebouncer
from zenith.core.modules.progress.models import DayProgress, ProgressRecord, ProgressState
from zenith.utils import date_key, now, week_days

logger = structlog.get_logger(__name__)

type ProgressKey = tuple[UUID, str]


class ProgressService(Service):
    """Per-user progress snapshots with debounced persistence.

    A user's snapshot only holds days with unsaved changes. Before a day is
    first updated its stored record is loaded, so a fresh process continues
    from the stored counters instead of overwriting them. Once a day's
    latest value is written it is dropped from memory and the store is
    authoritative again. Writes are keyed by (user id, date key).
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("progress")
        self._states: dict[UUID, ProgressState] = {}
        self._debouncer: ProgressSyncDebouncer[ProgressKey, DayProgress] | None = None

    async def on_start(self) -> None:
        await self._collection.create_index([("user_id", 1), ("date_key", 1)], unique=True)
        self._debouncer = ProgressSyncDebouncer(self._persist, delay=self.core.config.progress_sync_delay)
        logger.debug("progress_service_started", sync_delay=self.core.config.progress_sync_delay)

    async def on_stop(self) -> None:
        """Write out everything still pending so accepted updates are not lost."""
        if self._debouncer is not None:
            pending = len(self._debouncer.pending_keys())
            await self._debouncer.flush()
            logger.debug("progress_service_stopped", flushed=pending)

    @property
    def debouncer(self) -> ProgressSyncDebouncer[ProgressKey, DayProgress]:
        if self._debouncer is None:
            raise RuntimeError("Progress service not started")
        return self._debouncer

    # === Store access ===
    async def update_progress_data(self, user_id: UUID, key: str, data: DayProgress) -> bool:
        """Upsert one day's counters. Failures are logged and swallowed; returns whether the write succeeded.

        Minutes are written with `$max` so a stored total never shrinks.
        """
        update = upsert_update({"habits": data.habits})
        update["$max"] = {"minutes": data.minutes}
        try:
            await self._collection.update_one({"user_id": user_id, "date_key": key}, update, upsert=True)
        except PyMongoError:
            logger.exception("progress_update_failed", user_id=user_id, date_key=key)
            return False
        return True

    async def get_progress_data_for_past_week(self, user_id: UUID, today: date | None = None) -> dict[str, DayProgress]:
        """Counters for Monday to Sunday of the current week, every day present."""
        keys = [date_key(day) for day in week_days(today or now().date())]
        stored: dict[str, DayProgress] = {}
        try:
            cursor = self._collection.find({"user_id": user_id, "date_key": {"$in": keys}})
            async for doc in cursor:
                record = ProgressRecord.model_validate(doc)
                stored[record.date_key] = record.to_day_progress()
        except PyMongoError:
            logger.exception("progress_fetch_failed", user_id=user_id)
            stored = {}
        return {key: stored.get(key, DayProgress()) for key in keys}

    async def get_day(self, user_id: UUID, key: str) -> DayProgress:
        """Current counters of one day: unsaved in-memory value, else the stored one."""
        state = self.get_state(user_id)
        if key in state.days:
            return state.day(key)
        return await self._read_day(user_id, key) or DayProgress()

    # === In-memory snapshots ===
    def get_state(self, user_id: UUID) -> ProgressState:
        return self._states.get(user_id, ProgressState())

    async def log_meditation(self, user_id: UUID, day: date, minutes: int) -> DayProgress:
        key = date_key(day)
        await self._load_day(user_id, key)
        state = self.get_state(user_id).log_meditation(day, minutes)
        return self._commit(user_id, key, state)

    async def log_habit(self, user_id: UUID, day: date, completed: bool) -> DayProgress:
        key = date_key(day)
        await self._load_day(user_id, key)
        state = self.get_state(user_id).log_habit(day, completed)
        return self._commit(user_id, key, state)

    async def set_initial_habits(self, user_id: UUID, key: str, count: int) -> None:
        """Seed a day's habit count from the stored habit list, without writing."""
        await self._load_day(user_id, key)
        self._states[user_id] = self.get_state(user_id).with_initial_habits(key, count)

    async def sync_habits(self, user_id: UUID, key: str, count: int) -> DayProgress:
        """Set a day's habit count from a replaced habit list and schedule its write."""
        await self.set_initial_habits(user_id, key, count)
        return self._commit(user_id, key, self.get_state(user_id))

    async def load_week(self, user_id: UUID, today: date | None = None) -> dict[str, DayProgress]:
        """Read the current week from the store, with unsaved days taken from memory."""
        week = await self.get_progress_data_for_past_week(user_id, today)
        state = self.get_state(user_id)
        return {key: state.days.get(key, stored) for key, stored in week.items()}

    async def _read_day(self, user_id: UUID, key: str) -> DayProgress | None:
        try:
            doc = await self._collection.find_one({"user_id": user_id, "date_key": key})
        except PyMongoError:
            logger.exception("progress_load_failed", user_id=user_id, date_key=key)
            return None
        if doc is None:
            return None
        return ProgressRecord.model_validate(doc).to_day_progress()

    async def _load_day(self, user_id: UUID, key: str) -> None:
        """Bring a day's stored counters into the snapshot unless it is already there."""
        if key in self.get_state(user_id).days:
            return
        stored = await self._read_day(user_id, key)
        # Another update may have loaded the day while the read was in progress
        if stored is not None and key not in self.get_state(user_id).days:
            self._states[user_id] = self.get_state(user_id).with_initial_progress({key: stored})

    def _commit(self, user_id: UUID, key: str, state: ProgressState) -> DayProgress:
        self._states[user_id] = state
        day = state.day(key)
        self.debouncer.schedule((user_id, key), day)
        return day

    async def _persist(self, key: ProgressKey, data: DayProgress) -> None:
        user_id, day_key = key
        if await self.update_progress_data(user_id, day_key, data):
            self._evict(user_id, day_key, data)

    def _evict(self, user_id: UUID, key: str, written: DayProgress) -> None:
        """Drop a saved day from memory unless it changed again since the write started."""
        if (user_id, key) in self.debouncer.pending_keys():
            return
        state = self.get_state(user_id)
        if state.days.get(key) != written:
            return
        state = state.without_day(key)
        if state.days:
            self._states[user_id] = state
        else:
            self._states.pop(user_id, None)
