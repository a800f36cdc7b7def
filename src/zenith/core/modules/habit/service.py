from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from zenith.core.core import Service
from zenith.core.db import upsert_update
from zenith.core.modules.habit.models import Habit, HabitDay
from zenith.errors import NotFoundError, PersistenceError, ValidationError
from zenith.utils import now

logger = structlog.get_logger(__name__)


class HabitService(Service):
    """Stores the per-day habit lists of each user."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("habit_days")

    async def on_start(self) -> None:
        await self._collection.create_index([("user_id", 1), ("date_key", 1)], unique=True)

    async def get_habits_for_date(self, user_id: UUID, date_key: str) -> list[Habit]:
        """Get stored habits for a date; empty when none are stored or the read fails."""
        try:
            doc = await self._collection.find_one({"user_id": user_id, "date_key": date_key})
        except PyMongoError:
            logger.exception("habits_fetch_failed", user_id=user_id, date_key=date_key)
            return []
        if doc is None:
            return []
        return HabitDay.model_validate(doc).habits

    async def update_habits_for_date(self, user_id: UUID, habits: list[Habit], date_key: str) -> None:
        """Overwrite the habit list for a date, creating the document if needed."""
        ids = [habit.id for habit in habits]
        if len(ids) != len(set(ids)):
            raise ValidationError("Habit IDs must be unique within a day.")
        try:
            await self._collection.update_one(
                {"user_id": user_id, "date_key": date_key},
                upsert_update({"habits": [habit.model_dump() for habit in habits]}),
                upsert=True,
            )
        except PyMongoError as e:
            logger.exception("habits_update_failed", user_id=user_id, date_key=date_key)
            raise PersistenceError("Could not update habits.") from e

    async def add_habit(self, user_id: UUID, date_key: str, label: str, current: list[Habit]) -> list[Habit]:
        """Append a custom habit to `current` and persist the new list."""
        label = label.strip()
        if not label:
            raise ValidationError("Habit name cannot be empty.")
        habit = Habit(id=f"custom-{int(now().timestamp() * 1000)}", label=label)
        while any(h.id == habit.id for h in current):
            habit = habit.model_copy(update={"id": f"{habit.id}-1"})
        habits = [*current, habit]
        await self.update_habits_for_date(user_id, habits, date_key)
        return habits

    async def toggle_habit(self, user_id: UUID, date_key: str, habit_id: str, current: list[Habit]) -> tuple[list[Habit], bool]:
        """Flip completion of one habit and persist. Returns the new list and the new state."""
        if not any(h.id == habit_id for h in current):
            raise NotFoundError(f"Habit '{habit_id}' not found")
        habits = [h.model_copy(update={"completed": not h.completed}) if h.id == habit_id else h for h in current]
        await self.update_habits_for_date(user_id, habits, date_key)
        completed = next(h.completed for h in habits if h.id == habit_id)
        return habits, completed
