"""Daily progress counters and the per-user in-memory snapshot."""

from collections.abc import Mapping
from datetime import date
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from zenith.errors import ValidationError
from zenith.utils import date_key


class DayProgress(BaseModel):
    """Counters for one calendar day."""

    minutes: int = Field(0, ge=0, description="Accumulated meditation minutes")
    habits: int = Field(0, ge=0, description="Completed habits")

    model_config = ConfigDict(frozen=True)


class ProgressState(BaseModel):
    """Immutable snapshot of a user's progress, keyed by date key.

    Every update returns a new snapshot; the old one is left untouched.
    Habit counts never go below zero and minutes only ever grow.
    """

    days: dict[str, DayProgress] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def day(self, key: str) -> DayProgress:
        return self.days.get(key, DayProgress())

    def log_meditation(self, day: date, minutes: int) -> Self:
        if minutes < 0:
            raise ValidationError("Meditation minutes cannot be negative.")
        key = date_key(day)
        current = self.day(key)
        return self._with_day(key, current.model_copy(update={"minutes": current.minutes + minutes}))

    def log_habit(self, day: date, completed: bool) -> Self:
        key = date_key(day)
        current = self.day(key)
        habits = current.habits + 1 if completed else max(0, current.habits - 1)
        return self._with_day(key, current.model_copy(update={"habits": habits}))

    def with_initial_habits(self, key: str, count: int) -> Self:
        """Seed the completed-habit count of a day from the stored habit list."""
        return self._with_day(key, self.day(key).model_copy(update={"habits": max(0, count)}))

    def with_initial_progress(self, data: Mapping[str, DayProgress]) -> Self:
        """Merge days loaded from the store over the current snapshot."""
        return type(self)(days={**self.days, **data})

    def without_day(self, key: str) -> Self:
        return type(self)(days={k: v for k, v in self.days.items() if k != key})

    def _with_day(self, key: str, progress: DayProgress) -> Self:
        return type(self)(days={**self.days, key: progress})


class ProgressRecord(BaseModel):
    """Stored progress document for one user and day.

    Indexed on (user_id, date_key) - unique.
    """

    date_key: str
    minutes: int = 0
    habits: int = 0

    def to_day_progress(self) -> DayProgress:
        return DayProgress(minutes=max(0, self.minutes), habits=max(0, self.habits))
