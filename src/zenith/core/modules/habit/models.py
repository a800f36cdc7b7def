from uuid import UUID

from pydantic import BaseModel, Field

from zenith.core.db import MongoModel
from zenith.core.i18n import Language, translate

DEFAULT_HABIT_IDS = ("hydrate", "walk", "mindful", "read")


class Habit(BaseModel):
    """A trackable habit for one day."""

    id: str = Field(..., min_length=1, description="Habit ID, stable across days for built-in habits")
    label: str = Field(..., min_length=1, description="Display label")
    completed: bool = Field(False, description="Whether the habit was done that day")


class HabitDay(MongoModel):
    """All habits of a user for one date key.

    Indexed on (user_id, date_key) - unique.
    """

    user_id: UUID
    date_key: str
    habits: list[Habit] = []


def default_habits(language: Language) -> list[Habit]:
    """Built-in habits offered for a day with nothing stored."""
    return [Habit(id=habit_id, label=translate(f"habit_{habit_id}", language)) for habit_id in DEFAULT_HABIT_IDS]
