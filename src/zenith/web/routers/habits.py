from fastapi import APIRouter
from pydantic import BaseModel, Field

from zenith.app import DayHabits, HabitToggle
from zenith.core.modules.habit.models import Habit
from zenith.web.deps import AppDep, LanguageDep, SessionDep
from zenith.web.openapi import ErrorResponse

router = APIRouter(prefix="/dashboard/habits", tags=["habits"])


class AddHabitRequest(BaseModel):
    label: str = Field(..., min_length=1, max_length=120, description="Name of the new habit")


class UpdateHabitsRequest(BaseModel):
    habits: list[Habit] = Field(..., description="Complete habit list for the day")


@router.get(
    "/{date_key}",
    summary="Habits of a day",
    description="Stored habits for the day, or the built-in habits when nothing is stored.",
    operation_id="getHabits",
    responses={400: {"model": ErrorResponse, "description": "Invalid date key"}},
)
async def get_habits(date_key: str, app: AppDep, session: SessionDep, language: LanguageDep) -> DayHabits:
    return await app.get_day_habits(session, date_key, language)


@router.put(
    "/{date_key}",
    summary="Replace habits of a day",
    operation_id="updateHabits",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid date key or duplicate habit IDs"},
        500: {"model": ErrorResponse, "description": "Could not update habits"},
    },
)
async def update_habits(date_key: str, request: UpdateHabitsRequest, app: AppDep, session: SessionDep) -> DayHabits:
    return await app.update_day_habits(session, date_key, request.habits)


@router.post(
    "/{date_key}",
    summary="Add habit",
    operation_id="addHabit",
    status_code=201,
    responses={
        400: {"model": ErrorResponse, "description": "Empty name or invalid date key"},
        500: {"model": ErrorResponse, "description": "Could not update habits"},
    },
)
async def add_habit(
    date_key: str, request: AddHabitRequest, app: AppDep, session: SessionDep, language: LanguageDep
) -> DayHabits:
    return await app.add_habit(session, date_key, request.label, language)


@router.post(
    "/{date_key}/{habit_id}/toggle",
    summary="Toggle habit",
    description="Flip completion of a habit and update the day's progress counters.",
    operation_id="toggleHabit",
    responses={
        404: {"model": ErrorResponse, "description": "Habit not found"},
        500: {"model": ErrorResponse, "description": "Could not update habits"},
    },
)
async def toggle_habit(
    date_key: str, habit_id: str, app: AppDep, session: SessionDep, language: LanguageDep
) -> HabitToggle:
    return await app.toggle_habit(session, date_key, habit_id, language)
