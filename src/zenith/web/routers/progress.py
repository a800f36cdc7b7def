from datetime import date

from fastapi import APIRouter
from pydantic import BaseModel, Field

from zenith.core.modules.progress.models import DayProgress
from zenith.utils import now
from zenith.web.deps import AppDep, SessionDep

router = APIRouter(prefix="/dashboard/progress", tags=["progress"])


class LogMeditationRequest(BaseModel):
    minutes: int = Field(..., ge=0, le=24 * 60, description="Minutes meditated")
    day: date | None = Field(None, description="Day of the session; today when omitted")


class LogHabitRequest(BaseModel):
    completed: bool = Field(..., description="True when a habit was completed, False when one was undone")
    day: date | None = Field(None, description="Day of the habit; today when omitted")


@router.get(
    "",
    summary="This week's progress",
    description="Counters for Monday to Sunday of the current week.",
    operation_id="getWeekProgress",
)
async def get_week_progress(app: AppDep, session: SessionDep) -> dict[str, DayProgress]:
    return await app.get_week_progress(session)


@router.post(
    "/meditation",
    summary="Log meditation minutes",
    description="Adds minutes to the day; the day is written to storage after a short quiet period.",
    operation_id="logMeditation",
)
async def log_meditation(request: LogMeditationRequest, app: AppDep, session: SessionDep) -> DayProgress:
    return await app.log_meditation(session, request.day or now().date(), request.minutes)


@router.post(
    "/habit",
    summary="Log habit completion",
    description="Counts a completed habit in or out of the day; the count never drops below zero.",
    operation_id="logHabit",
)
async def log_habit(request: LogHabitRequest, app: AppDep, session: SessionDep) -> DayProgress:
    return await app.log_habit(session, request.day or now().date(), request.completed)
