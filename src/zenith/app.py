from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Any
from uuid import UUID

import structlog
from pydantic import BaseModel, Field
from pymongo.asynchronous.database import AsyncDatabase

from zenith.config import Config
from zenith.core.core import Core
from zenith.core.i18n import Language, random_quote, translate
from zenith.core.modules.habit.models import Habit, default_habits
from zenith.core.modules.journal.models import JournalEntryView
from zenith.core.modules.llm.models import (
    JournalAnalysis,
    JournalAnalysisInput,
    MeditationRecommendation,
    RecommendationInput,
)
from zenith.core.modules.meditation.catalog import list_sessions
from zenith.core.modules.meditation.models import MeditationCategory, MeditationSection
from zenith.core.modules.progress.models import DayProgress
from zenith.core.modules.session.models import SessionPayload
from zenith.core.modules.user.models import UserProfile, UserProfilePatch
from zenith.core.results import ActionResult
from zenith.errors import AuthenticationError, NotFoundError
from zenith.utils import date_key, now, parse_date_key

logger = structlog.get_logger(__name__)


class DayHabits(BaseModel):
    date_key: str = Field(..., description="Day the habits belong to (yyyy-MM-dd)")
    habits: list[Habit] = Field(..., description="Habits of the day")
    progress: DayProgress = Field(..., description="Counters of the day")


class HabitToggle(DayHabits):
    habit_id: str = Field(..., description="Toggled habit")
    completed: bool = Field(..., description="New completion state of the toggled habit")


class Dashboard(BaseModel):
    user_name: str = Field(..., description="Display name, or a localized default")
    profile: UserProfile | None = Field(None, description="Current user profile")
    today: DayHabits = Field(..., description="Today's habits and counters")
    week: dict[str, DayProgress] = Field(..., description="Counters for Monday to Sunday of this week")
    quote: str = Field(..., description="Motivational quote")


class App:
    """Facade for all application operations.

    The session middleware has already verified the caller, so operations
    take the verified SessionPayload and act on behalf of `session.uid`.
    """

    def __init__(self, config: Config, database: AsyncDatabase[dict[str, Any]] | None = None) -> None:
        self._core = Core(config, database)

    @property
    def config(self) -> Config:
        return self._core.config

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Session ===
    async def login(self, email: str, password: str) -> tuple[str, SessionPayload]:
        """Authenticate user and create session."""
        if not email or not password:
            raise AuthenticationError("Please enter both email and password.")
        user = await self._core.services.user.authenticate(email, password)
        if user is None:
            raise AuthenticationError("Invalid email or password.")
        return self._core.services.session.issue_session(user)

    async def register(self, email: str, password: str, display_name: str) -> tuple[str, SessionPayload]:
        """Create an account and log it in."""
        user = await self._core.services.user.create_user(email, password, display_name)
        return self._core.services.session.issue_session(user)

    def get_session(self, token: str | None) -> SessionPayload | None:
        return self._core.services.session.get_session(token)

    # === Dashboard ===
    async def get_dashboard(self, session: SessionPayload, language: Language, today: date | None = None) -> Dashboard:
        today = today or now().date()
        profile = await self._core.services.user.get_user_profile(session.uid)
        week = await self._core.services.progress.load_week(session.uid, today)
        day = await self.get_day_habits(session, date_key(today), language)
        week[day.date_key] = day.progress
        user_name = (profile.display_name if profile else session.display_name) or translate("default_user_name", language)
        return Dashboard(user_name=user_name, profile=profile, today=day, week=week, quote=random_quote(language))

    def get_meditations(
        self, language: Language, category: MeditationCategory | None = None, query: str | None = None
    ) -> list[MeditationSection]:
        return list_sessions(language, category, query)

    # === Habits ===
    async def get_day_habits(self, session: SessionPayload, key: str, language: Language) -> DayHabits:
        """Habits of a day; the built-in habits when nothing is stored yet.

        The habit counter shown is the number of completed habits in the list.
        """
        habits = await self._current_habits(session.uid, key, language)
        return await self._day_habits(session.uid, key, habits)

    async def update_day_habits(self, session: SessionPayload, key: str, habits: list[Habit]) -> DayHabits:
        parse_date_key(key)
        await self._core.services.habit.update_habits_for_date(session.uid, habits, key)
        progress = await self._core.services.progress.sync_habits(session.uid, key, _completed(habits))
        return DayHabits(date_key=key, habits=habits, progress=progress)

    async def add_habit(self, session: SessionPayload, key: str, label: str, language: Language) -> DayHabits:
        current = await self._current_habits(session.uid, key, language)
        habits = await self._core.services.habit.add_habit(session.uid, key, label, current)
        return await self._day_habits(session.uid, key, habits)

    async def toggle_habit(self, session: SessionPayload, key: str, habit_id: str, language: Language) -> HabitToggle:
        """Flip a habit and count it in (or out of) the day's progress."""
        day = parse_date_key(key)
        current = await self._current_habits(session.uid, key, language)
        habits, completed = await self._core.services.habit.toggle_habit(session.uid, key, habit_id, current)
        await self._core.services.progress.set_initial_habits(session.uid, key, _completed(current))
        progress = await self._core.services.progress.log_habit(session.uid, day, completed)
        return HabitToggle(date_key=key, habits=habits, progress=progress, habit_id=habit_id, completed=completed)

    # === Journal ===
    async def get_journal_entries(self, session: SessionPayload) -> list[JournalEntryView]:
        entries = await self._core.services.journal.get_journal_entries(session.uid)
        return [JournalEntryView.from_domain(entry) for entry in entries]

    async def save_journal_entry(self, session: SessionPayload, text: str, when: datetime | None = None) -> JournalEntryView:
        entry = await self._core.services.journal.save_journal_entry(session.uid, text, when)
        return JournalEntryView.from_domain(entry)

    async def delete_journal_entry(self, session: SessionPayload, entry_id: UUID) -> None:
        await self._core.services.journal.delete_journal_entry(session.uid, entry_id)

    # === Progress ===
    async def get_week_progress(self, session: SessionPayload, today: date | None = None) -> dict[str, DayProgress]:
        return await self._core.services.progress.load_week(session.uid, today)

    async def log_meditation(self, session: SessionPayload, day: date, minutes: int) -> DayProgress:
        return await self._core.services.progress.log_meditation(session.uid, day, minutes)

    async def log_habit(self, session: SessionPayload, day: date, completed: bool) -> DayProgress:
        return await self._core.services.progress.log_habit(session.uid, day, completed)

    # === Profile ===
    async def get_profile(self, session: SessionPayload) -> UserProfile:
        profile = await self._core.services.user.get_user_profile(session.uid)
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    async def update_profile(self, session: SessionPayload, patch: UserProfilePatch) -> tuple[UserProfile, str]:
        """Update the profile and return it with a refreshed session token."""
        profile = await self._core.services.user.update_user_profile(session.uid, patch)
        token, _ = self._core.services.session.refresh_session(session, display_name=profile.display_name)
        return profile, token

    async def update_photo(self, session: SessionPayload, photo_url: str) -> tuple[UserProfile, str]:
        profile = await self._core.services.user.update_photo_url(session.uid, photo_url)
        token, _ = self._core.services.session.refresh_session(session, photo_url=profile.photo_url)
        return profile, token

    # === AI ===
    async def get_recommendation_action(
        self, session: SessionPayload, data: RecommendationInput, language: Language
    ) -> ActionResult[MeditationRecommendation]:
        """Recommend a session; failures become a localized message."""
        try:
            recommendation = await self._core.services.llm.get_recommendation(data, session.uid, language)
        except Exception:
            logger.exception("recommendation_failed", user_id=session.uid)
            return ActionResult[MeditationRecommendation].fail(translate("recommendation_failed", language))
        return ActionResult[MeditationRecommendation].ok(recommendation)

    async def analyze_journal_action(
        self, session: SessionPayload, data: JournalAnalysisInput, language: Language
    ) -> ActionResult[JournalAnalysis]:
        """Analyze a journal entry; failures become a localized message."""
        try:
            analysis = await self._core.services.llm.analyze_journal_entry(data, session.uid, language)
        except Exception:
            logger.exception("journal_analysis_failed", user_id=session.uid)
            return ActionResult[JournalAnalysis].fail(translate("journal_analysis_failed", language))
        return ActionResult[JournalAnalysis].ok(analysis)

    # === Private helpers ===
    async def _current_habits(self, user_id: UUID, key: str, language: Language) -> list[Habit]:
        parse_date_key(key)
        habits = await self._core.services.habit.get_habits_for_date(user_id, key)
        return habits or default_habits(language)

    async def _day_habits(self, user_id: UUID, key: str, habits: list[Habit]) -> DayHabits:
        progress = await self._core.services.progress.get_day(user_id, key)
        return DayHabits(date_key=key, habits=habits, progress=progress.model_copy(update={"habits": _completed(habits)}))


def _completed(habits: list[Habit]) -> int:
    return sum(1 for habit in habits if habit.completed)
