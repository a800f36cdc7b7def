"""Tests for HabitService."""

import pytest
from pymongo.errors import PyMongoError

from zenith.core.i18n import Language
from zenith.core.modules.habit.models import Habit, default_habits
from zenith.errors import NotFoundError, PersistenceError, ValidationError

DAY = "2024-05-06"


@pytest.fixture
def habits(app_instance):
    return app_instance._core.services.habit


@pytest.fixture
def collection(database):
    return database.get_collection("habit_days")


class TestDefaultHabits:
    def test_built_in_ids_and_labels(self):
        spanish = default_habits(Language.ES)
        english = default_habits(Language.EN)
        assert [h.id for h in spanish] == [h.id for h in english] == ["hydrate", "walk", "mindful", "read"]
        assert spanish[0].label == "Beber 8 vasos de agua"
        assert not any(h.completed for h in english)


class TestGetHabitsForDate:
    @pytest.mark.asyncio
    async def test_nothing_stored(self, habits, mock_session):
        assert await habits.get_habits_for_date(mock_session.uid, DAY) == []

    @pytest.mark.asyncio
    async def test_read_failure_returns_empty(self, habits, collection, mock_session):
        collection.error = PyMongoError("timeout")
        assert await habits.get_habits_for_date(mock_session.uid, DAY) == []


class TestUpdateHabitsForDate:
    @pytest.mark.asyncio
    async def test_upsert_then_overwrite(self, habits, collection, mock_session):
        await habits.update_habits_for_date(mock_session.uid, [Habit(id="walk", label="Walk")], DAY)
        await habits.update_habits_for_date(mock_session.uid, [Habit(id="read", label="Read", completed=True)], DAY)
        assert len(collection.docs) == 1
        stored = await habits.get_habits_for_date(mock_session.uid, DAY)
        assert stored == [Habit(id="read", label="Read", completed=True)]

    @pytest.mark.asyncio
    async def test_duplicate_ids_rejected(self, habits, mock_session):
        duplicate = [Habit(id="walk", label="Walk"), Habit(id="walk", label="Walk again")]
        with pytest.raises(ValidationError, match="unique"):
            await habits.update_habits_for_date(mock_session.uid, duplicate, DAY)

    @pytest.mark.asyncio
    async def test_write_failure_raises(self, habits, collection, mock_session):
        collection.error = PyMongoError("not primary")
        with pytest.raises(PersistenceError, match="Could not update habits."):
            await habits.update_habits_for_date(mock_session.uid, [Habit(id="walk", label="Walk")], DAY)


class TestAddAndToggle:
    @pytest.mark.asyncio
    async def test_add_habit_appends(self, habits, mock_session):
        current = default_habits(Language.EN)
        result = await habits.add_habit(mock_session.uid, DAY, "  Stretch  ", current)
        assert len(result) == 5
        assert result[-1].label == "Stretch"
        assert result[-1].id.startswith("custom-")
        assert await habits.get_habits_for_date(mock_session.uid, DAY) == result

    @pytest.mark.asyncio
    async def test_add_empty_label_rejected(self, habits, mock_session):
        with pytest.raises(ValidationError, match="Habit name cannot be empty."):
            await habits.add_habit(mock_session.uid, DAY, "   ", [])

    @pytest.mark.asyncio
    async def test_toggle_flips_one_habit(self, habits, mock_session):
        current = default_habits(Language.EN)
        result, completed = await habits.toggle_habit(mock_session.uid, DAY, "mindful", current)
        assert completed is True
        assert [h.id for h in result if h.completed] == ["mindful"]
        assert not any(h.completed for h in current)

    @pytest.mark.asyncio
    async def test_toggle_unknown_habit(self, habits, mock_session):
        with pytest.raises(NotFoundError):
            await habits.toggle_habit(mock_session.uid, DAY, "missing", default_habits(Language.EN))
