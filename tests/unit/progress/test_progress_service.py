"""Tests for ProgressService against the in-memory database."""

import asyncio
from datetime import date
from uuid import uuid4

import pytest
from pymongo.errors import PyMongoError

from zenith.app import App
from zenith.core.i18n import Language
from zenith.core.modules.progress.models import DayProgress

MONDAY = date(2024, 5, 6)
WEDNESDAY = date(2024, 5, 8)


@pytest.fixture
def progress(app_instance):
    return app_instance._core.services.progress


@pytest.fixture
def collection(database):
    return database.get_collection("progress")


def _stored(collection, key):
    return [(d["minutes"], d["habits"]) for d in collection.docs if d["date_key"] == key]


class TestDebouncedPersistence:
    @pytest.mark.asyncio
    async def test_rapid_logs_write_once(self, progress, collection, mock_session):
        """Test that three quick updates are stored as one document with the final counters."""
        await progress.log_meditation(mock_session.uid, MONDAY, 5)
        await progress.log_meditation(mock_session.uid, MONDAY, 5)
        result = await progress.log_habit(mock_session.uid, MONDAY, True)
        assert result == DayProgress(minutes=10, habits=1)
        assert collection.docs == []

        await asyncio.sleep(0.15)
        await progress.debouncer.wait_idle()
        assert _stored(collection, "2024-05-06") == [(10, 1)]

    @pytest.mark.asyncio
    async def test_store_failure_keeps_memory_state(self, progress, collection, mock_session):
        collection.error = PyMongoError("connection refused")
        await progress.log_meditation(mock_session.uid, MONDAY, 7)
        await progress.debouncer.flush()
        assert progress.get_state(mock_session.uid).day("2024-05-06").minutes == 7

    @pytest.mark.asyncio
    async def test_stop_flushes_pending(self, config, database, mock_session):
        app = App(config.model_copy(update={"progress_sync_delay": 60}), database)
        async with app.lifespan():
            await app.log_meditation(mock_session, MONDAY, 12)
        assert _stored(database.get_collection("progress"), "2024-05-06") == [(12, 0)]


class TestStoredCountersPreserved:
    """A fresh process continues from stored counters instead of overwriting them."""

    @pytest.mark.asyncio
    async def test_meditation_adds_to_stored_minutes(self, config, database, mock_session):
        collection = database.get_collection("progress")
        collection.docs.append({"user_id": mock_session.uid, "date_key": "2024-05-06", "minutes": 20, "habits": 2})

        app = App(config.model_copy(update={"progress_sync_delay": 60}), database)
        async with app.lifespan():
            result = await app.log_meditation(mock_session, MONDAY, 5)
            assert result == DayProgress(minutes=25, habits=2)
        assert _stored(collection, "2024-05-06") == [(25, 2)]

    @pytest.mark.asyncio
    async def test_toggle_keeps_stored_minutes(self, config, database, mock_session):
        collection = database.get_collection("progress")
        collection.docs.append({"user_id": mock_session.uid, "date_key": "2024-05-06", "minutes": 20, "habits": 0})

        app = App(config.model_copy(update={"progress_sync_delay": 60}), database)
        async with app.lifespan():
            toggled = await app.toggle_habit(mock_session, "2024-05-06", "walk", Language.EN)
            assert toggled.progress == DayProgress(minutes=20, habits=1)
        assert _stored(collection, "2024-05-06") == [(20, 1)]

    @pytest.mark.asyncio
    async def test_stale_write_never_lowers_minutes(self, progress, collection, mock_session):
        """Test that stored minutes survive a write carrying a smaller total."""
        collection.docs.append({"user_id": mock_session.uid, "date_key": "2024-05-06", "minutes": 20, "habits": 0})
        assert await progress.update_progress_data(mock_session.uid, "2024-05-06", DayProgress(minutes=5, habits=1))
        assert _stored(collection, "2024-05-06") == [(20, 1)]

    @pytest.mark.asyncio
    async def test_load_failure_does_not_lower_minutes(self, progress, collection, mock_session):
        collection.docs.append({"user_id": mock_session.uid, "date_key": "2024-05-06", "minutes": 20, "habits": 0})
        collection.error = PyMongoError("timeout")
        await progress.log_meditation(mock_session.uid, MONDAY, 5)
        collection.error = None
        await progress.debouncer.flush()
        assert _stored(collection, "2024-05-06") == [(20, 0)]


class TestMemoryEviction:
    @pytest.mark.asyncio
    async def test_saved_days_are_dropped(self, progress, mock_session):
        await progress.log_meditation(mock_session.uid, MONDAY, 5)
        await progress.log_meditation(mock_session.uid, WEDNESDAY, 5)
        await progress.debouncer.flush()
        assert progress.get_state(mock_session.uid).days == {}
        assert mock_session.uid not in progress._states

    @pytest.mark.asyncio
    async def test_day_changed_during_write_is_kept(self, progress, collection, mock_session):
        """Test that a day updated while its write is running stays in memory until written again."""
        original_update = collection.update_one
        started = asyncio.Event()
        release = asyncio.Event()

        async def slow_update(*args, **kwargs):
            started.set()
            await release.wait()
            return await original_update(*args, **kwargs)

        collection.update_one = slow_update
        await progress.log_meditation(mock_session.uid, MONDAY, 5)
        flushing = asyncio.create_task(progress.debouncer.flush())
        await started.wait()
        await progress.log_meditation(mock_session.uid, MONDAY, 5)
        release.set()
        await flushing

        assert progress.get_state(mock_session.uid).day("2024-05-06").minutes == 10
        await progress.debouncer.flush()
        assert progress.get_state(mock_session.uid).days == {}
        assert _stored(collection, "2024-05-06") == [(10, 0)]

    @pytest.mark.asyncio
    async def test_evicted_day_reloads_from_store(self, progress, collection, mock_session):
        await progress.log_meditation(mock_session.uid, MONDAY, 5)
        await progress.debouncer.flush()
        result = await progress.log_meditation(mock_session.uid, MONDAY, 3)
        assert result.minutes == 8


class TestWeek:
    @pytest.mark.asyncio
    async def test_week_is_zero_filled(self, progress, collection, mock_session):
        collection.docs.append({"user_id": mock_session.uid, "date_key": "2024-05-07", "minutes": 20, "habits": 2})
        week = await progress.get_progress_data_for_past_week(mock_session.uid, WEDNESDAY)
        assert list(week) == [f"2024-05-{day:02d}" for day in range(6, 13)]
        assert week["2024-05-07"] == DayProgress(minutes=20, habits=2)
        assert week["2024-05-06"] == DayProgress()

    @pytest.mark.asyncio
    async def test_other_users_ignored(self, progress, collection, mock_session):
        collection.docs.append({"user_id": uuid4(), "date_key": "2024-05-07", "minutes": 20, "habits": 2})
        week = await progress.get_progress_data_for_past_week(mock_session.uid, WEDNESDAY)
        assert all(day == DayProgress() for day in week.values())

    @pytest.mark.asyncio
    async def test_read_failure_gives_zero_week(self, progress, collection, mock_session):
        collection.error = PyMongoError("timeout")
        week = await progress.get_progress_data_for_past_week(mock_session.uid, WEDNESDAY)
        assert len(week) == 7
        assert all(day == DayProgress() for day in week.values())

    @pytest.mark.asyncio
    async def test_load_week_prefers_unsaved_days(self, progress, collection, mock_session):
        """Test that a stored value does not hide a day with an unsaved update."""
        collection.docs.append({"user_id": mock_session.uid, "date_key": "2024-05-06", "minutes": 1, "habits": 0})
        collection.docs.append({"user_id": mock_session.uid, "date_key": "2024-05-07", "minutes": 3, "habits": 1})
        await progress.log_meditation(mock_session.uid, MONDAY, 30)
        week = await progress.load_week(mock_session.uid, WEDNESDAY)
        assert week["2024-05-06"].minutes == 31
        assert week["2024-05-07"] == DayProgress(minutes=3, habits=1)
        assert "2024-05-07" not in progress.get_state(mock_session.uid).days
