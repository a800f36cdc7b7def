"""Tests for LLMService and the AI actions of App."""

from types import SimpleNamespace

import litellm
import pytest

from zenith.app import App
from zenith.core.i18n import Language
from zenith.core.modules.llm.models import JournalAnalysisInput, Mood, RecommendationInput, TimeOfDay
from zenith.errors import ValidationError

ANALYSIS_JSON = '{"summary": "A calm day.", "analysis": "Gratitude and rest.", "advice": "Keep an evening walk."}'


def _completion(content):
    usage = SimpleNamespace(prompt_tokens=12, completion_tokens=34, total_tokens=46)
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))], usage=usage)


@pytest.fixture
def llm(app_instance):
    return app_instance._core.services.llm


@pytest.fixture
def logs(database):
    return database.get_collection("llm_logs")


@pytest.fixture
def calls(monkeypatch):
    """Replace litellm.acompletion; set `calls.content` to choose the reply."""
    recorded = SimpleNamespace(kwargs=[], content=ANALYSIS_JSON)

    async def fake_completion(**kwargs):
        recorded.kwargs.append(kwargs)
        return _completion(recorded.content)

    monkeypatch.setattr(litellm, "acompletion", fake_completion)
    return recorded


class TestAnalyzeJournalEntry:
    @pytest.mark.asyncio
    async def test_parsed_and_logged(self, llm, logs, calls, mock_session):
        analysis = await llm.analyze_journal_entry(
            JournalAnalysisInput(journal_entry="Today I rested."), mock_session.uid, Language.EN
        )
        assert analysis.summary == "A calm day."
        assert calls.kwargs[0]["response_format"] == {"type": "json_object"}
        assert "English" in calls.kwargs[0]["messages"][0]["content"]
        assert "Today I rested." in calls.kwargs[0]["messages"][1]["content"]

        log = logs.docs[0]
        assert log["operation_type"] == "journal_analysis"
        assert log["total_tokens"] == 46
        assert log["error_message"] is None

    @pytest.mark.asyncio
    async def test_invalid_output_raises_and_is_logged(self, llm, logs, calls, mock_session):
        calls.content = '{"summary": "missing the rest"}'
        with pytest.raises(ValidationError, match="does not match JournalAnalysis"):
            await llm.analyze_journal_entry(JournalAnalysisInput(journal_entry="x"), mock_session.uid, Language.ES)
        assert logs.docs[0]["error_message"] is not None


class TestGetRecommendation:
    @pytest.mark.asyncio
    async def test_prompt_mentions_mood_and_time(self, llm, calls, mock_session):
        calls.content = (
            '{"sessionTitle": "Respira", "sessionDescription": "Suelta el estrés.", '
            '"sessionLengthMinutes": 5, "meditationType": "respiración"}'
        )
        data = RecommendationInput(mood=Mood.STRESSED, time_of_day=TimeOfDay.MORNING)
        recommendation = await llm.get_recommendation(data, mock_session.uid, Language.ES)
        assert recommendation.session_title == "Respira"
        user_message = calls.kwargs[0]["messages"][1]["content"]
        assert "Stressed" in user_message
        assert "morning" in user_message
        assert "Spanish" in calls.kwargs[0]["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_missing_api_key(self, config, database, mock_session, calls):
        app = App(config.model_copy(update={"llm_api_key": ""}), database)
        async with app.lifespan():
            result = await app.get_recommendation_action(
                mock_session, RecommendationInput(mood=Mood.HAPPY, time_of_day=TimeOfDay.EVENING), Language.ES
            )
        assert calls.kwargs == []
        assert result.success is False
        assert result.error.startswith("Lo sentimos, no pudimos generar una recomendación")


class TestActions:
    @pytest.mark.asyncio
    async def test_analysis_action_success(self, app_instance, calls, mock_session):
        result = await app_instance.analyze_journal_action(
            mock_session, JournalAnalysisInput(journal_entry="Good day"), Language.EN
        )
        assert result.success is True
        assert result.data.advice == "Keep an evening walk."

    @pytest.mark.asyncio
    async def test_analysis_action_failure_localized(self, app_instance, calls, mock_session):
        calls.content = "not json at all"
        result = await app_instance.analyze_journal_action(
            mock_session, JournalAnalysisInput(journal_entry="Good day"), Language.EN
        )
        assert result.success is False
        assert result.data is None
        assert result.error == "Sorry, we couldn't analyze your entry at this time. Please try again later."
