from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from zenith.core.db import MongoModel
from zenith.utils import now


class LLMOperationType(StrEnum):
    """LLM operation types."""

    MEDITATION_RECOMMENDATION = "meditation_recommendation"
    JOURNAL_ANALYSIS = "journal_analysis"


class Mood(StrEnum):
    """Moods a user can pick before asking for a recommendation."""

    STRESSED = "Stressed"
    ANXIOUS = "Anxious"
    HAPPY = "Happy"
    TIRED = "Tired"
    FOCUS = "Focus"


class TimeOfDay(StrEnum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"

    @classmethod
    def from_hour(cls, hour: int) -> "TimeOfDay":
        if not 0 <= hour <= 23:  # noqa: PLR2004
            raise ValueError(f"Invalid hour: {hour}")
        if 5 <= hour < 12:  # noqa: PLR2004
            return cls.MORNING
        if 12 <= hour < 18:  # noqa: PLR2004
            return cls.AFTERNOON
        if 18 <= hour < 22:  # noqa: PLR2004
            return cls.EVENING
        return cls.NIGHT


class CamelModel(BaseModel):
    """Models exchanged with the front end and the LLM use camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecommendationInput(CamelModel):
    mood: Mood = Field(..., description="The user's current mood")
    time_of_day: TimeOfDay = Field(..., description="The current time of day")


class MeditationRecommendation(CamelModel):
    """Recommended guided-meditation session."""

    session_title: str = Field(..., min_length=1, description="Title of the recommended session")
    session_description: str = Field(..., min_length=1, description="Short description of the session")
    session_length_minutes: int = Field(..., gt=0, le=180, description="Recommended length in minutes")
    meditation_type: str = Field(..., min_length=1, description="Kind of meditation, e.g. mindfulness, sleep")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "sessionTitle": "Calma antes de dormir",
                    "sessionDescription": "Una respiración guiada para soltar la tensión del día.",
                    "sessionLengthMinutes": 10,
                    "meditationType": "sueño",
                }
            ]
        }
    )


class JournalAnalysisInput(CamelModel):
    journal_entry: str = Field(..., min_length=1, max_length=20_000, description="The user-written journal entry text")


class JournalAnalysis(CamelModel):
    summary: str = Field(..., description="A concise, one or two-sentence summary of the journal entry")
    analysis: str = Field(..., description="Key themes, emotions, and patterns in the entry")
    advice: str = Field(..., description="One practical piece of advice or a reflective question")


class LLMLog(MongoModel):
    """Log of LLM API interaction."""

    user_input: str
    llm_response: str | None
    parsed_response: dict[str, Any] | None = None

    user_id: UUID
    created_at: datetime = Field(default_factory=now)

    operation_type: LLMOperationType
    system_prompt: str

    model: str

    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None

    error_message: str | None = None
    duration_ms: int
