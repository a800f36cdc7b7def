from enum import StrEnum

from pydantic import BaseModel, Field

from zenith.core.i18n import Language


class MeditationCategory(StrEnum):
    STRESS = "stress"
    SLEEP = "sleep"
    FOCUS = "focus"
    ANXIETY = "anxiety"


class LocalizedText(BaseModel, frozen=True):
    es: str
    en: str

    def get(self, language: Language) -> str:
        return getattr(self, language.value)


class MeditationSession(BaseModel, frozen=True):
    """A guided session in the built-in catalog."""

    id: str
    title: LocalizedText
    description: LocalizedText
    type: LocalizedText
    length_minutes: int
    categories: frozenset[MeditationCategory]
    image_url: str
    image_hint: str

    def matches(self, language: Language, query: str) -> bool:
        """Case-insensitive substring search over the localized title, type and description."""
        needle = query.casefold()
        fields = (self.title.get(language), self.type.get(language), self.description.get(language))
        return any(needle in field.casefold() for field in fields)


class MeditationSessionView(BaseModel):
    """Meditation session (API representation)."""

    id: str = Field(..., description="Session ID")
    title: str = Field(..., description="Localized title")
    description: str = Field(..., description="Localized description")
    type: str = Field(..., description="Localized session type, e.g. Mindfulness or Sleep")
    length_minutes: int = Field(..., description="Duration in minutes")
    categories: list[MeditationCategory] = Field(..., description="Categories the session belongs to")
    image_url: str = Field(..., description="Cover image URL")
    image_hint: str = Field(..., description="Keywords describing the cover image")

    @classmethod
    def from_domain(cls, session: MeditationSession, language: Language) -> "MeditationSessionView":
        return cls(
            id=session.id,
            title=session.title.get(language),
            description=session.description.get(language),
            type=session.type.get(language),
            length_minutes=session.length_minutes,
            categories=sorted(session.categories),
            image_url=session.image_url,
            image_hint=session.image_hint,
        )


class MeditationSection(BaseModel):
    title: str = Field(..., description="Localized section heading")
    sessions: list[MeditationSessionView] = Field(..., description="Sessions of the section, in catalog order")
