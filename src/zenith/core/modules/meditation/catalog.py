"""Built-in catalog of guided meditation sessions."""

from zenith.core.i18n import Language
from zenith.core.modules.meditation.models import (
    LocalizedText,
    MeditationCategory,
    MeditationSection,
    MeditationSession,
    MeditationSessionView,
)

PLACEHOLDER_IMAGE_URL = "https://placehold.co/600x400.png"

# Sections in display order, each with its sessions in display order
CATALOG: tuple[tuple[LocalizedText, tuple[MeditationSession, ...]], ...] = (
    (
        LocalizedText(es="Para Empezar", en="Getting Started"),
        (
            MeditationSession(
                id="morning-awakening",
                title=LocalizedText(es="Despertar Matutino", en="Morning Awakening"),
                description=LocalizedText(
                    es="Comienza tu día con claridad y enfoque. Una sesión suave para despertar los sentidos.",
                    en="Start your day with clarity and focus. A gentle session to awaken the senses.",
                ),
                type=LocalizedText(es="Mindfulness", en="Mindfulness"),
                length_minutes=10,
                categories=frozenset({MeditationCategory.FOCUS}),
                image_url=PLACEHOLDER_IMAGE_URL,
                image_hint="sunrise yoga",
            ),
        ),
    ),
    (
        LocalizedText(es="Relajación Profunda", en="Deep Relaxation"),
        (
            MeditationSession(
                id="deep-sleep",
                title=LocalizedText(es="Sueño Profundo", en="Deep Sleep"),
                description=LocalizedText(
                    es="Un viaje relajante para liberar la tensión del día y dar la bienvenida a un sueño reparador.",
                    en="A relaxing journey to release the day's tension and welcome restful sleep.",
                ),
                type=LocalizedText(es="Sueño", en="Sleep"),
                length_minutes=20,
                categories=frozenset({MeditationCategory.SLEEP}),
                image_url=PLACEHOLDER_IMAGE_URL,
                image_hint="calm night",
            ),
            MeditationSession(
                id="stress-relief",
                title=LocalizedText(es="Alivio del Estrés", en="Stress Relief"),
                description=LocalizedText(
                    es="Encuentra tu calma interior y reduce el estrés con esta sesión guiada de respiración.",
                    en="Find your inner calm and reduce stress with this guided breathing session.",
                ),
                type=LocalizedText(es="Estrés", en="Stress"),
                length_minutes=15,
                categories=frozenset({MeditationCategory.STRESS, MeditationCategory.ANXIETY}),
                image_url=PLACEHOLDER_IMAGE_URL,
                image_hint="serene forest",
            ),
        ),
    ),
    (
        LocalizedText(es="Concentración", en="Concentration"),
        (
            MeditationSession(
                id="intense-focus",
                title=LocalizedText(es="Foco Intenso", en="Intense Focus"),
                description=LocalizedText(
                    es="Mejora tu concentración y productividad con esta meditación para la claridad mental.",
                    en="Improve your concentration and productivity with this meditation for mental clarity.",
                ),
                type=LocalizedText(es="Enfoque", en="Focus"),
                length_minutes=12,
                categories=frozenset({MeditationCategory.FOCUS}),
                image_url=PLACEHOLDER_IMAGE_URL,
                image_hint="focused work",
            ),
        ),
    ),
)


def list_sessions(
    language: Language, category: MeditationCategory | None = None, query: str | None = None
) -> list[MeditationSection]:
    """Catalog sections localized to `language`.

    Sessions can be narrowed by category and by a search query.
    Sections left without sessions are dropped.
    """
    query = query.strip() if query else None
    sections = []
    for heading, sessions in CATALOG:
        views = [
            MeditationSessionView.from_domain(session, language)
            for session in sessions
            if (category is None or category in session.categories)
            and (not query or session.matches(language, query))
        ]
        if views:
            sections.append(MeditationSection(title=heading.get(language), sessions=views))
    return sections
