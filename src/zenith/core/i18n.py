"""User-facing strings in the supported languages."""

import random
from enum import StrEnum


class Language(StrEnum):
    ES = "es"
    EN = "en"

    @classmethod
    def parse(cls, value: str | None, default: "Language") -> "Language":
        """Resolve a query value or Accept-Language header, falling back to `default`."""
        if not value:
            return default
        for part in value.split(","):
            code = part.split(";")[0].strip().lower()[:2]
            if code in cls._value2member_map_:
                return cls(code)
        return default


MESSAGES: dict[Language, dict[str, str]] = {
    Language.ES: {
        "default_user_name": "Usuario de Zenith",
        "recommendation_failed": (
            "Lo sentimos, no pudimos generar una recomendación en este momento. Inténtalo de nuevo más tarde."
        ),
        "journal_analysis_failed": (
            "Lo sentimos, no pudimos analizar tu entrada en este momento. Inténtalo de nuevo más tarde."
        ),
        "habit_hydrate": "Beber 8 vasos de agua",
        "habit_walk": "Caminar 20 minutos",
        "habit_mindful": "Meditar 5 minutos",
        "habit_read": "Leer 10 páginas",
    },
    Language.EN: {
        "default_user_name": "Zenith User",
        "recommendation_failed": "Sorry, we couldn't generate a recommendation at this time. Please try again later.",
        "journal_analysis_failed": "Sorry, we couldn't analyze your entry at this time. Please try again later.",
        "habit_hydrate": "Drink 8 glasses of water",
        "habit_walk": "Walk for 20 minutes",
        "habit_mindful": "Meditate for 5 minutes",
        "habit_read": "Read 10 pages",
    },
}

QUOTES: dict[Language, list[str]] = {
    Language.ES: [
        "La paz viene de dentro. No la busques fuera.",
        "La meditación es el arte de no hacer nada, y disfrutarlo.",
        "Tu mente es un jardín. Tus pensamientos son las semillas. Puedes cultivar flores o puedes cultivar malas hierbas.",
        "Cada respiración que tomamos es un nuevo comienzo.",
        "El silencio no está vacío, está lleno de respuestas.",
        "No dejes que el comportamiento de otros destruya tu paz interior.",
        "Cuida tu cuerpo. Es el único lugar que tienes para vivir.",
    ],
    Language.EN: [
        "Peace comes from within. Do not seek it without.",
        "Meditation is the art of doing nothing, and enjoying it.",
        "Your mind is a garden. Your thoughts are the seeds. You can grow flowers or you can grow weeds.",
        "Every breath we take is a new beginning.",
        "Silence isn't empty, it's full of answers.",
        "Do not let the behavior of others destroy your inner peace.",
        "Take care of your body. It's the only place you have to live.",
    ],
}


def translate(key: str, language: Language) -> str:
    return MESSAGES[language][key]


def random_quote(language: Language) -> str:
    return random.choice(QUOTES[language])  # noqa: S311
