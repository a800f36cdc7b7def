from zenith.web.routers.auth import router as auth_router
from zenith.web.routers.dashboard import router as dashboard_router
from zenith.web.routers.habits import router as habits_router
from zenith.web.routers.journal import router as journal_router
from zenith.web.routers.meditations import router as meditations_router
from zenith.web.routers.profile import router as profile_router
from zenith.web.routers.progress import router as progress_router
from zenith.web.routers.recommendation import router as recommendation_router
from zenith.web.routers.session import router as session_router

__all__ = [
    "auth_router",
    "dashboard_router",
    "habits_router",
    "journal_router",
    "meditations_router",
    "profile_router",
    "progress_router",
    "recommendation_router",
    "session_router",
]
