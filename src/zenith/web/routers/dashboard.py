from fastapi import APIRouter

from zenith.app import Dashboard
from zenith.web.deps import AppDep, LanguageDep, SessionDep

router = APIRouter(tags=["dashboard"])


@router.get(
    "/dashboard",
    summary="Dashboard",
    description="Profile, today's habits, this week's progress and a motivational quote.",
    operation_id="getDashboard",
)
async def get_dashboard(app: AppDep, session: SessionDep, language: LanguageDep) -> Dashboard:
    return await app.get_dashboard(session, language)
