from fastapi import APIRouter

from zenith.core.modules.llm.models import MeditationRecommendation, RecommendationInput
from zenith.core.results import ActionResult
from zenith.web.deps import AppDep, LanguageDep, SessionDep

router = APIRouter(prefix="/dashboard", tags=["recommendation"])


@router.post(
    "/recommendation",
    summary="Recommend a meditation",
    description=(
        "Personalized session for the given mood and time of day. Unknown moods are rejected with 422; "
        "AI failures come back as a localized `error`."
    ),
    operation_id="getRecommendation",
)
async def get_recommendation(
    request: RecommendationInput, app: AppDep, session: SessionDep, language: LanguageDep
) -> ActionResult[MeditationRecommendation]:
    return await app.get_recommendation_action(session, request, language)
