from typing import Annotated

from fastapi import APIRouter, Depends, Query

from zenith.core.modules.meditation.models import MeditationCategory, MeditationSection
from zenith.web.deps import AppDep, LanguageDep, get_session

router = APIRouter(tags=["meditations"], dependencies=[Depends(get_session)])


@router.get(
    "/dashboard/meditations",
    summary="Meditation sessions",
    description="Guided sessions grouped by section. Sections with no matching session are omitted.",
    operation_id="listMeditations",
)
async def list_meditations(
    app: AppDep,
    language: LanguageDep,
    category: Annotated[MeditationCategory | None, Query(description="Only sessions of this category")] = None,
    q: Annotated[str | None, Query(description="Search in title, type and description")] = None,
) -> list[MeditationSection]:
    return app.get_meditations(language, category, q)
