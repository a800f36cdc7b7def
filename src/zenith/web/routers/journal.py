from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from zenith.core.modules.journal.models import JournalEntryView
from zenith.core.modules.llm.models import JournalAnalysis, JournalAnalysisInput
from zenith.core.results import ActionResult
from zenith.web.deps import AppDep, LanguageDep, SessionDep
from zenith.web.openapi import ErrorResponse

router = APIRouter(prefix="/dashboard/journal", tags=["journal"])


class SaveJournalEntryRequest(BaseModel):
    entry: str = Field(..., description="Entry text")


@router.get("", summary="List journal entries", description="All entries, newest first.", operation_id="listJournalEntries")
async def list_entries(app: AppDep, session: SessionDep) -> list[JournalEntryView]:
    return await app.get_journal_entries(session)


@router.post(
    "",
    summary="Save journal entry",
    operation_id="saveJournalEntry",
    status_code=201,
    responses={
        400: {"model": ErrorResponse, "description": "Empty entry"},
        500: {"model": ErrorResponse, "description": "Could not save journal entry"},
    },
)
async def save_entry(request: SaveJournalEntryRequest, app: AppDep, session: SessionDep) -> JournalEntryView:
    return await app.save_journal_entry(session, request.entry)


@router.delete(
    "/{entry_id}",
    summary="Delete journal entry",
    operation_id="deleteJournalEntry",
    status_code=204,
    responses={
        404: {"model": ErrorResponse, "description": "Entry not found"},
        500: {"model": ErrorResponse, "description": "Could not delete journal entry"},
    },
)
async def delete_entry(entry_id: UUID, app: AppDep, session: SessionDep) -> None:
    await app.delete_journal_entry(session, entry_id)


@router.post(
    "/analysis",
    summary="Analyze journal entry",
    description="Summary, analysis and one piece of advice. Failures come back as a localized `error`.",
    operation_id="analyzeJournalEntry",
)
async def analyze_entry(
    request: JournalAnalysisInput, app: AppDep, session: SessionDep, language: LanguageDep
) -> ActionResult[JournalAnalysis]:
    return await app.analyze_journal_action(session, request, language)
