from datetime import datetime
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from zenith.core.core import Service
from zenith.core.modules.journal.models import JournalEntry
from zenith.errors import NotFoundError, PersistenceError, ValidationError
from zenith.utils import now

logger = structlog.get_logger(__name__)

MAX_ENTRY_LENGTH = 20_000


class JournalService(Service):
    """Manages journal entries, newest first."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("journal_entries")

    async def on_start(self) -> None:
        await self._collection.create_index([("user_id", 1), ("date", -1)])

    async def get_journal_entries(self, user_id: UUID) -> list[JournalEntry]:
        try:
            cursor = self._collection.find({"user_id": user_id}).sort("date", -1)
            return await JournalEntry.list_cursor(cursor)
        except PyMongoError:
            logger.exception("journal_fetch_failed", user_id=user_id)
            return []

    async def save_journal_entry(self, user_id: UUID, text: str, date: datetime | None = None) -> JournalEntry:
        if not text.strip():
            raise ValidationError("Entry cannot be empty.")
        if len(text) > MAX_ENTRY_LENGTH:
            raise ValidationError(f"Entry cannot be longer than {MAX_ENTRY_LENGTH} characters.")

        entry = JournalEntry(user_id=user_id, entry=text, date=date or now())
        try:
            await self._collection.insert_one(entry.to_mongo())
        except PyMongoError as e:
            logger.exception("journal_save_failed", user_id=user_id)
            raise PersistenceError("Could not save journal entry.") from e
        return entry

    async def delete_journal_entry(self, user_id: UUID, entry_id: UUID) -> None:
        try:
            result = await self._collection.delete_one({"_id": entry_id, "user_id": user_id})
        except PyMongoError as e:
            logger.exception("journal_delete_failed", user_id=user_id, entry_id=entry_id)
            raise PersistenceError("Could not delete journal entry.") from e
        if result.deleted_count == 0:
            raise NotFoundError(f"Journal entry '{entry_id}' not found")
