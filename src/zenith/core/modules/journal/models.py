from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from zenith.core.db import MongoModel
from zenith.utils import now


class JournalEntry(MongoModel):
    """Journal entry of a user.

    Indexed on (user_id, date desc).
    """

    user_id: UUID
    entry: str
    date: datetime = Field(default_factory=now)


class JournalEntryView(BaseModel):
    """Journal entry (API representation)."""

    id: UUID = Field(..., description="Entry ID")
    date: datetime = Field(..., description="When the entry was written")
    entry: str = Field(..., description="Entry text")

    @classmethod
    def from_domain(cls, entry: JournalEntry) -> "JournalEntryView":
        return cls(id=entry.id, date=entry.date, entry=entry.entry)
