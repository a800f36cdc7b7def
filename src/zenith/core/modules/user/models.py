from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from zenith.core.db import MongoModel
from zenith.utils import now


class User(MongoModel):
    """User domain model with credentials."""

    email: str
    display_name: str
    password_hash: str  # bcrypt hash
    photo_url: str | None = None
    created_at: datetime = Field(default_factory=now)


class UserProfile(BaseModel):
    """User profile (API representation)."""

    uid: UUID = Field(..., description="User ID")
    display_name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    photo_url: str | None = Field(None, description="Profile photo URL")
    created_at: datetime | None = Field(None, description="Registration time")

    @classmethod
    def from_domain(cls, user: User) -> "UserProfile":
        """Create view model from domain model."""
        return cls(
            uid=user.id,
            display_name=user.display_name,
            email=user.email,
            photo_url=user.photo_url,
            created_at=user.created_at,
        )


class UserProfilePatch(BaseModel):
    """Partial profile update; only fields that are set are written."""

    display_name: str | None = Field(None, min_length=1, max_length=80, description="New display name")
