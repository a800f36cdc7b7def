"""Session token payload."""

from datetime import UTC, datetime
from typing import Any, Self
from uuid import UUID

from pydantic import BaseModel, Field

SESSION_COOKIE = "session"


class SessionPayload(BaseModel):
    """Claims carried by the signed `session` cookie.

    Maps to JWT claims: sub, email, name, picture, iat, exp.
    """

    uid: UUID = Field(..., description="User ID")
    email: str | None = Field(None, description="User email")
    display_name: str | None = Field(None, description="Display name")
    photo_url: str | None = Field(None, description="Profile photo URL")
    issued_at: datetime = Field(..., description="When the token was issued")
    expires_at: datetime = Field(..., description="When the token stops being valid")

    def to_claims(self) -> dict[str, Any]:
        return {
            "sub": str(self.uid),
            "email": self.email,
            "name": self.display_name,
            "picture": self.photo_url,
            "iat": self.issued_at,
            "exp": self.expires_at,
        }

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> Self:
        return cls(
            uid=claims["sub"],
            email=claims.get("email"),
            display_name=claims.get("name"),
            photo_url=claims.get("picture"),
            issued_at=datetime.fromtimestamp(claims["iat"], UTC),
            expires_at=datetime.fromtimestamp(claims["exp"], UTC),
        )
