from pydantic import BaseModel, Field


class ActionResult[T](BaseModel):
    """Outcome of a user-triggered action whose failure is shown, not raised."""

    success: bool = Field(..., description="Whether the action succeeded")
    data: T | None = Field(None, description="Action payload on success")
    error: str | None = Field(None, description="Localized message on failure")

    @classmethod
    def ok(cls, data: T) -> "ActionResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ActionResult[T]":
        return cls(success=False, error=error)
