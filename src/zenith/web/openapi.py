from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from zenith.core.modules.session.models import SESSION_COOKIE


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Zenith API",
            version="0.1.0",
            summary="Meditation recommendations, habits, journaling and progress tracking",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "SessionCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": SESSION_COOKIE,
                "description": "Signed session token (HS256 JWT) set at login",
            },
        }

        # Apply security globally (overridden for the auth zone below)
        openapi_schema["security"] = [{"SessionCookie": []}]

        for path, path_item in openapi_schema["paths"].items():
            if not path.startswith("/auth"):
                continue
            for operation in path_item.values():
                operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Invalid email or password.", "type": "authentication_error"},
                {"message": "Habit 'walk' not found", "type": "not_found"},
                {"message": "Could not update habits.", "type": "persistence_error"},
            ]
        }
    }
