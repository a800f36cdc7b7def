import structlog
from fastapi import Request
from fastapi.responses import JSONResponse, Response

from zenith.errors import (
    AccessDeniedError,
    AuthenticationError,
    NotFoundError,
    PersistenceError,
    UserError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

# Checked in order; first match wins
USER_ERROR_STATUS: list[tuple[type[UserError], int, str]] = [
    (AuthenticationError, 401, "authentication_error"),
    (AccessDeniedError, 403, "access_denied"),
    (NotFoundError, 404, "not_found"),
    (ValidationError, 400, "validation_error"),
    (PersistenceError, 500, "persistence_error"),
]


def create_json_error_response(status_code: int, message: str, error_type: str) -> JSONResponse:
    """`{message, type}` body; `type` is for machine parsing."""
    return JSONResponse(status_code=status_code, content={"message": message, "type": error_type})


async def user_error_handler(request: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses; the message is safe to show."""
    status_code, error_type = 400, "bad_request"
    for error_class, code, name in USER_ERROR_STATUS:
        if isinstance(exc, error_class):
            status_code, error_type = code, name
            break

    if status_code >= 500:  # noqa: PLR2004
        logger.warning("request_failed", path=request.url.path, error_type=error_type, cause=repr(exc.__cause__))
    return create_json_error_response(status_code, str(exc), error_type)


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("unexpected_error", path=request.url.path, error=str(exc))
    return create_json_error_response(500, "An unexpected error occurred.", "internal_server_error")
