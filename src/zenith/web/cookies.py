from datetime import datetime

from fastapi import Response

from zenith.core.modules.session.models import SESSION_COOKIE


def set_session_cookie(response: Response, token: str, expires_at: datetime, secure: bool) -> None:
    """Store the session token in an httponly cookie that expires with the token."""
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        expires=expires_at,
        httponly=True,
        samesite="lax",
        secure=secure,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE, path="/")


def sets_session_cookie(response: Response) -> bool:
    """Whether the response already carries a Set-Cookie for the session."""
    prefix = f"{SESSION_COOKIE}=".encode("latin-1")
    return any(name == b"set-cookie" and value.startswith(prefix) for name, value in response.raw_headers)
