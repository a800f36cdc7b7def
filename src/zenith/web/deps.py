from typing import Annotated, cast

from fastapi import Depends, Query, Request
from fastapi.security import APIKeyCookie

from zenith.app import App
from zenith.core.i18n import Language
from zenith.core.modules.session.models import SESSION_COOKIE, SessionPayload
from zenith.errors import AuthenticationError

# Security scheme (documents the cookie in OpenAPI)
cookie_scheme = APIKeyCookie(name=SESSION_COOKIE, auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_session(
    request: Request,
    app: Annotated[App, Depends(get_app)],
    token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> SessionPayload:
    """Get the session verified by the middleware, or verify the cookie here."""
    session = getattr(request.state, "session", None)
    if isinstance(session, SessionPayload):
        return session

    session = app.get_session(token_cookie)
    if session is None:
        raise AuthenticationError
    return session


async def get_language(
    request: Request,
    app: Annotated[App, Depends(get_app)],
    lang: Annotated[Language | None, Query(description="Response language; defaults to Accept-Language")] = None,
) -> Language:
    if lang is not None:
        return lang
    default = Language(app.config.default_language)
    return Language.parse(request.headers.get("accept-language"), default)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
SessionDep = Annotated[SessionPayload, Depends(get_session)]
LanguageDep = Annotated[Language, Depends(get_language)]
