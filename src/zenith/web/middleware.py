"""Session verification and redirect policy, run before every route."""

from collections.abc import Sequence
from dataclasses import dataclass

import structlog
from fastapi import Request, Response
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from zenith.core.modules.session.models import SESSION_COOKIE, SessionPayload
from zenith.core.modules.session.tokens import ALLOWED_ALGORITHMS, verify_session_token
from zenith.errors import InvalidSessionError
from zenith.web.cookies import clear_session_cookie, sets_session_cookie
from zenith.web.routes import DASHBOARD_PATH, LOGIN_PATH, is_auth_path, is_middleware_exempt

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SessionDecision:
    """What to do with a request.

    `redirect_to` None means pass the request through.
    """

    redirect_to: str | None = None
    clear_cookie: bool = False
    session: SessionPayload | None = None


def decide(path: str, token: str | None, secret_key: str, algorithms: Sequence[str] = ALLOWED_ALGORITHMS) -> SessionDecision:
    """Redirect policy for a request path and optional session cookie value.

    - no cookie: auth paths pass, everything else goes to the login page
    - valid cookie: auth paths go to the dashboard, everything else passes
    - invalid cookie: the cookie is cleared; auth paths pass (no redirect
      loop), everything else goes to the login page
    """
    auth_path = is_auth_path(path)
    if not token:
        return SessionDecision() if auth_path else SessionDecision(redirect_to=LOGIN_PATH)

    try:
        session = verify_session_token(token, secret_key, algorithms)
    except InvalidSessionError as e:
        logger.debug("session_invalid", path=path, error=str(e))
        if auth_path:
            return SessionDecision(clear_cookie=True)
        return SessionDecision(redirect_to=LOGIN_PATH, clear_cookie=True)

    if auth_path:
        return SessionDecision(redirect_to=DASHBOARD_PATH, session=session)
    return SessionDecision(session=session)


class SessionRedirectMiddleware(BaseHTTPMiddleware):
    """Verify the `session` cookie and apply the redirect policy.

    On pass-through the verified payload is available as `request.state.session`.
    """

    def __init__(self, app: ASGIApp, secret_key: str, algorithms: Sequence[str] = ALLOWED_ALGORITHMS) -> None:
        super().__init__(app)
        self.secret_key = secret_key
        self.algorithms = tuple(algorithms)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if is_middleware_exempt(path):
            return await call_next(request)

        decision = decide(path, request.cookies.get(SESSION_COOKIE), self.secret_key, self.algorithms)

        if decision.redirect_to is not None:
            logger.debug("session_redirect", path=path, to=decision.redirect_to, clear_cookie=decision.clear_cookie)
            response: Response = RedirectResponse(url=decision.redirect_to)
        else:
            request.state.session = decision.session
            response = await call_next(request)

        # A route that just logged the user in has set a fresh cookie; keep it
        if decision.clear_cookie and not sets_session_cookie(response):
            clear_session_cookie(response)
        return response
