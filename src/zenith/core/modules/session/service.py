from datetime import timedelta
from typing import Any

import structlog

from zenith.core.core import Service
from zenith.core.modules.session.models import SessionPayload
from zenith.core.modules.session.tokens import create_session_token, verify_session_token
from zenith.core.modules.user.models import User
from zenith.errors import InvalidSessionError
from zenith.utils import now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Issues and verifies stateless session tokens."""

    def issue_session(self, user: User) -> tuple[str, SessionPayload]:
        """Create a session for the user, valid for `session_ttl_days`."""
        issued_at = now()
        payload = SessionPayload(
            uid=user.id,
            email=user.email,
            display_name=user.display_name,
            photo_url=user.photo_url,
            issued_at=issued_at,
            expires_at=issued_at + timedelta(days=self.core.config.session_ttl_days),
        )
        logger.debug("session_issued", user_id=user.id)
        return self._sign(payload), payload

    def refresh_session(self, session: SessionPayload, **changes: Any) -> tuple[str, SessionPayload]:
        """Re-issue the token with updated claims, keeping the original expiry."""
        payload = session.model_copy(update=changes)
        return self._sign(payload), payload

    def verify(self, token: str) -> SessionPayload:
        """Verify a token. Raises InvalidSessionError."""
        return verify_session_token(token, self.core.config.session_secret_key, [self.core.config.session_algorithm])

    def get_session(self, token: str | None) -> SessionPayload | None:
        """Return the verified payload, or None when absent or invalid."""
        if not token:
            return None
        try:
            return self.verify(token)
        except InvalidSessionError as e:
            logger.debug("session_invalid", error=str(e))
            return None

    def _sign(self, payload: SessionPayload) -> str:
        return create_session_token(payload, self.core.config.session_secret_key, self.core.config.session_algorithm)
