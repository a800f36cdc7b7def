"""Signed session tokens (JWT, HS256)."""

from collections.abc import Sequence

import jwt
import pydantic

from zenith.core.modules.session.models import SessionPayload
from zenith.errors import InvalidSessionError

ALLOWED_ALGORITHMS = ("HS256",)
REQUIRED_CLAIMS = ["sub", "iat", "exp"]


def create_session_token(payload: SessionPayload, secret_key: str, algorithm: str = "HS256") -> str:
    """Sign the payload into a compact JWT."""
    return jwt.encode(payload.to_claims(), secret_key, algorithm=algorithm)


def verify_session_token(token: str, secret_key: str, algorithms: Sequence[str] = ALLOWED_ALGORITHMS) -> SessionPayload:
    """Verify signature, algorithm and expiry and return the payload.

    Raises:
        InvalidSessionError: for a bad signature, expired or malformed token,
            a disallowed algorithm, or missing claims.
    """
    try:
        claims = jwt.decode(token, secret_key, algorithms=list(algorithms), options={"require": REQUIRED_CLAIMS})
        return SessionPayload.from_claims(claims)
    except jwt.PyJWTError as e:
        raise InvalidSessionError(str(e)) from e
    except (pydantic.ValidationError, TypeError, ValueError, OverflowError) as e:
        raise InvalidSessionError(f"Malformed session claims: {e}") from e
