"""Bearer token helpers for resolving the calling actor."""
from __future__ import annotations

from datetime import timedelta

from jose import jwt

from forum_core.core.settings import settings
from forum_core.db.time import utcnow


def create_access_token(user_id: str, *, expires_minutes: int = 60) -> str:
    """Issue a signed token whose subject is ``user_id``.

    Token issuance belongs to the identity service; this helper exists for
    tooling and tests that need a valid bearer token.
    """
    expire = utcnow() + timedelta(minutes=expires_minutes)
    payload = {"sub": user_id, "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_subject(token: str) -> str | None:
    """Return the ``sub`` claim of a valid token.

    Raises:
        jose.JWTError: If the token signature or expiry is invalid.
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    subject = payload.get("sub")
    return str(subject) if subject is not None else None
