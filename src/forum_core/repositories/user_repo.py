"""Read-only access to identity snapshot rows."""
from __future__ import annotations

from sqlalchemy.orm import Session

from forum_core.models.user import User

__all__ = ["UserRepository"]


class UserRepository:
    """Lookups against the identity snapshot table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        return self.session.get(User, user_id)
