"""The authenticated caller as handed over by the identity service."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from forum_core.models.status import UserRole
from forum_core.models.user import User


class Actor(BaseModel):
    """Already-authenticated user performing an operation."""

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    avatar_url: str | None = None
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def owns(self, author_id: str) -> bool:
        """Return True if the actor may mutate content written by ``author_id``."""
        return self.is_admin or self.id == author_id

    @classmethod
    def from_user(cls, user: User) -> Actor:
        return cls(
            id=user.id,
            display_name=user.display_name,
            avatar_url=user.avatar_url,
            role=user.role,
        )
