"""Identity snapshot rows provided by the identity service."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from forum_core.db.ids import new_id
from forum_core.db.session import Base
from forum_core.db.time import utcnow
from forum_core.models.status import UserRole, enum_column


class User(Base):
    """Author record the forum reads but never writes.

    Authentication lives elsewhere; the forum only checks that an author
    exists before snapshotting its display fields onto new content.
    """

    __tablename__ = "forum_user"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    display_name: Mapped[str] = mapped_column(Text, nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    role: Mapped[UserRole] = mapped_column(
        enum_column(UserRole), nullable=False, default=UserRole.USER
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
