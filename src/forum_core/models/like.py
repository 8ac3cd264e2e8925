"""Models capturing like interactions on posts and replies."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from forum_core.db.ids import new_id
from forum_core.db.session import Base
from forum_core.db.time import utcnow
from forum_core.models.status import TargetType, enum_column


class Like(Base):
    """Per-user like on a post or reply.

    ``target_id`` is polymorphic over posts and replies, so it carries no
    foreign key; ``target_type`` says which table it points at.
    """

    __tablename__ = "forum_like"
    __table_args__ = (
        # At most one like per user and target; this is what serializes toggles.
        UniqueConstraint("user_id", "target_id", "target_type", name="uq_forum_like_user_target"),
        Index("ix_forum_like_target", "target_type", "target_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("forum_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    target_id: Mapped[str] = mapped_column(String(36), nullable=False)
    target_type: Mapped[TargetType] = mapped_column(enum_column(TargetType), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
