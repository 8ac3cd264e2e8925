"""Per-user read markers for posts."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from forum_core.db.ids import new_id
from forum_core.db.session import Base
from forum_core.db.time import utcnow


class ReadRecord(Base):
    """Last time a user opened a post; one row per user and post."""

    __tablename__ = "forum_read"
    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="uq_forum_read_user_post"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("forum_user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("forum_post.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    read_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
