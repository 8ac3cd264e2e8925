"""SQLAlchemy model for threaded replies."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from forum_core.db.ids import new_id
from forum_core.db.session import Base
from forum_core.db.time import utcnow
from forum_core.models.status import ContentStatus, UserRole, enum_column


class Reply(Base):
    """Reply to a post, optionally nested under another reply.

    Top-level replies have ``parent_id = NULL``. Nesting depth is not
    limited, and deleting a reply leaves its children in place.
    """

    __tablename__ = "forum_reply"
    __table_args__ = (
        Index("ix_forum_reply_post_parent_status", "post_id", "parent_id", "status"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("forum_post.id", ondelete="CASCADE"),
        nullable=False,
    )
    parent_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("forum_reply.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    author_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("forum_user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_name: Mapped[str] = mapped_column(Text, nullable=False)
    author_avatar: Mapped[str | None] = mapped_column(Text, nullable=True)
    author_role: Mapped[UserRole] = mapped_column(enum_column(UserRole), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Set once at creation: the reply was written by the post's author.
    is_author: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[ContentStatus] = mapped_column(
        enum_column(ContentStatus), nullable=False, default=ContentStatus.PUBLISHED
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
