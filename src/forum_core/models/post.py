"""SQLAlchemy models for posts and their tag sets."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from forum_core.db.ids import new_id
from forum_core.db.session import Base
from forum_core.db.time import utcnow
from forum_core.models.status import (
    ContentStatus,
    RequiredPlan,
    UserRole,
    enum_column,
)

MAX_TAG_LENGTH = 50


def normalize_tags(tags: Iterable[str] | None) -> list[str]:
    """Return tags stripped, de-duplicated and sorted; blanks are dropped."""
    if not tags:
        return []
    cleaned = {tag.strip()[:MAX_TAG_LENGTH] for tag in tags}
    cleaned.discard("")
    return sorted(cleaned)


class Post(Base):
    """Top-level discussion thread.

    Author and category display fields are snapshots taken when the post is
    written; they are intentionally not joined live so a later rename does not
    rewrite history.
    """

    __tablename__ = "forum_post"
    __table_args__ = (
        Index("ix_forum_post_category_status", "category_id", "status"),
        Index("ix_forum_post_status_created", "status", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    author_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("forum_user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_name: Mapped[str] = mapped_column(Text, nullable=False)
    author_avatar: Mapped[str | None] = mapped_column(Text, nullable=True)
    author_role: Mapped[UserRole] = mapped_column(enum_column(UserRole), nullable=False)

    category_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("forum_category.id", ondelete="RESTRICT"),
        nullable=False,
    )
    category_name: Mapped[str] = mapped_column(String(100), nullable=False)

    required_plan: Mapped[RequiredPlan] = mapped_column(
        enum_column(RequiredPlan), nullable=False, default=RequiredPlan.FREE
    )

    # Denormalized counters, moved only through atomic UPDATE statements.
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reply_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    is_pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Locked posts accept no new replies.
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[ContentStatus] = mapped_column(
        enum_column(ContentStatus), nullable=False, default=ContentStatus.PUBLISHED
    )

    last_reply_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    tag_rows: Mapped[list[PostTag]] = relationship(
        "PostTag",
        back_populates="post",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="PostTag.tag",
    )

    @property
    def tags(self) -> list[str]:
        """Return the post's tags in sorted order."""
        return sorted(row.tag for row in self.tag_rows)

    def replace_tags(self, tags: Iterable[str] | None) -> None:
        """Make the stored tag set equal to ``tags``, reusing unchanged rows."""
        wanted = set(normalize_tags(tags))
        kept = [row for row in self.tag_rows if row.tag in wanted]
        present = {row.tag for row in kept}
        kept.extend(PostTag(tag=tag) for tag in sorted(wanted - present))
        self.tag_rows = kept


class PostTag(Base):
    """One tag attached to a post; the composite key keeps the set unique."""

    __tablename__ = "forum_post_tag"

    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("forum_post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag: Mapped[str] = mapped_column(String(MAX_TAG_LENGTH), primary_key=True, index=True)

    post: Mapped[Post] = relationship("Post", back_populates="tag_rows")
